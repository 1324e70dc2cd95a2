"""
This submodule contains logging in and user management.
"""
from itertools import islice
from .excs import ApiError, AuthError

__all__ = [
    'Users',
]

class Users(object):
    """Login, accounts, preferences and user rights. Mixed into Gateway."""

    def login(self, username, password, domain='local', **evil):
        """Log in with a username and password; store cookies.

        ``domain`` is for authentication plugin logins (e.g. LDAP).

        Raises AuthError if login fails.
        """
        params = {
            'action': 'login',
            'lgname': username,
            'lgpassword': password,
            'lgdomain': domain,
        }
        params.update(evil)
        doc = self.send_request(params)
        self.username = username
        return doc.find('login')

    def users(self, **evil):
        """List user names, e.g. ``users(augroup='sysop')``.

        See https://www.mediawiki.org/wiki/API:Allusers
        """
        params = {'aulimit': self.limit}
        params.update(evil)
        return list(self.iterate_query('allusers', 'u', 'name', 'aufrom',
                                       params))

    def contributions(self, user, count=None, **evil):
        """Get a user's contributions as a list of dicts of item
        attributes (see https://www.mediawiki.org/wiki/API:Usercontribs).

        ``count`` is the most contributions to fetch; None for all.
        """
        params = {
            'ucuser': user,
            'uclimit': self.limit,
        }
        params.update(evil)
        items = self.iterate_query('usercontribs', 'item', None, 'uccontinue',
                                   params)
        return [dict(item.attrib) for item in islice(items, count)]

    def email_user(self, user, subject, text, **evil):
        """Send e-mail to a user (name only: 'Bob', not 'User:Bob').

        Returns True if the mail was sent. The API raises
        ApiError.noemail if the user has no confirmed address.
        """
        params = {
            'action': 'emailuser',
            'target': user,
            'subject': subject,
            'text': text,
            'token': self.get_token('email', 'User:' + user),
        }
        params.update(evil)
        doc = self.send_request(params)
        return doc.find('emailuser').get('result') == 'Success'

    def create_account(self, **options):
        """Create a new account.

        ``options`` are the API parameters, see
        https://www.mediawiki.org/wiki/API:Account_creation#Parameters
        """
        params = dict(options)
        params['action'] = 'createaccount'
        return self.send_request(params)

    def options(self, changes=None, optionname=None, optionvalue=None,
                reset=False, **evil):
        """Set preferences of the logged-in user.

        ``changes`` is a dict of preference names and values.
        ``optionname``/``optionvalue`` set a single preference whose value
        may contain '|'.
        ``reset`` resets all preferences to the site defaults.
        """
        params = {
            'action': 'options',
            'token': self.get_options_token(),
        }
        if changes:
            params['change'] = '|'.join('{}={}'.format(k, v)
                                        for k, v in changes.items())
        if optionname:
            params[optionname] = optionvalue
        if reset:
            params['reset'] = True
        params.update(evil)
        return self.send_request(params)

    def set_groups(self, user, groups_to_add=(), groups_to_remove=(),
                   comment='', **evil):
        """Add a user to and/or remove them from groups.

        The groups are lists, or a string for a single group.
        """
        token = self.get_userrights_token(user)
        return self._userrights(user, token, groups_to_add, groups_to_remove,
                                comment, **evil)

    def get_userrights_token(self, user):
        """Fetch a token to change ``user``'s groups.

        Raises ApiError.invaliduser if there is no such user and AuthError
        if we may not change their groups.
        """
        doc = self.send_request({
            'action': 'query',
            'list': 'users',
            'ustoken': 'userrights',
            'ususers': user,
        })
        element = doc.find('query/users/user')
        token = element.get('userrightstoken') if element is not None else None
        if not token:
            if element is None or element.get('missing') is not None:
                raise ApiError.of('invaliduser', "User '{}' was not found "
                                  '(get_userrights_token)'.format(user))
            raise AuthError("User '{}' is not permitted to perform this "
                            'operation: get_userrights_token'.format(
                                self.username))
        return token

    def get_options_token(self):
        """Fetch a token to change preferences."""
        doc = self.send_request({'action': 'tokens', 'type': 'options'})
        tokens = doc.find('tokens')
        token = tokens.get('optionstoken') if tokens is not None else None
        if not token:
            raise AuthError('User is not permitted to perform this '
                            'operation: options')
        return token

    def _userrights(self, user, token, groups_to_add, groups_to_remove,
                    reason, **evil):
        #pylint: disable=too-many-arguments
        """Change a user's groups with an already fetched token."""
        if not isinstance(groups_to_add, str):
            groups_to_add = '|'.join(groups_to_add)
        if not isinstance(groups_to_remove, str):
            groups_to_remove = '|'.join(groups_to_remove)
        params = {
            'action': 'userrights',
            'user': user,
            'token': token,
            'add': groups_to_add,
            'remove': groups_to_remove,
            'reason': reason,
        }
        params.update(evil)
        return self.send_request(params)
