"""
This submodule contains the page actions of the Gateway.
"""
#pylint: disable=too-many-arguments
from .excs import ApiError, AuthError
from .form import Flag

__all__ = [
    'Pages',
]

class Pages(object):
    """Reading, writing, moving and listing pages. Mixed into Gateway."""

    def get(self, page_title, **evil):
        """Fetch a page's wikitext. Does not follow redirects.

        Returns the content as a string, or None if the page does not exist.
        """
        params = {
            'action': 'query',
            'prop': 'revisions',
            'rvprop': 'content',
            'titles': page_title,
        }
        params.update(evil)
        page = self.send_request(params).find('query/pages/page')

        if not self._valid_page(page):
            return None
        rev = page.find('revisions/rev')
        return (rev.text if rev is not None else None) or ''

    def revision(self, page_title, **evil):
        """Fetch the latest revision ID of a page as a string.
        Does not follow redirects. None if the page does not exist.
        """
        params = {
            'action': 'query',
            'prop': 'revisions',
            'rvprop': 'ids',
            'rvlimit': 1,
            'titles': page_title,
        }
        params.update(evil)
        page = self.send_request(params).find('query/pages/page')

        if not self._valid_page(page):
            return None
        return page.find('revisions/rev').get('revid')

    def create(self, title, content, overwrite=False, summary='', token=None,
               minor=None, notminor=False, bot=False, section=None, **evil):
        """Create a new page, or overwrite an existing one.

        ``overwrite`` allows replacing an existing page; otherwise the API
        raises ApiError.articleexists.
        ``token`` reuses an edit token rather than fetching one (useful for
        bulk loads).
        ``minor`` marks the edit minor if True and major if False; by
        default the status is left alone. ``notminor`` also marks it major.
        ``bot`` marks the edit as a bot edit (as does the Gateway's ``bot``).
        """
        params = {
            'action': 'edit',
            'title': title,
            'text': content,
            'summary': summary or '',
            'token': token or self.get_token('edit', title),
        }
        if self.bot or bot:
            params.update({'bot': '1', 'assert': 'bot'})
        if minor:
            params['minor'] = '1'
        if minor is False or notminor:
            params['notminor'] = '1'
        if not overwrite:
            params['createonly'] = Flag()
        if section is not None:
            params['section'] = section
        params.update(evil)
        return self.send_request(params)

    def edit(self, title, content, **kwargs):
        """Like ``create``, but always overwrites existing pages
        (and creates them if they don't exist already).
        """
        kwargs.setdefault('overwrite', True)
        return self.create(title, content, **kwargs)

    def protect(self, title, protections, cascade=False, reason=None):
        """Protect or unprotect a page.

        ``protections`` is a dict, or a list of dicts, each with the keys
        ``action`` and ``group`` and optionally ``expiry`` (default never):

        .. code-block:: python

            gateway.protect('Main Page', [
                {'action': 'move', 'group': 'sysop', 'expiry': 'never'},
                {'action': 'edit', 'group': 'autoconfirmed',
                 'expiry': 'next Monday 16:04:57'},
            ], reason='awesomeness')
        """
        if isinstance(protections, dict):
            protections = [protections]
        elif not isinstance(protections, (list, tuple)):
            raise TypeError("Invalid type '{}' for protections".format(
                type(protections).__name__))

        levels, expiries = [], []
        for prt in protections:
            for opt in prt:
                if opt not in ('action', 'group', 'expiry'):
                    raise ValueError(
                        "Unknown option '{}' for protections".format(opt))
            for opt in ('action', 'group'):
                if opt not in prt:
                    raise ValueError(
                        "Missing required option '{}' for protections".format(opt))
            levels.append('{}={}'.format(prt['action'], prt['group']))
            expiries.append(str(prt.get('expiry', 'never')))

        params = {
            'action': 'protect',
            'title': title,
            'token': self.get_token('protect', title),
            'protections': '|'.join(levels),
            'expiry': '|'.join(expiries),
            'cascade': Flag() if cascade else None,
            'reason': reason or None,
        }
        return self.send_request(params)

    def move(self, from_title, to_title, reason=None, movesubpages=False,
             movetalk=False, noredirect=False, watch=False, unwatch=False):
        """Move a page to a new title.

        ``noredirect`` needs the 'suppressredirect' right; without it the
        wiki silently creates the redirect anyway.
        """
        params = {
            'action': 'move',
            'from': from_title,
            'to': to_title,
            'token': self.get_token('move', from_title),
            'reason': reason,
        }
        for name, value in (('movesubpages', movesubpages),
                            ('movetalk', movetalk),
                            ('noredirect', noredirect),
                            ('watch', watch),
                            ('unwatch', unwatch)):
            if value:
                params[name] = Flag()
        return self.send_request(params)

    def delete(self, title, **evil):
        """Delete one page. (The API cannot delete several at once.)"""
        params = {
            'action': 'delete',
            'title': title,
            'token': self.get_token('delete', title),
        }
        params.update(evil)
        return self.send_request(params)

    def undelete(self, title, **evil):
        """Undelete all revisions of a page.

        Returns the number of revisions undeleted, 0 if there was nothing
        to undelete.
        """
        token = self.get_undelete_token(title)
        if token is None:
            return 0
        params = {
            'action': 'undelete',
            'title': title,
            'token': token,
        }
        params.update(evil)
        doc = self.send_request(params)
        return int(doc.find('undelete').get('revisions', 0))

    def get_undelete_token(self, page_titles):
        """Fetch an undelete token for ``page_titles``.

        Returns None if there are no deleted revisions to restore.
        """
        doc = self.send_request({
            'action': 'query',
            'list': 'deletedrevs',
            'prop': 'info',
            'drprop': 'token',
            'titles': page_titles,
        })
        page = doc.find('query/deletedrevs/page')
        if page is None:
            return None
        token = page.get('token')
        if not token:
            raise AuthError('User is not permitted to perform this '
                            'operation: undelete')
        return token

    def list(self, key, **evil):
        """List page titles starting with ``key``.

        ``key`` may start with a namespace prefix ("Book:Ita"); otherwise
        the main namespace is listed.
        """
        namespace = 0
        if ':' in key:
            prefix, key = key.split(':', 1)
            namespace = self.namespaces_by_prefix().get(prefix, 0)

        params = {
            'apprefix': key,
            'apnamespace': namespace,
            'aplimit': self.limit,
        }
        params.update(evil)
        return list(self.iterate_query('allpages', 'p', 'title', 'apfrom',
                                       params))

    def category_members(self, category, **evil):
        """List the titles of pages in a category."""
        params = {
            'cmtitle': category,
            'cmlimit': self.limit,
        }
        params.update(evil)
        return list(self.iterate_query('categorymembers', 'cm', 'title',
                                       'cmcontinue', params))

    def backlinks(self, title, filter='all', **evil): #pylint: disable=redefined-builtin
        """List the titles of pages linking to ``title``.

        ``filter`` is 'all', 'redirects' or 'nonredirects'.
        """
        params = {
            'bltitle': title,
            'blfilterredir': filter,
            'bllimit': self.limit,
        }
        params.update(evil)
        return list(self.iterate_query('backlinks', 'bl', 'title',
                                       'blcontinue', params))

    def is_redirect(self, page_title):
        """Whether the page is a redirect. False if it doesn't exist."""
        page = self.send_request({
            'action': 'query',
            'prop': 'info',
            'titles': page_title,
        }).find('query/pages/page')

        return bool(self._valid_page(page)
                    and page.get('redirect') is not None)

    def langlinks(self, article_or_pageid, lllimit=500, **evil):
        """Get the interlanguage links of an article, following redirects.

        Returns a dict like {'id': 'Yerusalem', 'en': 'Jerusalem'}, or None
        if the article does not exist.
        """
        params = {
            'action': 'query',
            'prop': 'langlinks',
            'lllimit': lllimit,
            'redirects': Flag(),
        }
        if isinstance(article_or_pageid, int):
            params['pageids'] = article_or_pageid
        else:
            params['titles'] = article_or_pageid
        params.update(evil)

        doc = self.send_request(params)
        page = doc.find('query/pages/page')
        if not self._valid_page(page):
            return None
        if doc.find('query/redirects/r') is not None:
            return self.langlinks(int(page.get('pageid')), lllimit)
        return {ll.get('lang'): ll.text for ll in page.iterfind('langlinks/ll')}

    def langlink_for_lang(self, article_or_pageid, lang):
        """Return the title of the article in language ``lang``, if any."""
        return (self.langlinks(article_or_pageid) or {}).get(lang)

    def review(self, title, flags, comment='Reviewed by mw_gateway', **evil):
        """Review the current revision of an article
        (requires the FlaggedRevs extension).

        ``flags`` is a dict of flags and values,
        e.g. {'accuracy': '1', 'depth': '2'}.
        """
        revid = self.revision(title)
        if not revid:
            raise ApiError.of('missingtitle',
                              'Article {} not found'.format(title))
        params = {
            'action': 'review',
            'revid': revid,
            'token': self.get_token('edit', title),
            'comment': comment,
        }
        for key, value in flags.items():
            params['flag_' + key] = value
        params.update(evil)
        return self.send_request(params)
