"""
See the Gateway docstrings.
"""
#pylint: disable=too-many-instance-attributes
import enum
import logging
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from .excs import ApiError, AuthError, RetriesExceededError, TransportError
from .form import Form
from .response import Selector, parse
from .transport import Transport
from .utils import __version__
from .pages import Pages
from .files import Files
from .query import Query
from .site import Site
from .users import Users

__all__ = [
    'USER_AGENT',
    'Action',
    'Gateway',
]

USER_AGENT = 'mw_gateway/' + __version__

log = logging.getLogger(__name__)

class Action(enum.Enum):
    """Actions answered with a token to send back before they succeed."""
    LOGIN = 'login'
    CREATEACCOUNT = 'createaccount'

    @classmethod
    def of(cls, action):
        """Return the Action for an ``action=`` value, or None."""
        try:
            return cls(action)
        except ValueError:
            return None

    @property
    def token_field(self):
        """The form field the returned token goes into."""
        if self is Action.LOGIN:
            return 'lgtoken'
        return 'token'

    @property
    def failure(self):
        """What to call it when the server says no."""
        if self is Action.LOGIN:
            return 'Login failed'
        return 'Account creation failed'

class _Attempt(object): #pylint: disable=too-few-public-methods
    """State of one logical request: the form to send, how many tries it
    has used up and the warnings collected so far.
    """
    def __init__(self, form):
        self.form = form
        self.tries = 0
        self.warnings = []

def _retry_after(headers):
    """Seconds the server asked us to wait, or 0."""
    value = headers.get('Retry-After')
    if not value:
        return 0
    try:
        return max(0, int(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return 0
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0, int((when - datetime.now(timezone.utc)).total_seconds()))

class Gateway(Pages, Files, Query, Site, Users):
    #pylint: disable=too-many-arguments
    """A connection to one MediaWiki API. Contains the API actions as
    methods.
    """

    def __init__(self, url, user_agent=None, bot=False, ignorewarnings=False,
                 limit=500, max_results=500, maxlag=5, retry_count=3,
                 retry_delay=10, timeout=None, session=None, logger=None):
        """Set up a Gateway for the API at ``url``
        (e.g. 'https://en.wikipedia.org/w/api.php').

        ``user_agent`` is prepended to the library's own User-Agent.
        ``bot`` marks edits with the bot flag.
        ``ignorewarnings`` logs API warnings and invalid page titles
        instead of raising ApiError('warning').
        ``limit`` is the number of results asked for per list request,
        ``max_results`` the most results ``search`` will return.
        ``maxlag`` is the maximum server lag in seconds we accept.
        ``retry_count`` is how many times to try (the original request
        included) when the server is unavailable or lagged, waiting
        ``retry_delay`` seconds, or longer if it sends Retry-After.
        ``timeout`` is passed to requests for every round trip.
        ``session`` is an optional requests.Session to send with. Its cookie
        policy is replaced with one that stores nothing: the Gateway keeps
        its own ``cookies`` and sends them with every request.
        """
        self.wiki_url = url
        self.bot = bot
        self.ignorewarnings = ignorewarnings
        self.limit = limit
        self.max_results = max_results
        self.maxlag = maxlag
        self.retry_count = retry_count
        self.retry_delay = retry_delay
        self.log = logger if logger is not None else log
        self.cookies = {}
        self.headers = {
            'User-Agent': ' '.join(filter(None, (user_agent, USER_AGENT))),
            'Accept-Encoding': 'gzip',
        }
        self.username = None
        self._transport = Transport(session, timeout)

    def __repr__(self):
        """Represent a Gateway."""
        return '<Gateway at {url}>'.format(url=self.wiki_url)

    __str__ = __repr__

    @property
    def session(self):
        """The requests.Session used to talk to the wiki."""
        return self._transport.session

    def send_request(self, form, continuation=None):
        """Make a request to the API and return the XML root element.

        ``form`` is a Form or mapping of API parameters.
        """
        return self.make_api_request(form, continuation)[0]

    def make_api_request(self, form, continuation=None):
        """Make a request to the API.

        ``continuation`` is an optional Selector picking the query-continue
        value out of the response.

        Returns (root element, continuation value or None).
        """
        form = Form(form)
        form['format'] = 'xml'
        form['maxlag'] = self.maxlag
        attempt = _Attempt(form)

        while True:
            raw = self._transport.execute(self.wiki_url, attempt.form,
                                          self.headers, self.cookies)

            if raw.status == 503:
                self._retry(attempt, '503 Service Unavailable: '
                            + raw.body.decode('utf-8', 'replace'), raw)
                continue

            if not 200 <= raw.status < 300:
                raise TransportError('Bad response: {} {}'.format(
                    raw.status, raw.body.decode('utf-8', 'replace')),
                                     raw.status)

            response = parse(raw)

            if response.error is not None:
                if response.error.code == 'maxlag':
                    self._retry(attempt, 'Maxlag exceeded: '
                                + (response.error.info or ''), raw)
                    continue
                raise ApiError.of(*response.error)

            if response.warnings:
                self._warning('API warning: ' + ', '.join(response.warnings))

            doc = response.doc
            action = Action.of(attempt.form.text('action'))
            if action is not None:
                element = doc.find(action.value)
                result = element.get('result', '') if element is not None else ''
                self.cookies.update(raw.cookies)
                if result.lower() == 'success':
                    return doc, None
                if result.lower() == 'needtoken' and element.get('token') \
                       and action.token_field not in attempt.form:
                    attempt.form = attempt.form.merged(
                        {action.token_field: element.get('token')})
                    continue
                raise AuthError('{}: {}'.format(action.failure, result))

            if continuation is not None and doc.find('query-continue') is not None:
                return doc, continuation(doc)
            return doc, None

    def _retry(self, attempt, message, raw):
        """Note a failed try; wait before the next or give up."""
        attempt.warnings.append(message)
        attempt.tries += 1
        if attempt.tries >= self.retry_count:
            raise RetriesExceededError(attempt.warnings)
        delay = max(self.retry_delay, _retry_after(raw.headers))
        self.log.warning('%s.  Retry in %d seconds.', message, delay)
        time.sleep(delay)

    def iterate_query(self, list_name, result_tag, attr, param, options=None):
        """Generate the results of a ``list=`` query, following
        query-continue until the server stops sending it.

        ``result_tag`` is the tag of result elements under
        ``query/<list_name>``. If ``attr`` is given its value is generated
        for each result, otherwise the Element itself. ``param`` is the
        parameter that continues the query.
        """
        selector = Selector.for_list(list_name, param)
        path = 'query/{}//{}'.format(list_name, result_tag)
        form = Form(options or {}, action='query', list=list_name)

        while True:
            doc, value = self.make_api_request(form, selector)
            for element in doc.iterfind(path):
                yield element.get(attr) if attr else element
            if value is None:
                break
            form[param] = value

    def get_token(self, kind, page_titles):
        """Fetch a token of ``kind`` ('edit', 'delete', 'import', 'move',
        'protect', 'email', ...) for ``page_titles``.

        Raises AuthError if the current user can't have one.
        """
        doc = self.send_request(Form(
            action='query',
            prop='info',
            intoken=kind,
            titles=page_titles
        ))
        page = doc.find('query/pages/page')
        token = page.get(kind + 'token') if page is not None else None
        if not token:
            raise AuthError('User is not permitted to perform this '
                            'operation: ' + kind)
        return token

    def _valid_page(self, page):
        """Whether ``page`` is an existing page with a valid title."""
        if page is None or page.get('missing') is not None:
            return False
        if page.get('invalid') is not None:
            return self._warning("Invalid title '{}'".format(page.get('title')))
        return True

    def _warning(self, msg):
        """Raise ApiError('warning'), or just log it if ignoring warnings."""
        if not self.ignorewarnings:
            raise ApiError.of('warning', msg)
        self.log.warning(msg)
        return False
