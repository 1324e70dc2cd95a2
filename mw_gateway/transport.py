"""
mw_gateway.transport - One HTTP round trip per API call.
"""
import logging
from collections import namedtuple
from http.cookiejar import DefaultCookiePolicy
import requests
from .excs import TransportError

__all__ = [
    'RawResponse',
    'Transport',
]

log = logging.getLogger(__name__)

RawResponse = namedtuple('RawResponse', 'status headers cookies body')

class Transport(object):
    """Send forms to the API with requests.

    Queries are sent as GET (and follow redirects), everything else as POST.
    The session never stores cookies itself, including a session passed in,
    whose cookie policy is replaced. The caller passes the cookies to send
    with every request and picks the new ones out of the response.
    """
    def __init__(self, session=None, timeout=None):
        self.session = session if session is not None else requests.session()
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.timeout = timeout

    def __repr__(self):
        return '<Transport timeout={!r}>'.format(self.timeout)

    def execute(self, url, form, headers, cookies=None):
        """Send ``form`` to ``url``. Returns a RawResponse.

        Raises TransportError if no response could be obtained at all.
        """
        data, files = form.to_wire()
        method = 'GET' if form.text('action') == 'query' else 'POST'
        log.debug('%s: %r, %r', method, data, cookies)
        try:
            if method == 'GET':
                response = self.session.get(url, params=data, headers=headers,
                                            cookies=cookies,
                                            timeout=self.timeout,
                                            allow_redirects=True)
            else:
                response = self.session.post(url, data=data,
                                             files=files or None,
                                             headers=headers,
                                             cookies=cookies,
                                             timeout=self.timeout,
                                             allow_redirects=False)
        except requests.exceptions.RequestException as exc:
            raise TransportError('{} {} failed: {}'.format(method, url, exc))
        return RawResponse(
            response.status_code,
            response.headers,
            requests.utils.dict_from_cookiejar(response.cookies),
            response.content
        )

    def fetch(self, url):
        """Plain GET of ``url``, for downloading files. Returns bytes."""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise TransportError('GET {} failed: {}'.format(url, exc),
                                 getattr(exc.response, 'status_code', None))
        return response.content
