"""
This submodule contains search and free-form queries.
"""
import re
from .excs import GatewayError
from .response import Selector

__all__ = [
    'Query',
]

def _leading_float(version):
    """'1.7.0-alpha' -> 1.7; 0.0 if there's no number at all."""
    match = re.match(r'\s*(\d+(?:\.\d+)?)', version or '')
    return float(match.group(1)) if match else 0.0

class Query(object):
    """Search, Semantic MediaWiki and custom queries. Mixed into Gateway."""

    def search(self, key, namespaces=None, limit=None, max_results=None,
               **evil):
        #pylint: disable=too-many-arguments
        """List the titles of pages whose content matches ``key``.

        ``namespaces`` is a namespace name or list of names to search
        (default: the main namespace only).
        ``limit`` is how many hits to ask for per request (default: the
        Gateway's ``limit``; note that Wikimedia wikis allow only 50 for
        normal users).
        ``max_results`` is the most titles to return in total (default: the
        Gateway's ``max_results``).
        """
        limit = self.limit if limit is None else limit
        max_results = self.max_results if max_results is None else max_results
        params = {
            'action': 'query',
            'list': 'search',
            'srwhat': 'text',
            'srsearch': key,
            'srlimit': limit,
        }
        if namespaces is not None:
            if isinstance(namespaces, str):
                namespaces = [namespaces]
            by_prefix = self.namespaces_by_prefix()
            params['srnamespace'] = '|'.join(
                str(by_prefix[ns]) for ns in namespaces if ns in by_prefix)
        params.update(evil)

        selector = Selector(('query-continue', 'search'), ('sroffset',))
        titles, offset = [], 0
        while True:
            params['sroffset'] = offset
            params['srlimit'] = min(limit, max_results - offset)
            doc, value = self.make_api_request(params, selector)
            titles.extend(p.get('title') for p in doc.iter('p'))
            if value is None or int(value) >= max_results:
                break
            offset = int(value)
        return titles

    def semantic_query(self, query, params=(), **evil):
        """Run a Semantic MediaWiki query.

        ``params`` is a list of extra parameters, e.g. 'mainlabel=Foo' or
        '?Place'.

        Returns the root element for SMW 1.7 and later, and the result as an
        HTML string for older versions.
        """
        smw_version = self.extensions().get('Semantic MediaWiki')
        if not smw_version:
            raise GatewayError('Semantic MediaWiki extension not installed.')

        if _leading_float(smw_version) >= 1.7:
            form = {
                'action': 'ask',
                'query': '|'.join([query] + list(params)),
            }
            form.update(evil)
            return self.send_request(form)

        form = {
            'action': 'parse',
            'prop': 'text',
            'text': '{{#ask:' + '|'.join([query, 'format=list']
                                         + list(params)) + '}}',
        }
        form.update(evil)
        return self.send_request(form).find('parse/text').text

    def custom_query(self, **options):
        """Make a custom ``action=query`` request.

        Returns the ``query`` element of the result.

        .. code-block:: python

            def creation_time(pagename):
                res = gateway.custom_query(prop='revisions',
                                           titles=pagename,
                                           rvprop='timestamp',
                                           rvdir='newer',
                                           rvlimit=1)
                return res.find('pages/page/revisions/rev').get('timestamp')
        """
        params = {str(k): str(v) for k, v in options.items()}
        params['action'] = 'query'
        return self.send_request(params).find('query')
