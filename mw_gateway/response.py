"""
mw_gateway.response - Parsing API XML.

``parse`` turns a RawResponse into a Response holding the XML root element
and whatever error or warnings the API sent alongside it. It does not
decide what to do about them; that is up to the Gateway.
"""
import logging
from collections import namedtuple
from xml.etree import ElementTree
from .excs import TransportError

__all__ = [
    'ROOT_TAGS',
    'Response',
    'Selector',
    'parse',
]

log = logging.getLogger(__name__)

#: ``api`` for normal responses, ``mediawiki`` for exports. Exports carry an
#: XML namespace, so only the local part of the tag is compared.
ROOT_TAGS = ('api', 'mediawiki')

ApiErrorInfo = namedtuple('ApiErrorInfo', 'code info')

class Response(object):
    """A parsed API response.

    ``doc`` is the root Element, ``error`` an ApiErrorInfo or None and
    ``warnings`` a list of warning texts (empty if there were none).
    """
    def __init__(self, doc, error=None, warnings=()):
        self.doc = doc
        self.error = error
        self.warnings = list(warnings)

    def __repr__(self):
        return '<Response {} error={!r} warnings={!r}>'.format(
            self.doc.tag, self.error, self.warnings)

def parse(raw):
    """Parse the body of a RawResponse.

    Raises TransportError if the body is not XML or not MediaWiki API XML.
    """
    body = raw.body
    if isinstance(body, bytes):
        body = body.decode('utf-8', 'replace')
    try:
        doc = ElementTree.fromstring(body)
    except ElementTree.ParseError:
        raise TransportError('Response is not XML. Are you sure you are '
                             'pointing to api.php?', raw.status)

    log.debug('RES: %s', body)

    if doc.tag.rsplit('}', 1)[-1] not in ROOT_TAGS:
        raise TransportError('Response does not contain MediaWiki API XML: '
                             + body, raw.status)

    error = doc.find('error')
    if error is not None:
        error = ApiErrorInfo(error.get('code'), error.get('info'))

    warnings = doc.find('warnings')
    if warnings is not None:
        warnings = [(child.text or '').strip() for child in warnings]

    return Response(doc, error, warnings or ())

class Selector(object):
    """Pick a value out of a document by walking child elements by name,
    then taking the first of several attributes that is present.

    .. code-block:: python

        >>> sel = Selector(('query-continue', 'allpages'),
        ...                ('apfrom', 'apcontinue'))
        >>> sel(doc)
        'Main Page'
    """
    def __init__(self, path, attributes):
        self.path = tuple(path)
        self.attributes = tuple(attributes)

    def __repr__(self):
        return '<Selector {}@{}>'.format('/'.join(self.path),
                                         '|'.join(self.attributes))

    @classmethod
    def for_list(cls, list_name, param):
        """Continuation selector for a ``list=`` query continued by ``param``.

        MediaWiki names the continuation attribute either ``XXfrom`` or
        ``XXcontinue``, where XX is the list's two-letter prefix.
        """
        prefix = param[:2]
        return cls(('query-continue', list_name),
                   (prefix + 'from', prefix + 'continue'))

    def __call__(self, doc):
        """Return the selected value, or None."""
        element = doc
        for name in self.path:
            element = element.find(name)
            if element is None:
                return None
        for name in self.attributes:
            value = element.get(name)
            if value is not None:
                return value
        return None
