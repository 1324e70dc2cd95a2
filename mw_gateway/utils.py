"""Small helpers that don't need a Gateway."""
from urllib.parse import quote_plus, unquote_plus

__version__ = '0.3.0'

def version():
    """Return the version of mw_gateway."""
    return __version__

def wiki_to_uri(wiki):
    """Convert a page name in wiki format ("getting there & away") to a
    URI-safe one ("getting_there_%26_away"), taking care not to mangle
    slashes. Returns None for None.
    """
    if wiki is None:
        return None
    return '/'.join(quote_plus(chunk.replace(' ', '_'))
                    for chunk in str(wiki).split('/'))

def uri_to_wiki(uri):
    """Convert a URI-safe page name back into wiki format."""
    if uri is None:
        return None
    return unquote_plus(uri).replace('_', ' ')
