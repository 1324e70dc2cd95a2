"""
mw_gateway.excs - Exceptions raised by the Gateway.

To catch a specific API error code:

..code-block:: python

    try:
        gateway.create('Main Page', 'text')
    except mw.ApiError.articleexists as exc:
        print('Page already exists:', exc.info)

Any attribute of ``ApiError`` that is not already defined is a subclass of
it named after the error code, so ``except mw.ApiError.protectedpage``
catches exactly that code, while ``except mw.ApiError`` catches all of them.

Note that ``AuthError`` does NOT inherit from ApiError, only from
GatewayError.
"""

__all__ = [
    'GatewayError',
    'TransportError',
    'ApiError',
    'AuthError',
    'RetriesExceededError',
]

class _MetaGetattr(type):
    """Metaclass to provide __getattr__ on a class."""
    def __getattr__(cls, name):
        if name.startswith('_'):
            raise AttributeError(name)
        setattr(cls, name, type(name, (cls,), {}))
        return getattr(cls, name)

class GatewayError(Exception):
    """Base class for everything raised by a Gateway."""
    pass

class TransportError(GatewayError):
    """The HTTP round trip failed, or its body was not MediaWiki API XML.

    ``status`` is the HTTP status code when there was a response at all.
    """
    def __init__(self, message, status=None):
        super(TransportError, self).__init__(message)
        self.status = status

#pylint: disable=too-few-public-methods
class ApiError(GatewayError, metaclass=_MetaGetattr):
    """An error returned in-band by the wiki's API.

    Warnings also raise this with code 'warning', unless the Gateway was
    created with ``ignorewarnings=True``.
    """
    def __init__(self, code, info):
        super(ApiError, self).__init__(
            "API error: code '{}', info '{}'".format(code, info))
        self.code = code
        self.info = info

    @classmethod
    def of(cls, code, info):
        """Build the ApiError subclass named after ``code``."""
        sub = getattr(cls, code, None) if code else None
        if not (isinstance(sub, type) and issubclass(sub, cls)):
            sub = cls
        return sub(code, info)

class AuthError(GatewayError):
    """The user is not authorized to perform this operation.

    Also raised when login or account creation fails.
    """
    pass

class RetriesExceededError(GatewayError):
    """The server stayed unavailable (503 or maxlag) for every attempt."""
    def __init__(self, warnings):
        super(RetriesExceededError, self).__init__(
            'Retries exceeded: ' + '; '.join(warnings))
        self.warnings = list(warnings)
