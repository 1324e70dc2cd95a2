"""
A MediaWiki API client speaking XML over HTTP.

Wraps the MediaWiki web API (action=query, edit, upload, ...) so that each
API action is one method call, retries when the wiki is overloaded, follows
query continuation, and raises typed exceptions for API errors.

Requires the ``requests`` library.

http://www.mediawiki.org/

Installation
============

To install the latest development version::

    git clone <this repository>
    cd mw-gateway
    pip install -e .

Example Usage
=============

.. code-block:: python

    import mw_gateway as mw

Log in:

.. code-block:: python

    wp = mw.Gateway("https://en.wikipedia.org/w/api.php", "MyCoolBot/0.0.0")

    wp.login("ExampleBot", password)

Read and edit a page:

.. code-block:: python

    contents = wp.get("User:ExampleBot/sandbox")

    wp.edit("User:ExampleBot/sandbox", contents + "\\n This is a test!",
            summary="Made a test edit")

Create a page only if it doesn't exist yet:

.. code-block:: python

    try:
        wp.create("Sandbox", "Hello")
    except mw.ApiError.articleexists:
        print("Already there")

List pages in a category:

.. code-block:: python

    for title in wp.category_members("Category:Redirects"):
        print(title)

Follow any list query yourself:

.. code-block:: python

    for title in wp.iterate_query('allpages', 'p', 'title', 'apfrom',
                                  {'apnamespace': 4}):
        print(title)

MIT Licensed.
"""
from .utils import __version__
from .excs import (GatewayError, TransportError, ApiError, AuthError,
                   RetriesExceededError)
from .form import Form, Text, File, Flag
from .response import Selector
from .gateway import Gateway, Action, USER_AGENT

__all__ = [
    '__version__',
    'GatewayError',
    'TransportError',
    'ApiError',
    'AuthError',
    'RetriesExceededError',
    'Form',
    'Text',
    'File',
    'Flag',
    'Selector',
    'Gateway',
    'Action',
    'USER_AGENT',
]
