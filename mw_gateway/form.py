"""
mw_gateway.form - Typed form data for API requests.

A Form is an ordered list of parameters. Each value is one of:

* ``Text`` - an ordinary string parameter
* ``File`` - a file object sent as a multipart upload
* ``Flag`` - a MediaWiki boolean parameter, true by being present

.. code-block:: python

    >>> form = Form(action='edit', title='Main Page', createonly=Flag())
    >>> form['bot'] = True
    >>> form.to_wire()
    ([('action', 'edit'), ('title', 'Main Page'), ('createonly', ''),
      ('bot', '1')], [])
"""
from collections import namedtuple

__all__ = [
    'Text',
    'File',
    'Flag',
    'Form',
]

Text = namedtuple('Text', 'value')

class File(namedtuple('File', 'fileobj filename')):
    """A file object open in BYTES mode, with the name to upload it as."""
    __slots__ = ()

    def __new__(cls, fileobj, filename=None):
        if filename is None:
            filename = getattr(fileobj, 'name', 'file')
        return super(File, cls).__new__(cls, fileobj, filename)

class Flag(object): #pylint: disable=too-few-public-methods
    """A boolean parameter. Sent with an empty value."""
    def __eq__(self, other):
        return isinstance(other, Flag)

    def __hash__(self):
        return hash(Flag)

    def __repr__(self):
        return 'Flag()'

def _coerce(value):
    """Turn a plain Python value into a typed form value."""
    if isinstance(value, (Text, File, Flag)):
        return value
    if isinstance(value, bool):
        return Text('1' if value else '0')
    if isinstance(value, bytes):
        return Text(value.decode('utf-8'))
    if isinstance(value, (list, tuple)):
        return Text('|'.join(str(i) for i in value))
    return Text(str(value))

class Form(object):
    """Ordered API parameters. Assigning None removes a parameter."""

    def __init__(self, *args, **params):
        self._items = []
        self.update(*args, **params)

    def __repr__(self):
        return '<Form {!r}>'.format(self._items)

    def __eq__(self, other):
        return isinstance(other, Form) and self._items == other._items

    __hash__ = None

    def __contains__(self, key):
        return any(k == key for k, _ in self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return (k for k, _ in self._items)

    def __getitem__(self, key):
        for k, value in self._items:
            if k == key:
                return value
        raise KeyError(key)

    def __setitem__(self, key, value):
        if value is None:
            self.pop(key, None)
            return
        value = _coerce(value)
        for i, (k, _) in enumerate(self._items):
            if k == key:
                self._items[i] = (key, value)
                return
        self._items.append((key, value))

    def __delitem__(self, key):
        self[key] # raise KeyError if missing
        self._items = [(k, v) for k, v in self._items if k != key]

    def get(self, key, default=None):
        """Form.get(key[, default]) -> typed value or default."""
        try:
            return self[key]
        except KeyError:
            return default

    def text(self, key, default=None):
        """Return the string value of a Text parameter, or default."""
        value = self.get(key)
        return value.value if isinstance(value, Text) else default

    def pop(self, key, *default):
        """Remove and return a parameter, like dict.pop."""
        try:
            value = self[key]
        except KeyError:
            if default:
                return default[0]
            raise
        del self[key]
        return value

    def items(self):
        """Return a list of (key, typed value) pairs in order."""
        return list(self._items)

    def update(self, *args, **params):
        """Set many parameters from a mapping, Form, pairs and/or kwargs."""
        for source in args + (params,):
            if isinstance(source, Form):
                pairs = source.items()
            elif hasattr(source, 'items'):
                pairs = source.items()
            else:
                pairs = source
            for key, value in pairs:
                self[key] = value
        return self

    def merged(self, *args, **params):
        """Return a copy of this form with some parameters replaced."""
        return Form(self).update(*args, **params)

    def has_files(self):
        """Whether any value is a File."""
        return any(isinstance(v, File) for _, v in self._items)

    def to_wire(self):
        """Serialize to (data, files) lists as accepted by requests.

        ``data`` is a list of (key, str) pairs, ``files`` is a list of
        (key, (filename, fileobj)) pairs.
        """
        data, files = [], []
        for key, value in self._items:
            if isinstance(value, File):
                files.append((key, (value.filename, value.fileobj)))
            elif isinstance(value, Flag):
                data.append((key, ''))
            else:
                data.append((key, value.value))
        return data, files
