"""
mw_gateway.config - Command line options for the sample commands.

.. code-block:: python

    config = Config(sys.argv[1:], 'write')
    gateway = mw.Gateway(config.url)
    gateway.login(config.user, config.pw)
    gateway.edit(config.article, text, summary=config.summary)

Hosts can be preconfigured in ``config/hosts.json``::

    {"wiki": {"url": "https://wiki.example/w/api.php",
              "user": "Bot", "pw": "secret"}}

and selected with ``-h wiki``.
"""
import argparse
import json

__all__ = [
    'HOSTS_FILE',
    'Config',
]

HOSTS_FILE = 'config/hosts.json'

class Config(object): #pylint: disable=too-many-instance-attributes
    """Parsed options. ``kind`` is 'read', 'write' or 'upload'; it decides
    which options are available.
    """
    def __init__(self, args=None, kind='read', hosts_file=HOSTS_FILE):
        self.summary = 'Automated edit via mw_gateway'
        self.article = self.desc = self.target = None
        self.url = self.user = self.pw = None
        self.verbose = False
        self.rest = []
        self._hosts_file = hosts_file

        parser = argparse.ArgumentParser(usage='%(prog)s [options]',
                                         add_help=False)
        parser.add_argument('--help', action='help',
                            help='show this help message and exit')
        parser.add_argument('-h', '--host',
                            help='Use preconfigured HOST in ' + hosts_file)
        if kind == 'upload':
            parser.add_argument('-d', '--description', dest='desc',
                                help='Description of file to upload')
            parser.add_argument('-t', '--target-file', dest='target',
                                help='Target file name to upload to')
        else:
            parser.add_argument('-a', '--article',
                                help='Name of article in Wiki')
        parser.add_argument('-n', '--username', dest='user',
                            help='Username for login')
        parser.add_argument('-p', '--password', dest='pw',
                            help='Password for login')
        if kind != 'read':
            parser.add_argument('-s', '--summary',
                                help='Edit summary for this change')
        parser.add_argument('-u', '--url', help='MediaWiki API URL')
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='Log every request and response')
        self._parser = parser

        opts, self.rest = parser.parse_known_args(args)
        if opts.host:
            self._load_host(opts.host)
        for key, value in vars(opts).items():
            if key != 'host' and value is not None:
                setattr(self, key, value)

        if not self.url:
            self.abort('URL (-u) or valid host (-h) is mandatory.')

    def __repr__(self):
        return '<Config url={!r} user={!r}>'.format(self.url, self.user)

    def _load_host(self, host_id):
        """Fill url, user and pw from the hosts file."""
        try:
            with open(self._hosts_file) as hosts:
                host = json.load(hosts)[host_id]
        except (OSError, ValueError) as exc:
            self.abort('Cannot read {}: {}'.format(self._hosts_file, exc))
        except KeyError:
            self.abort('Host {} not found in {}'.format(host_id,
                                                        self._hosts_file))
        self.url = host.get('url')
        self.user = host.get('user')
        self.pw = host.get('pw')

    def abort(self, error):
        """Print usage and exit."""
        self._parser.error(error)
