"""
Sample commands.

Usage::

    python -m mw_gateway get -u https://wiki.example/w/api.php -a "Main Page"
    echo "Hello" | python -m mw_gateway create -h wiki -a Sandbox -s "Test"
    python -m mw_gateway delete -h wiki -a Sandbox
    python -m mw_gateway undelete -h wiki -a Sandbox
    python -m mw_gateway export -h wiki -a "Main Page" > dump.xml
    python -m mw_gateway search -h wiki pizza
    python -m mw_gateway upload -h wiki -t Picture.jpg -d "A picture" pic.jpg
    echo "Hi!" | python -m mw_gateway email -h wiki -a Bob "Subject line"
"""
import logging
import sys
from xml.etree import ElementTree
from .config import Config
from .excs import GatewayError
from .gateway import Gateway

COMMANDS = {}

def command(kind):
    """Register a sample command taking a Gateway and a Config."""
    def decorator(func):
        COMMANDS[func.__name__] = (kind, func)
        return func
    return decorator

def _text(config):
    """Page text: remaining arguments, or stdin."""
    return ' '.join(config.rest) if config.rest else sys.stdin.read()

@command('read')
def get(gateway, config):
    """Print a page's wikitext."""
    content = gateway.get(config.article)
    if content is None:
        print('Page not found: ' + config.article, file=sys.stderr)
        return 1
    print(content)
    return 0

@command('write')
def create(gateway, config):
    """Create or overwrite a page with text from stdin."""
    gateway.edit(config.article, _text(config), summary=config.summary)
    return 0

@command('write')
def delete(gateway, config):
    """Delete a page."""
    gateway.delete(config.article, reason=config.summary)
    return 0

@command('write')
def undelete(gateway, config):
    """Undelete a page."""
    print('Undeleted {} revisions'.format(gateway.undelete(config.article)))
    return 0

@command('read')
def export(gateway, config):
    """Print the XML export of a page."""
    doc = gateway.export(config.article)
    print(ElementTree.tostring(doc, encoding='unicode'))
    return 0

@command('read')
def search(gateway, config):
    """Print titles of pages matching the search key."""
    for title in gateway.search(' '.join(config.rest)):
        print(title)
    return 0

@command('upload')
def upload(gateway, config):
    """Upload a local file."""
    for path in config.rest:
        gateway.upload(path, filename=config.target, text=config.desc)
    return 0

@command('write')
def email(gateway, config):
    """E-mail a user; the subject is the argument, the text comes from stdin."""
    sent = gateway.email_user(config.article, ' '.join(config.rest),
                              sys.stdin.read())
    return 0 if sent else 1

def main(argv=None):
    """Run a sample command."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        print('Usage: python -m mw_gateway {} [options]'.format(
            '|'.join(sorted(COMMANDS))), file=sys.stderr)
        return 2
    kind, func = COMMANDS[argv[0]]
    config = Config(argv[1:], kind)
    logging.basicConfig(level=logging.DEBUG if config.verbose
                        else logging.WARNING)
    gateway = Gateway(config.url)
    try:
        if config.user:
            gateway.login(config.user, config.pw)
        return func(gateway, config)
    except GatewayError as exc:
        print('Error: {}'.format(exc), file=sys.stderr)
        return 1

if __name__ == '__main__':
    sys.exit(main())
