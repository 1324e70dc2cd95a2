"""
This submodule contains site-wide information, import and export.
"""
from .form import File, Flag

__all__ = [
    'Site',
]

class Site(object):
    """Site information, XML import and export. Mixed into Gateway."""

    def import_xml(self, xmlfile, **evil):
        """Import a MediaWiki XML dump from the file at ``xmlfile``.

        Returns the root element: <api><import><page/>...</import></api>.
        A page with revisions="0" was a duplicate and not imported.
        """
        params = {
            'action': 'import',
            'token': self.get_token('import', 'Main Page'), # any title will do
        }
        params.update(evil)
        with open(xmlfile, 'rb') as fileobj:
            params['xml'] = File(fileobj)
            return self.send_request(params)

    import_ = import_xml

    def export(self, page_titles, **evil):
        """Export a page or list of pages.

        Returns the root element of the MediaWiki XML dump.
        """
        if isinstance(page_titles, str):
            page_titles = [page_titles]
        params = {
            'action': 'query',
            'titles': '|'.join(page_titles),
            'export': Flag(),
            'exportnowrap': Flag(),
        }
        params.update(evil)
        return self.send_request(params)

    def siteinfo(self, **evil):
        """Get the wiki's general site information as a dict.

        See https://www.mediawiki.org/wiki/API:Siteinfo
        """
        params = {
            'action': 'query',
            'meta': 'siteinfo',
        }
        params.update(evil)
        general = self.send_request(params).find('query/general')
        return dict(general.attrib) if general is not None else {}

    def version(self, **evil):
        """Get the wiki's MediaWiki version, e.g. '1.39.1'."""
        generator = self.siteinfo(**evil).get('generator', '').split()
        return generator[-1] if generator else None

    def namespaces_by_prefix(self, **evil):
        """Get all namespaces as a dict of canonical name -> ID.
        The main namespace is ''.
        """
        params = {
            'action': 'query',
            'meta': 'siteinfo',
            'siprop': 'namespaces',
        }
        params.update(evil)
        doc = self.send_request(params)
        return {ns.get('canonical') or '': int(ns.get('id'))
                for ns in doc.iter('ns')}

    def extensions(self, **evil):
        """Get all installed extensions as a dict of name -> version."""
        params = {
            'action': 'query',
            'meta': 'siteinfo',
            'siprop': 'extensions',
        }
        params.update(evil)
        doc = self.send_request(params)
        return {ext.get('name') or '': ext.get('version')
                for ext in doc.iter('ext')}
