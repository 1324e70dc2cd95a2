"""
This submodule contains file uploads and image information.
"""
import os
from .form import File, Flag

__all__ = [
    'Files',
]

class Files(object):
    """Uploading, describing and downloading files. Mixed into Gateway."""

    def upload(self, path=None, filename=None, comment=None, text=None,
               url=None, sessionkey=None, watch=False, ignorewarnings=False,
               **evil):
        #pylint: disable=too-many-arguments
        """Upload a file.

        Either ``path`` (a local file), ``url`` (for the wiki to fetch
        itself) or ``sessionkey`` (of an earlier stashed upload, in the same
        login session) must be given.

        ``filename`` is the target name, by default the basename of
        ``path`` or ``url``.
        ``comment`` is the upload comment, and the initial page text for new
        files if ``text`` isn't given.
        """
        if path is None and url is None and sessionkey is None:
            raise ValueError("One of 'path', 'url' or 'sessionkey' must be "
                             "specified!")
        full_name = path or url
        if filename is None and full_name:
            filename = os.path.basename(full_name)

        params = {
            'action': 'upload',
            'filename': filename,
            'comment': comment or 'Uploaded by mw_gateway',
            'text': text,
            'url': url,
            'sessionkey': sessionkey,
            'watch': Flag() if watch else None,
            'ignorewarnings': Flag() if ignorewarnings else None,
            'token': self.get_token('edit', filename),
        }
        params.update(evil)
        if path is None:
            return self.send_request(params)
        with open(path, 'rb') as fileobj:
            params['file'] = File(fileobj, filename)
            return self.send_request(params)

    def images(self, article_or_pageid, imlimit=200, **evil):
        """List the titles of images used in an article, following
        redirects. None if the article doesn't exist.

        .. code-block:: python

            >>> gateway.images('Gaborone')
            ['File:Gaborone at night.jpg', 'File:Gaborone2.png', ...]
        """
        params = {
            'action': 'query',
            'prop': 'images',
            'imlimit': imlimit,
            'redirects': Flag(),
        }
        if isinstance(article_or_pageid, int):
            params['pageids'] = article_or_pageid
        else:
            params['titles'] = article_or_pageid
        params.update(evil)

        doc = self.send_request(params)
        page = doc.find('query/pages/page')
        if not self._valid_page(page):
            return None
        if doc.find('query/redirects/r') is not None:
            return self.images(int(page.get('pageid')), imlimit)
        return [im.get('title') for im in page.iterfind('images/im')]

    def image_info(self, file_name_or_page_id, iiprop=None, **evil):
        """Get information about an image, following redirects.

        ``file_name_or_page_id`` is a file name without the File: prefix, or
        the page ID of the file.
        ``iiprop`` is a '|'-separated string or a list of properties to get,
        see https://www.mediawiki.org/wiki/API:Imageinfo

        Returns a dict of image properties, or None if there's no such file.
        """
        if isinstance(iiprop, (list, tuple)):
            iiprop = '|'.join(iiprop)
        params = {
            'action': 'query',
            'prop': 'imageinfo',
            'iiprop': iiprop,
            'redirects': Flag(),
        }
        if isinstance(file_name_or_page_id, int):
            params['pageids'] = file_name_or_page_id
        else:
            params['titles'] = 'File:' + file_name_or_page_id
        params.update(evil)

        doc = self.send_request(params)
        page = doc.find('query/pages/page')
        if not self._valid_page(page):
            return None
        if doc.find('query/redirects/r') is not None:
            return self.image_info(int(page.get('pageid')), iiprop, **evil)
        info = page.find('imageinfo/ii')
        return dict(info.attrib) if info is not None else {}

    def download(self, file_name, **evil):
        """Download a file (name without File: prefix).

        Returns the file contents as bytes, or None if there's no such file.
        """
        evil['iiprop'] = 'url'
        info = self.image_info(file_name, **evil)
        if not info or 'url' not in info:
            return None
        return self._transport.fetch(info['url'])
