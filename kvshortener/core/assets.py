"""Static asset classification and serving

Any path whose extension maps to a MIME type is treated as a static asset.
Assets live in the `assets` namespace under their request path, leading '/'
included (e.g. '/index.html', '/css/main.css').

Example:
    >>> needs_caching('https://sho.rt/css/main.css')
    True
    >>> needs_caching('https://sho.rt/index.html')
    False
    >>> needs_caching('https://sho.rt/2Lx9QbA')
    False
"""

import logging
import mimetypes
from urllib.parse import urlsplit

from kvshortener.core.http import Response
from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.exceptions import NotFoundError
from kvshortener.settings import ShortenerSettings


logger = logging.getLogger(__name__)

HTML_MIME_TYPE = 'text/html'


def mime_type(path: str) -> str | None:
    """Guess a MIME type from the path's file extension, None if unknown"""
    guessed, _ = mimetypes.guess_type(path, strict=False)
    return guessed


def cacheable(mime: str | None) -> bool:
    """Every known MIME type except HTML gets a Cache-Control header"""
    return mime is not None and mime != HTML_MIME_TYPE


def needs_caching(url: str) -> bool:
    """Return True if the URL points to a cacheable (non-HTML) static asset"""
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False

    return cacheable(mime_type(parts.path))


class AssetServer:
    def __init__(self, dao: KeyValueBaseDAO, settings: ShortenerSettings):
        self.dao = dao
        self.settings = settings

    async def serve(self, path: str, mime: str) -> Response:
        """Respond with the asset stored under path

        Raises:
            NotFoundError: If no asset is stored under path.
            DataStoreError: If the store is unreachable.
        """
        content = await self.dao.get(Namespace.ASSETS, path)
        if content is None:
            logger.info('Static asset not found.', extra={'event': 'ASSET_NOT_FOUND', 'path': path})
            raise NotFoundError()

        headers = {'Content-Type': mime}
        if cacheable(mime):
            headers['Cache-Control'] = self.settings.cache_control
        return Response(status=200, headers=headers, body=content)
