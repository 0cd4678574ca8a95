"""Request routing

Every inbound request ends up in exactly one of these routes:

    ASSET               path has a known file extension (any method)
    CREATE              POST on the creation path
    METHOD_NOT_ALLOWED  any other method on the creation path
    RESOLVE             GET on any other path
    NOT_FOUND           everything else

A path ending in '/' is routed as '<path>index.html'.

Example:
    >>> classify('/css/main.css', 'DELETE')
    <Route.ASSET: 'asset'>
    >>> classify('/new', 'get')
    <Route.METHOD_NOT_ALLOWED: 'method_not_allowed'>
    >>> classify('/2Lx9QbA', 'GET')
    <Route.RESOLVE: 'resolve'>
"""

import logging
import random
from enum import StrEnum
from urllib.parse import urlsplit, SplitResult

from kvshortener.constants import HTTP
from kvshortener.core.assets import AssetServer, mime_type
from kvshortener.core.creation import ShortURLCreator, parse_request_body
from kvshortener.core.http import Request, Response, json_response, redirect_response
from kvshortener.core.resolution import ShortURLResolver
from kvshortener.dao.base import KeyValueBaseDAO
from kvshortener.exceptions import MethodNotAllowedError, NotFoundError, ServerError
from kvshortener.settings import ShortenerSettings


logger = logging.getLogger(__name__)


class Route(StrEnum):
    ASSET = 'asset'
    CREATE = 'create'
    RESOLVE = 'resolve'
    METHOD_NOT_ALLOWED = 'method_not_allowed'
    NOT_FOUND = 'not_found'


def normalize_path(path: str) -> str:
    if not path:
        path = '/'
    if path.endswith('/'):
        path = f'{path}{HTTP.INDEX_DOCUMENT}'
    return path


def classify(path: str, method: str, creation_path: str = HTTP.CREATION_PATH) -> Route:
    path = normalize_path(path)
    method = method.upper()

    if mime_type(path) is not None:
        return Route.ASSET
    if path == creation_path:
        return Route.CREATE if method == 'POST' else Route.METHOD_NOT_ALLOWED
    if method == 'GET':
        return Route.RESOLVE
    return Route.NOT_FOUND


def parse_request_url(url: str) -> SplitResult:
    """Split an absolute request URL

    Raises:
        ServerError: If the URL isn't absolute or has no host.
    """
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise ServerError(f'Failed to parse request URL: {e}') from e

    if not parts.scheme or not parts.hostname:
        raise ServerError(f'Failed to parse request URL: {url!r}')
    return parts


def bare_host(parts: SplitResult) -> str:
    """Bare host of a parsed request URL, without userinfo or port"""
    host = parts.hostname or ''
    return f'[{host}]' if ':' in host else host


class RequestRouter:
    def __init__(self, dao: KeyValueBaseDAO, settings: ShortenerSettings, rng: random.Random | None = None):
        self.settings = settings
        self.assets = AssetServer(dao, settings)
        self.creator = ShortURLCreator(dao, settings, rng=rng)
        self.resolver = ShortURLResolver(dao)

    def classify(self, path: str, method: str) -> Route:
        return classify(path, method, creation_path=self.settings.creation_path)

    async def handle(self, request: Request) -> Response:
        """Classify a request and dispatch it to its workflow

        Raises:
            ShortenerError: Any workflow failure, for the transport to render.
        """
        parts = parse_request_url(request.url)
        path = normalize_path(parts.path)
        route = self.classify(path, request.method)
        logger.debug('Routing %s %s to %s.', request.method, path, route, extra={'route': str(route)})

        match route:
            case Route.ASSET:
                return await self.assets.serve(path, mime_type(path))
            case Route.CREATE:
                return await self.create(request, host=bare_host(parts))
            case Route.RESOLVE:
                return await self.redirect(path.lstrip('/'))
            case Route.METHOD_NOT_ALLOWED:
                raise MethodNotAllowedError()
            case _:
                raise NotFoundError()

    async def create(self, request: Request, host: str) -> Response:
        payload = parse_request_body(request.body)
        result = await self.creator.create(
            payload.url,
            payload.ttl,
            request.header(self.settings.auth_header),
            host,
        )
        return json_response(result.to_dict())

    async def redirect(self, shortcode: str) -> Response:
        raw_url = await self.resolver.resolve(shortcode)
        logger.info('Redirecting client to target URL.', extra={'event': 'REDIRECT', 'shortcode': shortcode})
        return redirect_response(raw_url, status=self.settings.redirect_status)
