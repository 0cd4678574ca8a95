from kvshortener.core.http import Request, Response
from kvshortener.core.expiration import ExpirationPolicy
from kvshortener.core.allocator import IdentifierAllocator
from kvshortener.core.auth import AuthResolver
from kvshortener.core.creation import ShortURLCreator, ShortenRequest, ShortenResult, parse_request_body, validate_target_url
from kvshortener.core.resolution import ShortURLResolver
from kvshortener.core.assets import AssetServer, cacheable, mime_type, needs_caching
from kvshortener.core.router import RequestRouter, Route, classify


__all__ = [
    'Request',
    'Response',
    'ExpirationPolicy',
    'IdentifierAllocator',
    'AuthResolver',
    'ShortURLCreator',
    'ShortenRequest',
    'ShortenResult',
    'parse_request_body',
    'validate_target_url',
    'ShortURLResolver',
    'AssetServer',
    'cacheable',
    'mime_type',
    'needs_caching',
    'RequestRouter',
    'Route',
    'classify',
]
