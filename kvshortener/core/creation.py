"""Short URL creation workflow

This module orchestrates the creation of a short URL:
    - Step 1: Resolve the caller from the API key header
    - Step 2: Validate the destination URL
    - Step 3: Evaluate the expiration policy
    - Step 4: Allocate a free short identifier
    - Step 5: Persist the record (create-if-absent, with store TTL when it expires)
    - Step 6: Compose the short URL from the request host

Every step before persistence is side-effect free and fails fast.

Example:
    >>> creator = ShortURLCreator(dao, ShortenerSettings())
    >>> result = await creator.create('https://example.com/page', 120, None, 'sho.rt')
    >>> result.short_url
    'sho.rt/2Lx9QbA'
"""

import json
import logging
import random
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from kvshortener.constants import TTL
from kvshortener.core.allocator import IdentifierAllocator
from kvshortener.core.auth import AuthResolver
from kvshortener.core.expiration import ExpirationPolicy
from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.exceptions import AllocationError, DeserializationError, URLError
from kvshortener.models import ShortURLModel
from kvshortener.settings import ShortenerSettings
from kvshortener.utils.helpers import now_millis


logger = logging.getLogger(__name__)

SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
# Schemes whose URLs always carry an authority
SPECIAL_SCHEMES = frozenset({'http', 'https', 'ftp', 'ws', 'wss'})


@dataclass(frozen=True)
class ShortenRequest:
    url: str
    ttl: int | None = None


@dataclass(frozen=True)
class ShortenResult:
    short_url: str
    raw_url: str

    def to_dict(self) -> dict[str, str]:
        return {'short_url': self.short_url, 'raw_url': self.raw_url}


def parse_request_body(body: str | bytes | None) -> ShortenRequest:
    """Decode `{"url": str, "ttl": optional uint64}` from a request body

    Raises:
        DeserializationError: If the body isn't a JSON object of that shape.
    """
    try:
        payload = json.loads(body or '')
    except (TypeError, ValueError) as e:
        raise DeserializationError(str(e)) from e

    if not isinstance(payload, dict):
        raise DeserializationError('request body must be a JSON object')

    url = payload.get('url')
    if not isinstance(url, str):
        raise DeserializationError('missing field `url`' if url is None else 'invalid type for field `url`: expected string')

    ttl = payload.get('ttl')
    if ttl is not None and (not isinstance(ttl, int) or isinstance(ttl, bool) or not 0 <= ttl <= TTL.MAX_REQUESTED):
        raise DeserializationError('invalid value for field `ttl`: expected a 64-bit unsigned integer')

    return ShortenRequest(url=url, ttl=ttl)


def validate_target_url(raw_url: str) -> str:
    """Check that a destination is an absolute, hierarchical URL

    Rejects relative references ("not a url", "/path"), URLs that cannot be a
    base ("mailto:a@b.com", "data:...", "javascript:..."), and URLs of special
    schemes without a host ("http:/path").

    Returns:
        str: The URL, unchanged.

    Raises:
        URLError: If the URL is invalid.
    """
    candidate = raw_url.strip()
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise URLError(str(e)) from e

    scheme = parts.scheme.lower()
    if not scheme or not SCHEME_PATTERN.match(scheme) or not candidate[len(scheme)] == ':':
        raise URLError('relative URL without a base')

    if not candidate[len(scheme) + 1 :].startswith('/'):
        raise URLError()

    hostname = parts.hostname or ''
    if scheme in SPECIAL_SCHEMES and not hostname:
        raise URLError('empty host')
    if any(char.isspace() for char in hostname):
        raise URLError('invalid domain character')

    return raw_url


class ShortURLCreator:
    def __init__(self, dao: KeyValueBaseDAO, settings: ShortenerSettings, rng: random.Random | None = None):
        self.dao = dao
        self.settings = settings
        self.auth = AuthResolver(dao)
        self.policy = ExpirationPolicy(settings)
        self.allocator = IdentifierAllocator(dao, settings, rng=rng)

    async def persist(self, record: ShortURLModel) -> str:
        """Allocate an identifier and store the record under it

        The record is written with SET NX semantics. Losing the write to a
        concurrent creator means another allocation round, bounded by the same
        attempt cap as the allocator itself.

        Raises:
            AllocationError: If no identifier could be claimed.
            DataStoreError: If the write fails.
        """
        expire_at = record.expire_time // 1000 if record.expires else None
        value = record.to_json()

        for _ in range(self.settings.max_allocation_attempts):
            shortcode = await self.allocator.allocate()
            if await self.dao.put_if_absent(Namespace.URLS, shortcode, value, expire_at=expire_at):
                return shortcode
            logger.warning('Lost race for short identifier, reallocating.', extra={'event': 'ALLOCATION_RACE', 'shortcode': shortcode})

        raise AllocationError(f'Could not claim a short identifier after {self.settings.max_allocation_attempts} attempts')

    async def create(self, raw_url: str, ttl: int | None, auth_header: str | None, host: str) -> ShortenResult:
        """Create a short URL for raw_url

        Args:
            raw_url (str): Destination URL.
            ttl (int | None): Requested lifetime in seconds, None or 0 for "never expires".
            auth_header (str | None): Caller's API key, if sent.
            host (str): Public host the short URL is built on.

        Returns:
            ShortenResult: short and raw URL.

        Raises:
            DeserializationError: If the caller's user record is malformed.
            URLError: If raw_url is invalid.
            NeedAuthError: If the TTL requires an authenticated caller.
            TTLError: If the TTL is below the minimum.
            AllocationError: If no free identifier could be found.
            DataStoreError: If the store is unreachable.
        """
        caller = await self.auth.resolve(auth_header)
        validate_target_url(raw_url)

        now = now_millis()
        expire_time = self.policy.evaluate(ttl, caller, now_ms=now)

        record = ShortURLModel(
            raw_url=raw_url,
            username=caller.username if caller is not None else '',
            insert_time=now,
            expire_time=expire_time,
        )
        shortcode = await self.persist(record)

        logger.info(
            'Created short URL.',
            extra={'event': 'SHORT_URL_CREATED', 'shortcode': shortcode, 'username': record.username, 'expire_time': expire_time},
        )
        return ShortenResult(short_url=f'{host}/{shortcode}', raw_url=raw_url)
