"""Data Access Object (DAO) implementation for the namespaced key-value store in Redis

This module provides a Redis-based implementation of KeyValueBaseDAO. Every
namespace maps onto a key family under the application prefix:

    <prefix>:assets:<path>      -> static asset content
    <prefix>:urls:<shortcode>   -> ShortURLModel JSON (optionally with EXAT)
    <prefix>:users:<api key>    -> UserModel JSON

Classes:
    KeyValueRedisDAO:
        DAO for storing and retrieving namespaced string values in Redis.

Example:
    >>> from kvshortener.dao.base import Namespace
    >>> from kvshortener.dao.redis import KeyValueRedisDAO

    >>> async with KeyValueRedisDAO(prefix="app:dev") as dao:
    ...     await dao.put_if_absent(Namespace.URLS, 'abc123', record.to_json(), expire_at=1767225600)
    True
    ...     await dao.get(Namespace.URLS, 'abc123')
    '{"raw_url": "https://example.com/page", ...}'
"""

from beartype import beartype

from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.dao.redis.mixins import RedisClientMixin
from kvshortener.dao.redis.helpers import handle_redis_connection_error


class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
    """Redis-based Data Access Object (DAO) for namespaced string values

    Attributes (see RedisClientMixin):
        redis (redis.asyncio.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    @handle_redis_connection_error
    @beartype
    async def get(self, namespace: Namespace, key: str) -> str | None:
        value = await self.redis.get(self.keys.key(namespace, key))
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value

    @handle_redis_connection_error
    @beartype
    async def exists(self, namespace: Namespace, key: str) -> bool:
        return bool(await self.redis.exists(self.keys.key(namespace, key)))

    @handle_redis_connection_error
    @beartype
    async def put(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> None:
        """SET <prefix>:<namespace>:<key> <value> [EXAT <expire_at>]"""
        await self.redis.set(self.keys.key(namespace, key), value, exat=expire_at)

    @handle_redis_connection_error
    @beartype
    async def put_if_absent(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> bool:
        """SET <prefix>:<namespace>:<key> <value> NX [EXAT <expire_at>]

        A single SET NX closes the check-then-act window between an EXISTS
        lookup and the write: of two concurrent writers, exactly one wins.
        """
        written = await self.redis.set(self.keys.key(namespace, key), value, nx=True, exat=expire_at)
        return bool(written)

    @handle_redis_connection_error
    @beartype
    async def delete(self, namespace: Namespace, key: str) -> None:
        await self.redis.delete(self.keys.key(namespace, key))
