"""Redis mixin providing shared client initialization and teardown.

Responsibilities:
    - Initialize an asyncio Redis client
    - Close the client's connection pool

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management and client setup.

Example:
    Typical usage with a DAO implementation:

        >>> class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
        ...     pass
        ...
        >>> async with KeyValueRedisDAO(prefix="myapp:prod") as dao:
        ...     await dao.put_if_absent(Namespace.URLS, "10wBU", "{}")
        True

NOTE:
    The asyncio client's connection pool is bound to the event loop it is first
    used in. Create one DAO per `asyncio.run()` call and close it before the
    loop ends.
"""

import redis
import redis.asyncio

from kvshortener.dao.redis.redis_key_schema import RedisKeySchema


class RedisClientMixin:
    """Mixin Redis client setup and teardown for Redis-backed DAOs.

    Attributes:
        redis (redis.asyncio.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        aclose() -> None:
            Close the underlying connection pool.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int = 6379,
        redis_db: int = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_ssl: bool = False,
        redis_socket_timeout: float | None = None,
        redis_client: redis.asyncio.Redis | None = None,
        prefix: str | None = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_host (str):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (int):
                Redis server port. Defaults to 6379.

            redis_db (int):
                Redis database index. Defaults to 0.

            redis_decode_responses (bool):
                If True, decodes Redis responses. Defaults to True.

            redis_username (str | None):
                Username for Redis authentication (if required).

            redis_password (str | None):
                Password for Redis authentication (if required).

            redis_ssl (bool):
                If True, connect over TLS (e.g. ElastiCache with AuthToken).

            redis_socket_timeout (float | None):
                Socket timeout in seconds. None waits indefinitely.

            redis_client (redis.asyncio.Redis | None):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (str | None):
                Namespace prefix for all Redis keys, e.g. 'app:env'.
        """
        if redis_client is None:
            redis_client = redis.asyncio.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                ssl=redis_ssl,
                socket_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

    async def aclose(self) -> None:
        await self.redis.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
