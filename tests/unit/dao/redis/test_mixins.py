import pytest
import redis

from kvshortener.dao.redis.mixins import RedisClientMixin


class TestRedisClientMixin:
    redis_client: redis.asyncio.Redis

    def test_initialization_does_not_touch_redis(self, redis_client: redis.asyncio.Redis):
        mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
        assert mixin.redis is redis_client
        assert mixin.keys.prefix == 'testapp:test'
        redis_client.get.assert_not_called()

    def test_initialization_creates_client(self):
        mixin = RedisClientMixin(redis_host='redis.test', redis_port='6380', redis_db='2')
        assert isinstance(mixin.redis, redis.asyncio.Redis)
        kwargs = mixin.redis.connection_pool.connection_kwargs
        assert (kwargs['host'], kwargs['port'], kwargs['db']) == ('redis.test', 6380, 2)

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_client(self, redis_client: redis.asyncio.Redis):
        async with RedisClientMixin(redis_client=redis_client) as mixin:
            assert mixin.redis is redis_client
        redis_client.aclose.assert_awaited_once()
