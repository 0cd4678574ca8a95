from kvshortener.dao.redis.redis_key_schema import RedisKeySchema
from kvshortener.dao.redis.mixins import RedisClientMixin
from kvshortener.dao.redis.key_value_redis_dao import KeyValueRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'KeyValueRedisDAO',
]
