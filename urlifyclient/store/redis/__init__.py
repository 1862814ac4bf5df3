from urlifyclient.store.redis.redis_key_schema import RedisKeySchema
from urlifyclient.store.redis.redis_persistent_store import RedisPersistentStore
from urlifyclient.store.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'RedisPersistentStore',
    'RedisClientMixin',
]
