from collections.abc import Mapping

from beartype import beartype

from urlifyclient.store.base import PersistentStoreBase
from urlifyclient.store.redis.mixins import RedisClientMixin
from urlifyclient.store.redis.helpers import translate_redis_errors


class RedisPersistentStore(RedisClientMixin, PersistentStoreBase):
    """Session store kept in Redis, so several machines can share one login.

    Keys are namespaced via RedisKeySchema, e.g. 'urlify:prod:session:token'.
    Related keys are written with one MSET and removed with one DEL.
    """

    @translate_redis_errors
    @beartype
    def get(self, key: str) -> str | None:
        value = self.redis.get(self.keys.session_key(key))
        return value.decode('utf-8') if isinstance(value, bytes) else value

    @translate_redis_errors
    @beartype
    def update(self, values: Mapping[str, str]) -> 'RedisPersistentStore':
        self.redis.mset({self.keys.session_key(key): value for key, value in values.items()})
        return self

    @translate_redis_errors
    @beartype
    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return self.redis.delete(*self.keys.session_keys(*keys))
