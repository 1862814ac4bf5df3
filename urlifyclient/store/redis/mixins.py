"""Redis client ownership shared by Redis-backed stores.

Example:
    >>> class RedisPersistentStore(RedisClientMixin, PersistentStoreBase):
    ...     pass
    ...
    >>> store = RedisPersistentStore(redis_host='localhost', prefix='urlify:prod')
    >>> store.ping()
    True
"""

import logging
from typing import Any

import redis

from urlifyclient.constants import Defaults
from urlifyclient.store.exceptions import DataStoreError
from urlifyclient.store.redis.helpers import CONNECTIVITY_ERRORS, describe_connection
from urlifyclient.store.redis.redis_key_schema import RedisKeySchema


logger = logging.getLogger(__name__)


class RedisClientMixin:
    """Own a Redis client and the key schema of a Redis-backed store

    Attributes:
        redis (redis.Redis):
            Active Redis client.
        keys (RedisKeySchema):
            Namespaced key names.
    """

    def __init__(self, redis_client: redis.Redis | None = None, prefix: str | None = None, **connection: Any):
        """Attach to Redis and make sure it answers

        Args:
            redis_client (redis.Redis | None):
                Pre-initialized client. If None, one is created from `connection`.
            prefix (str | None):
                Namespace of every key, e.g. 'urlify:prod'.
            **connection:
                `redis_host`, `redis_port`, `redis_db`, `redis_username`,
                `redis_password` (as produced by `load_config()['redis']`).

        Raises:
            DataStoreError:
                If Redis doesn't answer PING.
        """
        self.redis = redis_client if redis_client is not None else self.connect(**connection)
        self.keys = RedisKeySchema(prefix=prefix)

        if not self.ping():
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}. Check the REDIS_* settings.")

    @staticmethod
    def connect(**connection: Any) -> redis.Redis:
        """Create a client from `redis_`-prefixed connection options"""
        options = {'host': 'localhost', 'port': Defaults.REDIS_PORT, 'db': Defaults.REDIS_DB, 'decode_responses': True}
        for name, value in connection.items():
            if not name.startswith('redis_'):
                raise TypeError(f'Unexpected Redis connection option {name!r}.')
            options[name.removeprefix('redis_')] = value

        options['port'] = int(options['port'])
        options['db'] = int(options['db'])
        return redis.Redis(**options)

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except CONNECTIVITY_ERRORS:
            logger.warning('Redis did not answer PING.', extra={'redis': describe_connection(self.redis)})
            return False
