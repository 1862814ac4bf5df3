"""Helpers shared by Redis-backed stores.

Functions:
    describe_connection(client: redis.Redis) -> str
        Render the '<host>:<port>/<db>' a client points at, for error messages.

    translate_redis_errors(method) -> method
        Decorator: re-raise Redis connectivity failures as DataStoreError.

Example:
    >>> class RedisPersistentStore(RedisClientMixin, PersistentStoreBase):
    ...     @translate_redis_errors
    ...     def get(self, key):
    ...         return self.redis.get(self.keys.session_key(key))
"""

import functools
from collections.abc import Callable

import redis

from urlifyclient.store.exceptions import DataStoreError


# Failures meaning Redis can't be reached, as opposed to a rejected command
CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def describe_connection(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def translate_redis_errors[F: Callable](method: F) -> F:
    """Wrap a store method so connectivity failures surface as DataStoreError

    The wrapped method's instance must expose the client as `self.redis`.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)} ({method.__name__} failed).") from e

    return wrapper
