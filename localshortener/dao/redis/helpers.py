import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from localshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def describe_redis(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' for the client's connection pool."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors(method: F) -> F:
    """Translate redis-py failures raised by a store method into DataStoreError

    Connectivity problems (refused connections, timeouts) and rejected commands
    (e.g. OOM when used memory > 'maxmemory') are all reported as DataStoreError,
    which the persistence adapter absorbs.

    Example:
        >>> @handle_redis_errors
        ... def get(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_redis(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis rejected the command: {e}') from e

    return wrapper
