"""Redis implementation of the durable key-value store

Both persisted records live under plain Redis string keys without TTL. Expiry
of short URLs is tracked by the engine itself, not by Redis.

Classes:
    RedisKeyValueStore:
        KeyValueBaseStore backed by a redis-py client.

Example:
    >>> store = RedisKeyValueStore(redis_host='localhost')
    >>> store.set('localshortener:local:entries', '[]')
    >>> store.get('localshortener:local:entries')
    '[]'
"""

from beartype import beartype
import redis

from localshortener.dao.base import KeyValueBaseStore
from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.redis.helpers import handle_redis_errors, describe_redis


class RedisKeyValueStore(KeyValueBaseStore):
    """Redis-based durable key-value store

    Attributes:
        redis (redis.Redis):
            Client used for every command. Built from the connection
            parameters unless an existing client is passed in.

    Raises (on construction):
        DataStoreError: If the server doesn't answer PING.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
    ):
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=True,
                username=redis_username,
                password=redis_password,
            )
        self.redis = redis_client
        self.ping()

    def ping(self, raise_error: bool = True) -> bool:
        """Check that the server is reachable

        Returns:
            bool: True if PING succeeded. False on failure when raise_error=False.

        Raises:
            DataStoreError: On any Redis failure when raise_error=True.
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if raise_error:
                raise DataStoreError(f"Can't connect to Redis at {describe_redis(self.redis)}. Check REDIS_* settings.") from e
            return False
        return True

    @handle_redis_errors
    @beartype
    def get(self, key: str) -> str | None:
        value = self.redis.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    @handle_redis_errors
    @beartype
    def set(self, key: str, value: str) -> None:
        self.redis.set(key, value)

    @handle_redis_errors
    @beartype
    def delete(self, key: str) -> bool:
        return bool(self.redis.delete(key))
