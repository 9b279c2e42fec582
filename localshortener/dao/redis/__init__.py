from localshortener.dao.redis.redis_store import RedisKeyValueStore


__all__ = [
    'RedisKeyValueStore',
]
