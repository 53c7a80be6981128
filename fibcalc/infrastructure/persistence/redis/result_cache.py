"""
Redis Result Cache.

Implements ResultCacheProtocol on top of one Redis hash: field = index key,
value = "pending" or the decimal result.

Storage Format:
    HSET values 5 pending
    HSET values 5 5
    HGETALL values -> {"5": "5", "7": "pending"}

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - Single-field HSET is atomic; no further locking is done
    - RedisError propagates; callers translate it (dispatcher -> CacheWriteError,
      worker -> ComputeFailure)
"""

import logging
from typing import Optional

from redis import Redis

logger = logging.getLogger(__name__)


class RedisResultCache:
    """
    Result cache stored in a Redis hash.

    Attributes:
        redis: Redis client (decode_responses=True)
        values_key: Name of the hash

    Examples:
        >>> cache = RedisResultCache(get_redis_client(), values_key="values")
        >>> cache.set("5", "pending")
        >>> cache.get_all()
        {'5': 'pending'}
    """

    def __init__(self, redis: Redis, values_key: str = "values") -> None:
        self.redis = redis
        self.values_key = values_key

    def set(self, key: str, value: str) -> None:
        self.redis.hset(self.values_key, key, value)
        logger.debug(f"HSET {self.values_key} {key} {value}")

    def get(self, key: str) -> Optional[str]:
        return self.redis.hget(self.values_key, key)

    def get_all(self) -> dict[str, str]:
        return dict(self.redis.hgetall(self.values_key) or {})
