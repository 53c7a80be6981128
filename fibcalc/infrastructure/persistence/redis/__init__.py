"""
Redis Infrastructure Module

Redis-based implementations of the result cache, job channel and
dead-letter sink.

Exports:
    - RedisResultCache: Result cache in a Redis hash
    - RedisJobChannel / RedisSubscription: PUBLISH / SUBSCRIBE job channel
    - RedisDeadLetterSink: Dropped job messages in a Redis list
    - get_redis_client: Get Redis client with connection pooling
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import close_connections, get_redis_client, health_check
from .dead_letter_sink import RedisDeadLetterSink
from .job_channel import RedisJobChannel, RedisSubscription
from .result_cache import RedisResultCache

__all__ = [
    "RedisResultCache",
    "RedisJobChannel",
    "RedisSubscription",
    "RedisDeadLetterSink",
    "get_redis_client",
    "health_check",
    "close_connections",
]
