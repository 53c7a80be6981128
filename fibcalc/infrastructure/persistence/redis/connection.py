"""
Redis connection pool shared by the result cache, the job channel and the
dead-letter sink.

get_redis_client() is used when an adapter is built and retries PING with
exponential backoff (1s, 2s, 4s). health_check() sends a single PING and
never waits, so /health answers quickly when Redis is down.
"""

import logging
import threading
import time
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from fibcalc.shared.settings import RedisSettings, get_settings

logger = logging.getLogger(__name__)

_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _get_pool(settings: RedisSettings) -> ConnectionPool:
    # Settings of the first caller win; later callers share that pool
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                logger.info(
                    f"Creating Redis connection pool: {settings.host}:{settings.port}/{settings.db} "
                    f"(max_connections={settings.max_connections}, timeout={settings.timeout}s)"
                )
                _redis_pool = ConnectionPool(
                    host=settings.host,
                    port=settings.port,
                    db=settings.db,
                    max_connections=settings.max_connections,
                    socket_timeout=settings.timeout,
                    socket_connect_timeout=settings.timeout,
                    socket_keepalive=True,
                    decode_responses=True,
                )
    return _redis_pool


def get_redis_client(settings: Optional[RedisSettings] = None) -> Redis:
    """
    Client backed by the shared pool, verified with PING.

    Args:
        settings: Redis settings (default: process settings)

    Raises:
        RedisError: Redis did not answer within settings.retry_attempts tries
    """
    redis_settings = settings or get_settings().redis
    client = Redis(connection_pool=_get_pool(redis_settings))

    attempts = max(1, redis_settings.retry_attempts)
    last_error: Optional[Exception] = None

    for attempt in range(attempts):
        try:
            client.ping()
            return client
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt < attempts - 1:
                delay = 2**attempt
                logger.warning(
                    f"Redis PING failed (attempt {attempt + 1}/{attempts}): {e}. Retrying in {delay}s"
                )
                time.sleep(delay)

    logger.error(f"Redis unreachable after {attempts} attempts: {last_error}")
    raise RedisError(
        f"Failed to connect to Redis after {attempts} attempts. Last error: {last_error}"
    )


def health_check() -> bool:
    """Single PING without retries. Never raises."""
    try:
        return bool(Redis(connection_pool=_get_pool(get_settings().redis)).ping())
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
    except Exception as e:
        logger.error(f"Unexpected error in Redis health check: {e}")
        return False


def close_connections() -> None:
    """Disconnect and drop the pool. Safe to call when no pool exists."""
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            return
        try:
            _redis_pool.disconnect()
        except Exception as e:
            logger.error(f"Error closing Redis connection pool: {e}")
        finally:
            _redis_pool = None
            logger.info("Redis connection pool closed")
