"""
Compute Worker Process.

Subscribes to the job channel and runs ComputeWorker until SIGTERM/SIGINT.
Exactly one worker process should run per deployment: workers do not
coordinate, so a second one would recompute every job.

Run this worker with: python -m fibcalc.worker  (or the fibcalc-worker script)
"""

import logging
import signal
import sys

from redis.exceptions import RedisError

from fibcalc.application.tasks.compute_worker import ComputeWorker
from fibcalc.infrastructure.persistence.redis.connection import (
    close_connections,
    get_redis_client,
)
from fibcalc.infrastructure.persistence.redis.dead_letter_sink import RedisDeadLetterSink
from fibcalc.infrastructure.persistence.redis.job_channel import RedisJobChannel
from fibcalc.infrastructure.persistence.redis.result_cache import RedisResultCache
from fibcalc.shared.settings import Settings, get_settings

logger = logging.getLogger("fibcalc.worker")


def build_worker(settings: Settings) -> tuple[ComputeWorker, RedisJobChannel]:
    """
    Wire a ComputeWorker to Redis.

    Raises:
        RedisError: If Redis is unreachable after all retry attempts
    """
    client = get_redis_client(settings.redis)

    dead_letters = None
    if settings.worker.dead_letter_enabled:
        dead_letters = RedisDeadLetterSink(client, key=settings.worker.dead_letter_key)
        logger.info(f"Dead letters enabled (list '{settings.worker.dead_letter_key}')")

    worker = ComputeWorker(
        cache=RedisResultCache(client, values_key=settings.pipeline.values_key),
        max_index=settings.pipeline.max_index,
        poll_interval=settings.worker.poll_interval,
        dead_letters=dead_letters,
    )
    return worker, RedisJobChannel(client)


def main() -> int:
    """
    Main entry point for the worker process.

    Sets up signal handlers for graceful shutdown, subscribes and runs the
    loop. A job being computed is finished before the loop exits.

    Returns:
        Process exit code
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        worker, channel = build_worker(settings)
        subscription = channel.subscribe(settings.pipeline.channel)
    except RedisError as e:
        logger.error(f"Worker cannot start, Redis unavailable: {e}")
        close_connections()
        return 1

    def signal_handler(signum, frame):
        logger.info(f"Shutdown signal received ({signal.Signals(signum).name})")
        worker.stop()

    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, signal_handler)

    logger.info(
        f"Worker listening on '{settings.pipeline.channel}' "
        f"(max index {settings.pipeline.max_index}, poll {settings.worker.poll_interval}s)"
    )

    try:
        worker.run(subscription)
    finally:
        try:
            subscription.close()
        except RedisError as e:
            logger.warning(f"Could not unsubscribe cleanly: {e}")
        finally:
            close_connections()

    return 0


if __name__ == "__main__":
    sys.exit(main())
