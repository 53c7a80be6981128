"""
Compute Worker

Single sequential consumer of the job channel. Each job message carries one
index; the worker computes fib(index) and overwrites the pending placeholder
in the result cache with the result.

Responsibility:
    - Pull messages from the subscription inbox, one at a time
    - Compute with the naive recursion (no memoization across calls)
    - Write the result into the result cache
    - Drop and log failed messages (entry stays pending)
    - Optionally record dropped messages in a dead-letter sink
    - Log each step with duration and memory usage

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Synchronous: the computation is CPU-bound and not preemptible, so a
      large index blocks every message queued behind it
    - One active worker per deployment; several workers would each recompute
      and overwrite the same keys
    - No acknowledgment and no retry: a dropped message is gone
"""

import logging
import os
import time
from datetime import datetime
from typing import Optional

import psutil

from fibcalc.application.ports.dead_letter import DeadLetterSinkProtocol
from fibcalc.application.ports.job_channel import SubscriptionProtocol
from fibcalc.application.ports.result_cache import ResultCacheProtocol
from fibcalc.domain.fibonacci.constants import DEFAULT_MAX_INDEX
from fibcalc.domain.fibonacci.services import fib
from fibcalc.domain.fibonacci.value_objects import SubmittedIndex
from fibcalc.domain.shared.exceptions import ComputeFailure, ValidationError

# Configure logger for this module
logger = logging.getLogger(__name__)


class ComputeWorker:
    """
    Explicit consumption loop over one subscription.

    Attributes:
        cache: Result cache receiving computed values
        max_index: Largest index the worker will compute
        poll_interval: Seconds to block on the inbox before re-checking stop flag
        dead_letters: Optional sink for dropped messages (None = log only)
        running: Loop flag, cleared by stop()
        jobs_processed: Messages whose result was written
        jobs_failed: Messages dropped

    Examples:
        >>> worker = ComputeWorker(cache, max_index=40)
        >>> worker.handle_message("7")
        True
        >>> cache.get("7")
        '13'
    """

    def __init__(
        self,
        cache: ResultCacheProtocol,
        max_index: int = DEFAULT_MAX_INDEX,
        poll_interval: float = 1.0,
        dead_letters: Optional[DeadLetterSinkProtocol] = None,
    ) -> None:
        self.cache = cache
        self.max_index = max_index
        self.poll_interval = poll_interval
        self.dead_letters = dead_letters
        self.running = False
        self.jobs_processed = 0
        self.jobs_failed = 0
        self._process = psutil.Process(os.getpid())

    def run(self, subscription: SubscriptionProtocol) -> None:
        """
        Consume messages until stop() is called.

        Errors raised by the subscription itself (lost connection) are logged
        and the loop keeps polling; errors of a single job never leave
        handle_message().

        Args:
            subscription: Inbox returned by JobChannelProtocol.subscribe()
        """
        self.running = True
        self._log_with_memory("START", "Worker started - waiting for jobs...")

        while self.running:
            try:
                message = subscription.get_message(timeout=self.poll_interval)
            except Exception as exc:
                logger.error(f"Unexpected error in worker loop: {exc}")
                time.sleep(self.poll_interval)
                continue

            if message is None:
                continue

            self.handle_message(message)

        self._log_with_memory(
            "STOP",
            f"Worker stopped. Processed: {self.jobs_processed}, Failed: {self.jobs_failed}",
        )

    def stop(self) -> None:
        """Ask the loop to exit after the current message."""
        logger.info("Worker stop requested")
        self.running = False

    def handle_message(self, payload: str) -> bool:
        """
        Process one job message.

        Never raises: any failure is converted to ComputeFailure, logged and
        dropped. The cache entry for the index is left untouched (pending).

        Args:
            payload: Raw message payload (decimal index)

        Returns:
            True if the result was written, False if the message was dropped
        """
        start_time = time.time()
        try:
            index = self._compute_and_store(payload)
        except ComputeFailure as failure:
            self._drop(failure)
            return False
        except Exception as exc:
            self._drop(ComputeFailure(f"Unexpected error: {exc}", payload=payload))
            return False

        duration_ms = (time.time() - start_time) * 1000
        self.jobs_processed += 1
        self._log_with_memory("COMPUTED", f"fib({index}) stored in {duration_ms:.0f}ms")
        return True

    def _compute_and_store(self, payload: str) -> int:
        try:
            index = SubmittedIndex.parse(payload, max_index=self.max_index)
        except ValidationError as exc:
            raise ComputeFailure(
                f"Invalid job payload: {exc.message}", payload=payload
            ) from exc

        try:
            result = fib(index.value)
        except Exception as exc:
            raise ComputeFailure(
                f"Computation failed for index {index.value}: {exc}",
                payload=payload,
                index=index.value,
            ) from exc

        try:
            self.cache.set(index.to_key(), str(result))
        except Exception as exc:
            raise ComputeFailure(
                f"Result write failed for index {index.value}: {exc}",
                payload=payload,
                index=index.value,
            ) from exc

        return index.value

    def _drop(self, failure: ComputeFailure) -> None:
        self.jobs_failed += 1
        logger.error(
            f"Dropping job {_preview(failure.payload)}: {failure.message}",
            exc_info=True,
        )
        self._record_dead_letter(failure)

    def _record_dead_letter(self, failure: ComputeFailure) -> None:
        if self.dead_letters is None:
            return
        try:
            self.dead_letters.record(
                payload=failure.payload or "",
                error=failure.message,
                index=failure.index,
            )
        except Exception as exc:
            logger.error(f"Dead letter write failed for {_preview(failure.payload)}: {exc}")

    def _log_with_memory(self, stage: str, message: str) -> None:
        memory_mb = self._process.memory_info().rss / 1024 / 1024
        timestamp = datetime.now().isoformat()
        logger.info(f"{timestamp} | {memory_mb:.1f}MB | {stage} | {message}")


def _preview(payload: Optional[str], limit: int = 40) -> str:
    """repr() of a payload, shortened for log lines."""
    if payload is not None and len(payload) > limit:
        return f"{payload[:limit]!r}... ({len(payload)} chars)"
    return repr(payload)
