"""
Submit Index Use Case (Job Dispatcher)

Responsibility:
    Accepts one index from a client and schedules its computation.
    Coordinates between API Layer and the durable store, result cache
    and job channel adapters.

Architecture Notes:
    - Part of Application Layer (Services)
    - Depends only on Protocols (ports); adapters injected by API Layer
    - Adapters are synchronous; each call runs in a worker thread via
      asyncio.to_thread() and is awaited before the next one starts
    - Returns SubmitIndexResult DTO

Process Flow (strict order):
    1. Validate index (SubmittedIndex.parse) - no side effect on failure
    2. Append index to durable store
    3. Write pending placeholder into result cache
    4. Publish index on job channel

    If a stage fails, later stages are NOT attempted and earlier stages are
    NOT rolled back. The failure is reported as the stage's SubmissionError
    subclass, chained to the adapter exception.

Contains:
    - SubmitIndexUseCase: Main use case
    - SubmitIndexResult: DTO for the acknowledgment
"""

import asyncio
import logging

from pydantic import BaseModel, Field

from fibcalc.application.commands.submit_index import SubmitIndexCommand
from fibcalc.application.ports.job_channel import JobChannelProtocol
from fibcalc.application.ports.result_cache import ResultCacheProtocol
from fibcalc.domain.fibonacci.constants import DEFAULT_MAX_INDEX, PENDING_VALUE
from fibcalc.domain.fibonacci.repositories import SubmittedIndexRepositoryProtocol
from fibcalc.domain.fibonacci.value_objects import SubmittedIndex
from fibcalc.domain.shared.exceptions import (
    CacheWriteError,
    PublishError,
    StoreWriteError,
)

logger = logging.getLogger(__name__)


# ============================================================================
# DATA TRANSFER OBJECTS (DTOs)
# ============================================================================


class SubmitIndexResult(BaseModel):
    """
    Acknowledgment returned once all three side effects succeeded.

    The acknowledgment does NOT mean the value is computed; clients poll
    the query service for the result.

    Attributes:
        accepted: Always True (failures raise instead)
        index: Validated index
    """

    accepted: bool = Field(default=True, description="Submission accepted")
    index: int = Field(ge=0, description="Validated index")


# ============================================================================
# USE CASE
# ============================================================================


class SubmitIndexUseCase:
    """
    Job dispatcher: validate, persist, mark pending, publish.

    Attributes:
        store: Durable append-only record of submitted indices
        cache: Result cache (index -> value)
        channel: Pub/sub channel announcing new jobs
        channel_name: Channel to publish on
        max_index: Largest accepted index

    Examples:
        >>> use_case = SubmitIndexUseCase(store, cache, channel, "insert", max_index=40)
        >>> result = await use_case.execute(SubmitIndexCommand(index=7))
        >>> result.index
        7
    """

    def __init__(
        self,
        store: SubmittedIndexRepositoryProtocol,
        cache: ResultCacheProtocol,
        channel: JobChannelProtocol,
        channel_name: str = "insert",
        max_index: int = DEFAULT_MAX_INDEX,
    ) -> None:
        self.store = store
        self.cache = cache
        self.channel = channel
        self.channel_name = channel_name
        self.max_index = max_index

    async def execute(self, command: SubmitIndexCommand) -> SubmitIndexResult:
        """
        Submit one index.

        Args:
            command: SubmitIndexCommand with the raw index

        Returns:
            SubmitIndexResult

        Raises:
            ValidationError: Index rejected (nothing was written)
            StoreWriteError: Durable append failed (nothing was written)
            CacheWriteError: Placeholder write failed (durable row exists)
            PublishError: Publish failed (durable row and placeholder exist)
        """
        index = SubmittedIndex.parse(command.index, max_index=self.max_index)
        key = index.to_key()

        try:
            await asyncio.to_thread(self.store.append, index.value)
        except Exception as exc:
            logger.error(f"Durable append failed for index {index.value}: {exc}")
            raise StoreWriteError(
                f"Failed to record index {index.value}: {exc}", index=index.value
            ) from exc

        try:
            await asyncio.to_thread(self.cache.set, key, PENDING_VALUE)
        except Exception as exc:
            logger.error(f"Pending placeholder write failed for index {index.value}: {exc}")
            raise CacheWriteError(
                f"Failed to mark index {index.value} pending: {exc}", index=index.value
            ) from exc

        try:
            await asyncio.to_thread(self.channel.publish, self.channel_name, key)
        except Exception as exc:
            logger.error(f"Publish failed for index {index.value}: {exc}")
            raise PublishError(
                f"Failed to publish index {index.value}: {exc}", index=index.value
            ) from exc

        logger.info(f"Index {index.value} submitted (published on '{self.channel_name}')")
        return SubmitIndexResult(accepted=True, index=index.value)
