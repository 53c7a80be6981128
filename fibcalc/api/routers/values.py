"""
API Router for Fibonacci Values

Responsibility:
    HTTP interface of the job dispatcher and the query service.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Depends on Application Layer (SubmitIndexUseCase, query handlers)
    - Adapters built by dependency providers below; tests replace them
      with app.dependency_overrides
    - No business logic - pure HTTP concerns

Contains:
    - POST /values          - Submit an index (202 Accepted)
    - GET  /values/all      - Every submitted index, insertion order
    - GET  /values/current  - Result cache snapshot (index -> value or "pending")

Error Handling:
    Domain exceptions propagate to the global handlers in fibcalc.api.main
    (ValidationError -> 422, SubmissionError -> 503).
"""

import logging

from fastapi import APIRouter, Depends, status

from fibcalc.api.schemas.common import ErrorResponse
from fibcalc.api.schemas.values import (
    SubmitIndexRequest,
    SubmitIndexResponse,
    SubmittedIndexResponse,
)
from fibcalc.application.commands.submit_index import SubmitIndexCommand
from fibcalc.application.ports.job_channel import JobChannelProtocol
from fibcalc.application.ports.result_cache import ResultCacheProtocol
from fibcalc.application.queries.list_current_values import (
    ListCurrentValuesQuery,
    ListCurrentValuesQueryHandler,
)
from fibcalc.application.queries.list_submitted_indices import (
    ListSubmittedIndicesQuery,
    ListSubmittedIndicesQueryHandler,
)
from fibcalc.application.services.submit_index_use_case import SubmitIndexUseCase
from fibcalc.domain.fibonacci.repositories import SubmittedIndexRepositoryProtocol
from fibcalc.infrastructure.persistence.database import get_session_factory
from fibcalc.infrastructure.persistence.redis.connection import get_redis_client
from fibcalc.infrastructure.persistence.redis.job_channel import RedisJobChannel
from fibcalc.infrastructure.persistence.redis.result_cache import RedisResultCache
from fibcalc.infrastructure.persistence.repositories import SqlSubmittedIndexRepository
from fibcalc.shared.settings import PipelineSettings, get_settings

# Configure logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/values",
    tags=["values"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def get_pipeline_settings() -> PipelineSettings:
    return get_settings().pipeline


def get_submitted_index_repository() -> SubmittedIndexRepositoryProtocol:
    return SqlSubmittedIndexRepository(get_session_factory())


def get_result_cache(
    pipeline: PipelineSettings = Depends(get_pipeline_settings),
) -> ResultCacheProtocol:
    return RedisResultCache(get_redis_client(), values_key=pipeline.values_key)


def get_job_channel() -> JobChannelProtocol:
    return RedisJobChannel(get_redis_client())


def get_submit_index_use_case(
    store: SubmittedIndexRepositoryProtocol = Depends(get_submitted_index_repository),
    cache: ResultCacheProtocol = Depends(get_result_cache),
    channel: JobChannelProtocol = Depends(get_job_channel),
    pipeline: PipelineSettings = Depends(get_pipeline_settings),
) -> SubmitIndexUseCase:
    """
    Dependency injection for SubmitIndexUseCase.

    Returns:
        SubmitIndexUseCase wired to the durable store, result cache and job
        channel, using the configured channel name and maximum index
    """
    return SubmitIndexUseCase(
        store=store,
        cache=cache,
        channel=channel,
        channel_name=pipeline.channel,
        max_index=pipeline.max_index,
    )


def get_list_submitted_indices_handler(
    store: SubmittedIndexRepositoryProtocol = Depends(get_submitted_index_repository),
) -> ListSubmittedIndicesQueryHandler:
    return ListSubmittedIndicesQueryHandler(store)


def get_list_current_values_handler(
    cache: ResultCacheProtocol = Depends(get_result_cache),
) -> ListCurrentValuesQueryHandler:
    return ListCurrentValuesQueryHandler(cache)


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=SubmitIndexResponse,
    summary="Submit an index for computation",
    description=(
        "Records the index, marks it pending in the result cache and publishes "
        "a job for the compute worker. Returns before the value is computed; "
        "poll GET /api/values/current for the result."
    ),
    responses={
        422: {"model": ErrorResponse, "description": "Index missing, non-integer, negative or too high"},
        503: {"model": ErrorResponse, "description": "Durable store, cache or channel unavailable"},
    },
)
async def submit_index(
    request: SubmitIndexRequest,
    use_case: SubmitIndexUseCase = Depends(get_submit_index_use_case),
) -> SubmitIndexResponse:
    """
    Submit an index.

    Process Flow:
        1. Convert request to SubmitIndexCommand
        2. Delegate to use_case.execute(command)
        3. Return HTTP 202 with the validated index
    """
    result = await use_case.execute(SubmitIndexCommand(index=request.index))
    return SubmitIndexResponse(accepted=result.accepted, index=result.index)


@router.get(
    "/all",
    status_code=status.HTTP_200_OK,
    response_model=list[SubmittedIndexResponse],
    summary="List every submitted index",
    description="Full submission history in insertion order, duplicates included.",
)
async def list_all_indices(
    handler: ListSubmittedIndicesQueryHandler = Depends(get_list_submitted_indices_handler),
) -> list[SubmittedIndexResponse]:
    items = await handler.handle(ListSubmittedIndicesQuery())
    return [SubmittedIndexResponse(index=item.index) for item in items]


@router.get(
    "/current",
    status_code=status.HTTP_200_OK,
    response_model=dict[str, str],
    summary="Current computed values",
    description=(
        "Mapping index -> value for every index in the result cache. "
        "Entries not yet computed (or dropped by the worker) read \"pending\"."
    ),
)
async def list_current_values(
    handler: ListCurrentValuesQueryHandler = Depends(get_list_current_values_handler),
) -> dict[str, str]:
    result = await handler.handle(ListCurrentValuesQuery())
    return result.values
