"""
ListCurrentValuesQuery - CQRS Read Query

Query object and handler returning the result cache snapshot: every index
that has an entry, mapped to either the pending marker or its value.

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Values are returned exactly as stored (strings)
    - A failed computation leaves its entry pending; readers cannot tell a
      slow job from a dropped one
"""

import asyncio

from pydantic import BaseModel

from fibcalc.application.ports.result_cache import ResultCacheProtocol


class ListCurrentValuesQuery(BaseModel):
    """Query for the current cache snapshot (no parameters)."""


class CurrentValuesResult(BaseModel):
    """
    Result DTO returned by ListCurrentValuesQueryHandler.

    Attributes:
        values: Mapping index key -> "pending" or decimal result
    """

    values: dict[str, str]


class ListCurrentValuesQueryHandler:
    """
    Handler for the cache snapshot.

    Usage:
        handler = ListCurrentValuesQueryHandler(cache)
        result = await handler.handle(ListCurrentValuesQuery())
        result.values  # {"5": "5", "7": "pending"}
    """

    def __init__(self, cache: ResultCacheProtocol) -> None:
        self.cache = cache

    async def handle(self, query: ListCurrentValuesQuery) -> CurrentValuesResult:
        values = await asyncio.to_thread(self.cache.get_all)
        return CurrentValuesResult(values=dict(values))
