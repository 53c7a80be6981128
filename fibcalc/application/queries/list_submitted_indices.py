"""
ListSubmittedIndicesQuery - CQRS Read Query

Query object and handler returning every index ever accepted, read from the
durable store.

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Handler wraps the synchronous repository call in asyncio.to_thread()
    - Storage errors propagate unchanged (API Layer maps SQLAlchemyError to
      503 DATABASE_UNAVAILABLE)
"""

import asyncio

from pydantic import BaseModel, Field

from fibcalc.domain.fibonacci.repositories import SubmittedIndexRepositoryProtocol


class ListSubmittedIndicesQuery(BaseModel):
    """Query for the full submission history (no parameters)."""


class SubmittedIndexItem(BaseModel):
    """
    One submission record.

    Attributes:
        index: Submitted index
    """

    index: int = Field(ge=0, description="Submitted index")


class ListSubmittedIndicesQueryHandler:
    """
    Handler for listing submitted indices.

    Returns indices in insertion order, duplicates included.

    Usage:
        handler = ListSubmittedIndicesQueryHandler(store)
        items = await handler.handle(ListSubmittedIndicesQuery())
    """

    def __init__(self, store: SubmittedIndexRepositoryProtocol) -> None:
        self.store = store

    async def handle(self, query: ListSubmittedIndicesQuery) -> list[SubmittedIndexItem]:
        indices = await asyncio.to_thread(self.store.list_all)
        return [SubmittedIndexItem(index=index) for index in indices]
