"""Application Layer Queries (CQRS read side)."""

from fibcalc.application.queries.list_current_values import (
    CurrentValuesResult,
    ListCurrentValuesQuery,
    ListCurrentValuesQueryHandler,
)
from fibcalc.application.queries.list_submitted_indices import (
    ListSubmittedIndicesQuery,
    ListSubmittedIndicesQueryHandler,
    SubmittedIndexItem,
)

__all__ = [
    "ListSubmittedIndicesQuery",
    "ListSubmittedIndicesQueryHandler",
    "SubmittedIndexItem",
    "ListCurrentValuesQuery",
    "ListCurrentValuesQueryHandler",
    "CurrentValuesResult",
]
