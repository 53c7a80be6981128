"""API Layer Schemas (HTTP request/response models)."""

from fibcalc.api.schemas.common import ErrorResponse
from fibcalc.api.schemas.values import (
    SubmitIndexRequest,
    SubmitIndexResponse,
    SubmittedIndexResponse,
)

__all__ = [
    "ErrorResponse",
    "SubmitIndexRequest",
    "SubmitIndexResponse",
    "SubmittedIndexResponse",
]
