"""
Values API Schemas

Request and response models for the /api/values endpoints.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmitIndexRequest(BaseModel):
    """
    Request body for POST /api/values.

    The index is accepted as any JSON scalar and validated by the dispatcher,
    so every rejection uses the same INDEX_VALIDATION error format.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"index": 7}})

    index: Any = Field(default=None, description="Index to compute (0..max)")


class SubmitIndexResponse(BaseModel):
    """Acknowledgment: the job was recorded, marked pending and published."""

    model_config = ConfigDict(json_schema_extra={"example": {"accepted": True, "index": 7}})

    accepted: bool = Field(default=True)
    index: int = Field(ge=0)


class SubmittedIndexResponse(BaseModel):
    """One entry of the submission history."""

    index: int = Field(ge=0, description="Submitted index")
