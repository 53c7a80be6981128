"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Provides consistent error structure across all endpoints.

    Attributes:
        code: Machine-readable error code (e.g., "INDEX_VALIDATION", "PUBLISH_FAILED")
        message: Human-readable error message
        details: Optional additional error details
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "INDEX_VALIDATION",
                "message": "ValidationError: Index too high: 41 (max 40)",
                "details": {"original_value": 41},
            }
        }
    )

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )
