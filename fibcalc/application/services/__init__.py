"""
Application Services (Use Cases)

Orchestration of domain objects and ports for write operations.
"""

from fibcalc.application.services.submit_index_use_case import (
    SubmitIndexResult,
    SubmitIndexUseCase,
)

__all__ = ["SubmitIndexUseCase", "SubmitIndexResult"]
