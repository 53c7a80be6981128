"""
SubmitIndexCommand - CQRS Write Command

Encapsulates one client request to compute fib(index).
Part of CQRS pattern - separates write operations from read operations.

Responsibility:
    - Data holder for the raw index received from the client
    - Conversion from API request to application command

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Used by SubmitIndexUseCase
    - Keeps the index RAW: integer/range validation is a domain rule
      (SubmittedIndex.parse) so the use case reports it as ValidationError
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmitIndexCommand(BaseModel):
    """
    Command to submit an index for asynchronous computation.

    Attributes:
        index: Raw index from the client (int, numeric string or integral float)

    Examples:
        >>> SubmitIndexCommand(index="7").index
        '7'
    """

    model_config = ConfigDict(frozen=True)

    index: Any = Field(
        default=None,
        description="Index to compute (non-negative integer, up to the configured max)"
    )
