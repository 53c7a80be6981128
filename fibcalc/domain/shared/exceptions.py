"""
Domain Layer Exceptions

Exception hierarchy for the Fibonacci job pipeline.

Responsibility:
    - Base exception class for domain errors
    - Validation error raised before any side effect
    - Submission errors for each fallible dispatcher stage
    - Worker-side compute failure

Architecture Notes:
    - Part of Shared Domain (used by Application and API layers)
    - Infrastructure errors (RedisError, SQLAlchemyError) are translated into
      SubmissionError subclasses at the use case boundary and chained
    - API Layer maps these exceptions to HTTP status codes
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    All pipeline exceptions inherit from this class to enable type-safe
    error handling in Application and API layers.

    Examples:
        >>> raise DomainException("Business rule violation")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class ValidationError(DomainException):
    """
    Raised when a submitted index is rejected.

    This exception is raised when:
    - index is missing or empty
    - index is not an integer (e.g. "abc", "4.5", True)
    - index is negative
    - index exceeds the configured maximum

    Raised before any side effect: no durable row, no cache entry, no
    published message.

    Examples:
        >>> raise ValidationError("Index too high: 41 (max 40)", original_value=41)
    """

    def __init__(self, message: str, original_value: Any = None) -> None:
        """
        Initialize index validation error.

        Args:
            message: Error description
            original_value: Raw value that failed validation (optional)
        """
        self.original_value = original_value
        super().__init__(message)


class SubmissionError(DomainException):
    """
    Base class for dispatcher side-effect failures.

    Each stage of a submission (durable append, placeholder write, publish)
    has its own subclass. Earlier stages that succeeded are NOT rolled back.

    Attributes:
        index: Index being submitted
        stage: Name of the failed stage
    """

    stage: str = "unknown"

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        self.index = index
        super().__init__(message)


class StoreWriteError(SubmissionError):
    """
    Raised when the durable append fails.

    Nothing else was attempted: no cache entry and no job message exist,
    so the client can simply resubmit.
    """

    stage = "durable_store"


class CacheWriteError(SubmissionError):
    """
    Raised when the pending placeholder cannot be written.

    The durable row already exists (orphan SubmittedIndex, no pending entry,
    no job message). Accepted inconsistency, no rollback.
    """

    stage = "result_cache"


class PublishError(SubmissionError):
    """
    Raised when the job message cannot be published.

    The durable row and the pending placeholder already exist; the entry
    will stay pending until the index is resubmitted.
    """

    stage = "job_channel"


class ComputeFailure(DomainException):
    """
    Worker-side failure while handling one job message.

    Covers unparseable payloads, errors raised by the computation and
    failed result writes. Never surfaced to the submitting client: the
    worker logs it and drops the message.

    Attributes:
        payload: Raw message payload
        index: Parsed index (None if payload was not an integer)
    """

    def __init__(
        self, message: str, payload: Optional[str] = None, index: Optional[int] = None
    ) -> None:
        self.payload = payload
        self.index = index
        super().__init__(message)
