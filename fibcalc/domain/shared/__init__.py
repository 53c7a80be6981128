"""
Shared Domain Module

Shared domain concepts used across the pipeline.

This module exports:
    - DomainException: Base exception for all domain errors
    - ValidationError, SubmissionError, StoreWriteError, CacheWriteError,
      PublishError, ComputeFailure
"""

from .exceptions import (
    CacheWriteError,
    ComputeFailure,
    DomainException,
    PublishError,
    StoreWriteError,
    SubmissionError,
    ValidationError,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "SubmissionError",
    "StoreWriteError",
    "CacheWriteError",
    "PublishError",
    "ComputeFailure",
]
