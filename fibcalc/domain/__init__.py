"""
Domain Layer - Core Business Logic

Framework-independent rules of the pipeline: what an acceptable index is,
how a result is computed, and which errors the pipeline can raise.

Subdomains:
    - fibonacci: index validation, computation, durable store contract
    - shared: exception hierarchy

Usage:
    >>> from fibcalc.domain import SubmittedIndex, fib, DomainException
"""

from .fibonacci import (
    DEFAULT_MAX_INDEX,
    PENDING_VALUE,
    SubmittedIndex,
    SubmittedIndexRepositoryProtocol,
    fib,
)
from .shared import DomainException

__all__ = [
    "SubmittedIndex",
    "SubmittedIndexRepositoryProtocol",
    "fib",
    "PENDING_VALUE",
    "DEFAULT_MAX_INDEX",
    "DomainException",
]
