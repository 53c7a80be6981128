"""
Fibonacci Subdomain

Index validation, the Fibonacci computation and the durable store contract.

Exports:
    - SubmittedIndex: Value object for an accepted index
    - SubmittedIndexRepositoryProtocol: Durable store interface
    - fib: The (deliberately naive) computation
    - PENDING_VALUE, DEFAULT_MAX_INDEX: Pipeline constants
"""

from .constants import DEFAULT_MAX_INDEX, MIN_INDEX, PENDING_VALUE
from .repositories import SubmittedIndexRepositoryProtocol
from .services import fib
from .value_objects import SubmittedIndex

__all__ = [
    "SubmittedIndex",
    "SubmittedIndexRepositoryProtocol",
    "fib",
    "PENDING_VALUE",
    "DEFAULT_MAX_INDEX",
    "MIN_INDEX",
]
