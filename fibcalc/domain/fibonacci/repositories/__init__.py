"""
Fibonacci Repository Interfaces.

Available Interfaces:
    - SubmittedIndexRepositoryProtocol: Append-only durable store of submitted indices
"""

from .submitted_index_repository import SubmittedIndexRepositoryProtocol

__all__ = ["SubmittedIndexRepositoryProtocol"]
