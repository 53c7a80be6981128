"""
SubmittedIndexRepository Interface

Repository pattern interface for the durable, append-only record of
submitted indices.

Responsibility:
    - Define data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing (easy to fake or mock)

Architecture Notes:
    - Protocol-based interface (structural typing)
    - Synchronous methods; async callers wrap them with asyncio.to_thread()
    - Implementation in Infrastructure layer (SQLAlchemy)
"""

from typing import Protocol


class SubmittedIndexRepositoryProtocol(Protocol):
    """
    Protocol defining the durable store contract.

    Business Rules:
        - Append-only: no update, no delete
        - Duplicates allowed (one row per accepted submission)
        - list_all() returns insertion order

    Usage:
        >>> class SubmitIndexUseCase:
        ...     def __init__(self, store: SubmittedIndexRepositoryProtocol, ...):
        ...         self.store = store
    """

    def append(self, index: int) -> None:
        """
        Append one submitted index.

        Args:
            index: Validated index

        Raises:
            Exception: Implementation-specific storage error
        """
        ...

    def list_all(self) -> list[int]:
        """
        Return every submitted index in insertion order.

        Returns:
            List of indices, empty list if nothing was submitted
        """
        ...
