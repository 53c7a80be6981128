"""
Result Cache Port

Protocol for the key -> value cache holding pending placeholders and
computed results.
"""

from typing import Optional, Protocol


class ResultCacheProtocol(Protocol):
    """
    Result cache contract.

    Keys are the decimal text of an index, values are either the pending
    marker or the decimal text of the computed result. Single-key writes
    are assumed atomic; no compare-and-swap is offered.
    """

    def set(self, key: str, value: str) -> None:
        """Write (or overwrite) one entry."""
        ...

    def get(self, key: str) -> Optional[str]:
        """Return the entry value, None if absent."""
        ...

    def get_all(self) -> dict[str, str]:
        """Return every entry, empty dict if none."""
        ...
