"""
Dead Letter Port

Optional sink for job messages the compute worker had to drop.
"""

from typing import Optional, Protocol


class DeadLetterSinkProtocol(Protocol):
    """Records a dropped message for later inspection."""

    def record(self, payload: str, error: str, index: Optional[int] = None) -> None:
        """
        Record one dropped message.

        Args:
            payload: Raw message payload
            error: Error description
            index: Parsed index, None if payload was not an integer
        """
        ...
