"""
Job Channel Port

Protocols for the publish/subscribe channel announcing indices to compute.

Delivery is best effort, at most once per connected subscriber. There is
no acknowledgment and no replay: a message published while no worker is
subscribed is lost.
"""

from typing import Optional, Protocol


class SubscriptionProtocol(Protocol):
    """
    Inbox of one subscriber.

    Messages queue in the channel implementation's own buffer until the
    consumer pulls them with get_message(); overflow behaviour is the
    channel's, not the consumer's.
    """

    def get_message(self, timeout: float = 1.0) -> Optional[str]:
        """
        Wait up to timeout seconds for the next message.

        Returns:
            Message payload, or None if nothing arrived in time
        """
        ...

    def close(self) -> None:
        """Unsubscribe and release the connection."""
        ...


class JobChannelProtocol(Protocol):
    """Publish/subscribe channel contract."""

    def publish(self, channel: str, message: str) -> None:
        """Publish message on channel (fire and forget)."""
        ...

    def subscribe(self, channel: str) -> SubscriptionProtocol:
        """Subscribe to channel and return the subscriber's inbox."""
        ...
