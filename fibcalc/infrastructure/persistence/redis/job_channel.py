"""
Redis Job Channel.

Implements JobChannelProtocol with Redis PUBLISH / SUBSCRIBE.

Delivery Semantics:
    - At most once per connected subscriber
    - No replay: messages published while nobody listens are lost
    - Subscriber inbox is the pub/sub connection's socket buffer; overflow
      is governed by the Redis server (client-output-buffer-limit pubsub)

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - RedisSubscription turns redis-py's PubSub into an explicit pull inbox
      (get_message with timeout) consumed by the compute worker loop
"""

import logging
from typing import Optional

from redis import Redis
from redis.client import PubSub

logger = logging.getLogger(__name__)


class RedisSubscription:
    """
    Pull-style inbox over one redis-py PubSub connection.

    Subscribe confirmations are filtered out; only message payloads are
    returned.
    """

    def __init__(self, pubsub: PubSub, channel: str) -> None:
        self.pubsub = pubsub
        self.channel = channel

    def get_message(self, timeout: float = 1.0) -> Optional[str]:
        """
        Wait up to timeout seconds for the next message.

        Returns:
            Payload string, or None if nothing arrived
        """
        message = self.pubsub.get_message(ignore_subscribe_messages=True, timeout=timeout)
        if message is None or message.get("type") != "message":
            return None

        data = message.get("data")
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    def close(self) -> None:
        try:
            self.pubsub.unsubscribe(self.channel)
        finally:
            self.pubsub.close()
            logger.info(f"Unsubscribed from channel '{self.channel}'")


class RedisJobChannel:
    """
    Pub/sub channel backed by Redis.

    Examples:
        >>> channel = RedisJobChannel(get_redis_client())
        >>> channel.publish("insert", "5")
        >>> subscription = channel.subscribe("insert")
        >>> subscription.get_message(timeout=1.0)
        '5'
    """

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    def publish(self, channel: str, message: str) -> None:
        receivers = self.redis.publish(channel, message)
        if not receivers:
            # Not an error: the message is simply lost (no replay)
            logger.warning(f"Published '{message}' on '{channel}' with no subscribers")
        else:
            logger.debug(f"Published '{message}' on '{channel}' ({receivers} receivers)")

    def subscribe(self, channel: str) -> RedisSubscription:
        pubsub = self.redis.pubsub(ignore_subscribe_messages=True)
        pubsub.subscribe(channel)
        logger.info(f"Subscribed to channel '{channel}'")
        return RedisSubscription(pubsub, channel)
