"""
Tests for Redis adapters (result cache, job channel, dead-letter sink).

Covers:
- RedisResultCache: HSET/HGET/HGETALL on the values hash
- RedisJobChannel: PUBLISH, SUBSCRIBE returning a pull inbox
- RedisSubscription: message filtering, bytes decoding, close
- RedisDeadLetterSink: LPUSH of JSON entries with length cap
"""

import json
from unittest.mock import MagicMock

import pytest
from redis import Redis
from redis.exceptions import ConnectionError

from fibcalc.infrastructure.persistence.redis import (
    RedisDeadLetterSink,
    RedisJobChannel,
    RedisResultCache,
    RedisSubscription,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_redis():
    """Create mock Redis client."""
    return MagicMock(spec=Redis)


# ============================================================================
# RedisResultCache
# ============================================================================


def test_cache_set_writes_hash_field(mock_redis):
    """Test set() does HSET on the values hash."""
    cache = RedisResultCache(mock_redis, values_key="values")

    cache.set("5", "pending")

    mock_redis.hset.assert_called_once_with("values", "5", "pending")


def test_cache_get_reads_hash_field(mock_redis):
    """Test get() does HGET and returns the value."""
    mock_redis.hget.return_value = "13"
    cache = RedisResultCache(mock_redis)

    assert cache.get("7") == "13"
    mock_redis.hget.assert_called_once_with("values", "7")


def test_cache_get_missing_returns_none(mock_redis):
    """Test get() returns None for absent key."""
    mock_redis.hget.return_value = None

    assert RedisResultCache(mock_redis).get("9") is None


def test_cache_get_all_returns_mapping(mock_redis):
    """Test get_all() returns HGETALL result as dict."""
    mock_redis.hgetall.return_value = {"5": "5", "7": "pending"}

    assert RedisResultCache(mock_redis, values_key="fib").get_all() == {"5": "5", "7": "pending"}
    mock_redis.hgetall.assert_called_once_with("fib")


def test_cache_get_all_empty(mock_redis):
    """Test get_all() returns empty dict when hash does not exist."""
    mock_redis.hgetall.return_value = {}

    assert RedisResultCache(mock_redis).get_all() == {}


def test_cache_errors_propagate(mock_redis):
    """Test Redis errors are not swallowed by the adapter."""
    mock_redis.hset.side_effect = ConnectionError("down")

    with pytest.raises(ConnectionError):
        RedisResultCache(mock_redis).set("5", "pending")


# ============================================================================
# RedisJobChannel
# ============================================================================


def test_publish_sends_message(mock_redis):
    """Test publish() does PUBLISH channel message."""
    mock_redis.publish.return_value = 1

    RedisJobChannel(mock_redis).publish("insert", "5")

    mock_redis.publish.assert_called_once_with("insert", "5")


def test_publish_without_subscribers_does_not_raise(mock_redis):
    """Test message with zero receivers is lost silently (at most once)."""
    mock_redis.publish.return_value = 0

    RedisJobChannel(mock_redis).publish("insert", "5")


def test_publish_errors_propagate(mock_redis):
    """Test publish errors reach the caller."""
    mock_redis.publish.side_effect = ConnectionError("down")

    with pytest.raises(ConnectionError):
        RedisJobChannel(mock_redis).publish("insert", "5")


def test_subscribe_returns_subscription(mock_redis):
    """Test subscribe() subscribes a PubSub and wraps it."""
    pubsub = MagicMock()
    mock_redis.pubsub.return_value = pubsub

    subscription = RedisJobChannel(mock_redis).subscribe("insert")

    pubsub.subscribe.assert_called_once_with("insert")
    assert isinstance(subscription, RedisSubscription)
    assert subscription.channel == "insert"


# ============================================================================
# RedisSubscription
# ============================================================================


def test_subscription_returns_message_data():
    """Test get_message() returns payload of a 'message' event."""
    pubsub = MagicMock()
    pubsub.get_message.return_value = {"type": "message", "channel": "insert", "data": "5"}

    assert RedisSubscription(pubsub, "insert").get_message(timeout=0.5) == "5"
    pubsub.get_message.assert_called_once_with(ignore_subscribe_messages=True, timeout=0.5)


def test_subscription_decodes_bytes():
    """Test bytes payloads are decoded to str."""
    pubsub = MagicMock()
    pubsub.get_message.return_value = {"type": "message", "data": b"12"}

    assert RedisSubscription(pubsub, "insert").get_message() == "12"


def test_subscription_returns_none_on_timeout():
    """Test get_message() returns None when nothing arrived."""
    pubsub = MagicMock()
    pubsub.get_message.return_value = None

    assert RedisSubscription(pubsub, "insert").get_message() is None


def test_subscription_ignores_non_message_events():
    """Test subscribe confirmations are not returned as jobs."""
    pubsub = MagicMock()
    pubsub.get_message.return_value = {"type": "subscribe", "data": 1}

    assert RedisSubscription(pubsub, "insert").get_message() is None


def test_subscription_close_unsubscribes():
    """Test close() unsubscribes and closes the PubSub."""
    pubsub = MagicMock()

    RedisSubscription(pubsub, "insert").close()

    pubsub.unsubscribe.assert_called_once_with("insert")
    pubsub.close.assert_called_once()


def test_subscription_close_releases_pubsub_when_unsubscribe_fails():
    """Test PubSub connection is closed even if UNSUBSCRIBE fails."""
    pubsub = MagicMock()
    pubsub.unsubscribe.side_effect = ConnectionError("Connection closed by server")

    with pytest.raises(ConnectionError):
        RedisSubscription(pubsub, "insert").close()

    pubsub.close.assert_called_once()


# ============================================================================
# RedisDeadLetterSink
# ============================================================================


def test_dead_letter_pushes_json_entry(mock_redis):
    """Test record() LPUSHes a JSON entry and trims the list."""
    pipe = MagicMock()
    mock_redis.pipeline.return_value = pipe
    sink = RedisDeadLetterSink(mock_redis, key="dead_letters", max_length=100)

    sink.record(payload="9", error="boom", index=9)

    key, raw = pipe.lpush.call_args[0]
    entry = json.loads(raw)
    assert key == "dead_letters"
    assert entry["payload"] == "9"
    assert entry["index"] == 9
    assert entry["error"] == "boom"
    assert "failed_at" in entry
    pipe.ltrim.assert_called_once_with("dead_letters", 0, 99)
    pipe.execute.assert_called_once()


def test_dead_letter_without_cap_does_not_trim(mock_redis):
    """Test max_length=None keeps every entry."""
    pipe = MagicMock()
    mock_redis.pipeline.return_value = pipe

    RedisDeadLetterSink(mock_redis, max_length=None).record(payload="abc", error="bad")

    pipe.ltrim.assert_not_called()
