"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - store: In-memory durable store (SubmittedIndexRepositoryProtocol)
    - cache: In-memory result cache (ResultCacheProtocol)
    - channel: In-memory pub/sub channel (JobChannelProtocol)
    - pipeline_settings: PipelineSettings with max_index=40

Architecture Notes:
    - Fakes follow the port Protocols structurally, no Redis or database needed
    - The fake channel keeps Redis pub/sub semantics: a message published
      while nobody is subscribed is lost
    - Each fake can be told to fail, for failure injection

Usage:
    def test_something(store, cache, channel):
        use_case = SubmitIndexUseCase(store, cache, channel)
"""

import logging
from collections import deque
from typing import Optional

import pytest

from fibcalc.shared.settings import PipelineSettings, WorkerSettings

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================================
# IN-MEMORY FAKES
# ============================================================================


class InMemorySubmittedIndexRepository:
    """Append-only list; append raises `error` when set."""

    def __init__(self) -> None:
        self.rows: list[int] = []
        self.error: Optional[Exception] = None

    def append(self, index: int) -> None:
        if self.error is not None:
            raise self.error
        self.rows.append(index)

    def list_all(self) -> list[int]:
        return list(self.rows)


class InMemoryResultCache:
    """Dict-backed cache; set raises `error` when set."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.error: Optional[Exception] = None
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        if self.error is not None:
            raise self.error
        self.values[key] = value
        self.writes.append((key, value))

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def get_all(self) -> dict[str, str]:
        return dict(self.values)


class InMemorySubscription:
    """Unbounded FIFO inbox of one subscriber."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        self.inbox: deque = deque()
        self.closed = False

    def get_message(self, timeout: float = 1.0) -> Optional[str]:
        if self.inbox:
            return self.inbox.popleft()
        return None

    def close(self) -> None:
        self.closed = True


class InMemoryJobChannel:
    """
    Fan-out to current subscribers only (no replay).

    `published` records every publish, delivered or not.
    """

    def __init__(self) -> None:
        self.published: list[tuple[str, str]] = []
        self.subscriptions: list[InMemorySubscription] = []
        self.error: Optional[Exception] = None

    def publish(self, channel: str, message: str) -> None:
        if self.error is not None:
            raise self.error
        self.published.append((channel, message))
        for subscription in self.subscriptions:
            if subscription.channel == channel and not subscription.closed:
                subscription.inbox.append(message)

    def subscribe(self, channel: str) -> InMemorySubscription:
        subscription = InMemorySubscription(channel)
        self.subscriptions.append(subscription)
        return subscription


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def store():
    """Provide empty in-memory durable store."""
    return InMemorySubmittedIndexRepository()


@pytest.fixture
def cache():
    """Provide empty in-memory result cache."""
    return InMemoryResultCache()


@pytest.fixture
def channel():
    """Provide in-memory job channel without subscribers."""
    return InMemoryJobChannel()


@pytest.fixture
def pipeline_settings():
    """Pipeline settings with the default limits (max index 40)."""
    return PipelineSettings(max_index=40, values_key="values", channel="insert")


@pytest.fixture
def worker_settings():
    """Worker settings with a short poll interval."""
    return WorkerSettings(poll_interval=0.01)


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers for test categorization.

    Markers:
        - integration: Integration tests (full pipeline on in-memory stores)
        - unit: Unit tests (no external dependencies)
        - slow: Slow tests (>1s execution time)

    Usage:
        # Run all except slow tests:
        # pytest -m "not slow"
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (may require external services)"
    )
    config.addinivalue_line(
        "markers", "unit: Unit tests (no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests (>1s execution time)"
    )
