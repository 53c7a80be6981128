"""
Tests for the worker process entry point (fibcalc.worker).

Covers:
- build_worker wiring (settings, optional dead-letter sink)
- main(): startup failure, signal handlers, cleanup on exit
"""

import signal
from unittest.mock import MagicMock, patch

from redis.exceptions import RedisError

from fibcalc import worker as worker_process
from fibcalc.infrastructure.persistence.redis import RedisDeadLetterSink
from fibcalc.shared.settings import PipelineSettings, Settings, WorkerSettings


def test_build_worker_uses_settings():
    """Test worker is configured from pipeline and worker settings."""
    settings = Settings(
        pipeline=PipelineSettings(max_index=30, values_key="fib"),
        worker=WorkerSettings(poll_interval=0.2),
    )

    with patch.object(worker_process, "get_redis_client", return_value=MagicMock()):
        worker, channel = worker_process.build_worker(settings)

    assert worker.max_index == 30
    assert worker.poll_interval == 0.2
    assert worker.cache.values_key == "fib"
    assert worker.dead_letters is None


def test_build_worker_enables_dead_letters():
    """Test dead-letter sink is attached only when enabled."""
    settings = Settings(worker=WorkerSettings(dead_letter_enabled=True, dead_letter_key="dlq"))

    with patch.object(worker_process, "get_redis_client", return_value=MagicMock()):
        worker, _ = worker_process.build_worker(settings)

    assert isinstance(worker.dead_letters, RedisDeadLetterSink)
    assert worker.dead_letters.key == "dlq"


def test_main_returns_1_when_redis_unavailable():
    """Test worker exits with code 1 if Redis cannot be reached."""
    with patch.object(worker_process, "get_settings", return_value=Settings()), patch.object(
        worker_process, "get_redis_client", side_effect=RedisError("down")
    ), patch.object(worker_process, "close_connections") as close_mock:
        assert worker_process.main() == 1

    close_mock.assert_called_once()


def test_main_runs_loop_and_cleans_up():
    """Test main subscribes, installs signal handlers, runs and closes."""
    worker = MagicMock()
    channel = MagicMock()
    subscription = channel.subscribe.return_value

    with patch.object(worker_process, "get_settings", return_value=Settings()), patch.object(
        worker_process, "build_worker", return_value=(worker, channel)
    ), patch.object(worker_process, "close_connections") as close_mock, patch.object(
        worker_process.signal, "signal"
    ) as signal_mock:
        assert worker_process.main() == 0

    channel.subscribe.assert_called_once_with("insert")
    worker.run.assert_called_once_with(subscription)
    subscription.close.assert_called_once()
    close_mock.assert_called_once()
    registered = {c.args[0] for c in signal_mock.call_args_list}
    assert registered == {signal.SIGTERM, signal.SIGINT}


def test_signal_handler_stops_worker():
    """Test SIGTERM handler asks the worker to stop."""
    worker = MagicMock()
    channel = MagicMock()

    with patch.object(worker_process, "get_settings", return_value=Settings()), patch.object(
        worker_process, "build_worker", return_value=(worker, channel)
    ), patch.object(worker_process, "close_connections"), patch.object(
        worker_process.signal, "signal"
    ) as signal_mock:
        worker_process.main()

    handler = signal_mock.call_args_list[0].args[1]
    handler(signal.SIGTERM, None)

    worker.stop.assert_called_once()


def test_main_releases_pool_when_unsubscribe_fails():
    """Test a lost connection during unsubscribe still closes the pool and exits 0."""
    worker = MagicMock()
    channel = MagicMock()
    subscription = channel.subscribe.return_value
    subscription.close.side_effect = RedisError("Connection closed by server")

    with patch.object(worker_process, "get_settings", return_value=Settings()), patch.object(
        worker_process, "build_worker", return_value=(worker, channel)
    ), patch.object(worker_process, "close_connections") as close_mock, patch.object(
        worker_process.signal, "signal"
    ):
        assert worker_process.main() == 0

    subscription.close.assert_called_once()
    close_mock.assert_called_once()
