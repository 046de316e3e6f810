"""Unit tests for structlog configuration."""

import json
import logging
from unittest.mock import AsyncMock

import pytest
import structlog

from retry_layer.config import Settings
from retry_layer.logging_config import (
    add_app_context,
    configure_from_settings,
    configure_logging,
)
from retry_layer.retry.backoff import Backoff
from retry_layer.retry.engine import retry
from retry_layer.retry.exceptions import RetryAttemptsExceeded


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def json_lines(out: str) -> list[dict]:
    return [json.loads(line) for line in out.strip().splitlines() if line.startswith("{")]


def test_add_app_context():
    event = add_app_context(None, "info", {"event": "hello"})

    assert event["app"] == "retry-layer"


def test_configure_logging_sets_level():
    configure_logging(log_level="warning", environment="development")

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1


def test_development_logging_renders_console(capsys: pytest.CaptureFixture[str]):
    configure_logging(log_level="DEBUG", environment="development")
    capsys.readouterr()

    structlog.get_logger("retry_layer.test").warning("attempt failed", attempt_index=2)

    out = capsys.readouterr().out
    assert "attempt failed" in out
    assert "attempt_index=2" in out


def test_development_logging_renders_exceptions(capsys: pytest.CaptureFixture[str]):
    configure_logging(log_level="INFO", environment="development")
    capsys.readouterr()

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        structlog.get_logger("retry_layer.test").exception("operation crashed")

    out = capsys.readouterr().out
    assert "operation crashed" in out
    assert "RuntimeError" in out


def test_production_logging_renders_json(capsys: pytest.CaptureFixture[str]):
    configure_logging(log_level="INFO", environment="production")
    capsys.readouterr()

    structlog.get_logger("retry_layer.test").info("attempt failed", attempt_index=2)

    payload = json_lines(capsys.readouterr().out)[-1]
    assert payload["event"] == "attempt failed"
    assert payload["attempt_index"] == 2
    assert payload["app"] == "retry-layer"


def test_configure_from_settings(capsys: pytest.CaptureFixture[str]):
    settings = Settings(LOG_LEVEL="ERROR", ENVIRONMENT="production")

    configure_from_settings(settings)

    assert logging.getLogger().level == logging.ERROR


@pytest.mark.asyncio
async def test_retry_events_carry_policy_context(capsys: pytest.CaptureFixture[str]):
    """Engine log lines include stop_condition and backoff from contextvars."""
    configure_logging(log_level="INFO", environment="production")
    capsys.readouterr()

    async def fails():
        raise RuntimeError("down")

    with pytest.raises(RetryAttemptsExceeded):
        await retry(fails, 2, Backoff.linear(1, 5), sleep=AsyncMock())

    events = [e for e in json_lines(capsys.readouterr().out) if e.get("logger") == "retry_layer.retry.engine"]
    assert len(events) == 4  # fail, retrying, fail, stopped
    assert all(e["stop_condition"] == "max_attempts" for e in events)
    assert all(e["backoff"] == "linear" for e in events)


@pytest.mark.asyncio
async def test_policy_context_is_unbound_after_retry(flaky_operation):
    await retry(flaky_operation(failures=0), 1, sleep=AsyncMock())

    assert "stop_condition" not in structlog.contextvars.get_contextvars()
