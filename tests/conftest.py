"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from typing import Any, Callable

import pytest

from retry_layer.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.RETRY_MAX_ATTEMPTS = 5
    """
    return Settings(
        # === Application ===
        APP_NAME="Retry Layer (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Retry & Backoff ===
        RETRY_MAX_ATTEMPTS=3,
        RETRY_BACKOFF_KIND="constant",
        RETRY_BASE_DELAY_SECONDS=1.0,
        RETRY_MAX_DELAY_SECONDS=60.0,

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


class FlakyOperation:
    """Zero-argument async callable failing a fixed number of times.

    Counts invocations so tests can assert how many attempts really ran.
    """

    def __init__(self, failures: int, result: Any = "success", error: Callable[[int], BaseException] | None = None):
        self.failures = failures
        self.result = result
        self.error = error or (lambda call: RuntimeError(f"failure #{call}"))
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error(self.calls)
        return self.result


@pytest.fixture
def flaky_operation() -> type[FlakyOperation]:
    """Factory for FlakyOperation instances: flaky_operation(failures=2)."""
    return FlakyOperation


@pytest.fixture
def always_failing() -> FlakyOperation:
    """Operation that never succeeds."""
    return FlakyOperation(failures=10**6)
