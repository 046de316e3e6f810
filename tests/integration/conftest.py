"""Integration test fixtures.

Integration tests run the engine against the real asyncio clock, so delays are
kept short and timing assertions use a tolerance.
"""

import pytest

# Scheduling jitter allowed on wall-clock assertions (ms)
TIMING_TOLERANCE_MS = 150


@pytest.fixture
def timing_tolerance_ms() -> int:
    return TIMING_TOLERANCE_MS
