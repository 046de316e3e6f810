"""Unit test fixtures (mocks and stubs).

Provides a recording sleep so unit tests never wait on the real clock.
"""

import pytest
from unittest.mock import AsyncMock


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Delay primitive that returns immediately and records requested delays.

    Inspect with: [c.args[0] for c in fake_sleep.await_args_list]
    """
    return AsyncMock(return_value=None)
