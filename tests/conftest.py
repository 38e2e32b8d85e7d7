"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from hypothesis import settings
from structlog.testing import capture_logs

from bigdecimal import MathContext, RoundingMode

# Property tests do a lot of arbitrary-precision work per example
settings.register_profile("dev", max_examples=200, deadline=None)
settings.register_profile("ci", max_examples=1000, deadline=None)
settings.load_profile("dev")


@pytest.fixture
def mc3() -> MathContext:
    """Three significant digits, HALF_UP."""
    return MathContext(3)


@pytest.fixture
def mc10_half_even() -> MathContext:
    """Ten significant digits, HALF_EVEN."""
    return MathContext(10, RoundingMode.HALF_EVEN)


@pytest.fixture
def log_output() -> Iterator[list[dict]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs
