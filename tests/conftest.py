"""Shared fixtures for the RK4 Weather test suite."""

from collections.abc import Iterator

import pytest

from rk4_weather.core.logger import get_logger
from rk4_weather.core.state import GeographicContext, WeatherState


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Undo level and handler changes made by CLI commands on the shared logger."""
    logger = get_logger()
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers = handlers


@pytest.fixture
def default_state() -> WeatherState:
    """Return the default initial conditions."""
    return WeatherState(
        temperature=22.0,
        pressure=1013.0,
        humidity=60.0,
        wind_speed=5.0,
        wind_direction=180.0,
    )


@pytest.fixture
def default_context() -> GeographicContext:
    """Return a mid-latitude, near sea level location."""
    return GeographicContext(latitude=45.0, elevation=100.0)


@pytest.fixture
def fixed_random() -> FixedRandom:
    """Return a random source pinned to 0.5, which cancels the perturbation."""
    return FixedRandom(0.5)
