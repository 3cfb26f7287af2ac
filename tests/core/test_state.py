"""Tests for state values, combination and domain validation."""

import dataclasses
import math

import pytest

from rk4_weather.core.errors import PreconditionError
from rk4_weather.core.state import (
    Derivative,
    GeographicContext,
    WeatherState,
    combine,
    validate_context,
    validate_state,
)


def test_state_is_frozen(default_state: WeatherState) -> None:
    """Test that states cannot be mutated in place."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_state.temperature = 30.0  # type: ignore[misc]


def test_copy_is_equal(default_state: WeatherState) -> None:
    """Test that copy returns an equal state."""
    assert default_state.copy() == default_state


def test_combine_returns_new_state(default_state: WeatherState) -> None:
    """Test weighted accumulation leaves both operands untouched."""
    rate = Derivative(1.0, -2.0, 4.0, 0.5, 10.0)
    result = combine(default_state, rate, 0.5)

    assert result == WeatherState(22.5, 1012.0, 62.0, 5.25, 185.0)
    assert type(result) is WeatherState
    assert default_state.temperature == 22.0
    assert rate.pressure == -2.0


def test_combine_with_zero_factor(default_state: WeatherState) -> None:
    """Test that a zero weight returns the base state."""
    rate = Derivative(100.0, 100.0, 100.0, 100.0, 100.0)
    assert combine(default_state, rate, 0.0) == default_state


def test_is_finite() -> None:
    """Test detection of NaN and infinite fields."""
    assert WeatherState(1.0, 2.0, 3.0, 4.0, 5.0).is_finite()
    assert not WeatherState(math.nan, 2.0, 3.0, 4.0, 5.0).is_finite()
    assert not WeatherState(1.0, 2.0, 3.0, math.inf, 5.0).is_finite()


def test_validate_state_accepts_domain_edges() -> None:
    """Test that inclusive bounds are accepted."""
    validate_state(WeatherState(-50.0, 870.0, 0.0, 0.0, 0.0))
    validate_state(WeatherState(60.0, 1080.0, 100.0, 40.0, 359.9))


@pytest.mark.parametrize(
    ("state", "message"),
    [
        (WeatherState(61.0, 1013.0, 60.0, 5.0, 180.0), "Temperature"),
        (WeatherState(22.0, 860.0, 60.0, 5.0, 180.0), "Pressure"),
        (WeatherState(22.0, 1013.0, 101.0, 5.0, 180.0), "Humidity"),
        (WeatherState(22.0, 1013.0, 60.0, -1.0, 180.0), "Wind speed"),
        (WeatherState(22.0, 1013.0, 60.0, 5.0, 360.0), "Wind direction"),
        (WeatherState(math.nan, 1013.0, 60.0, 5.0, 180.0), "Temperature"),
    ],
)
def test_validate_state_rejects(state: WeatherState, message: str) -> None:
    """Test that out-of-domain values raise a precondition error."""
    with pytest.raises(PreconditionError, match=message):
        validate_state(state)


def test_validate_state_error_is_value_error() -> None:
    """Test that callers can catch precondition errors as ValueError."""
    with pytest.raises(ValueError, match="must be between -50.0 and 60.0"):
        validate_state(WeatherState(-60.0, 1013.0, 60.0, 5.0, 180.0))


def test_validate_context() -> None:
    """Test latitude and elevation ranges."""
    validate_context(GeographicContext(latitude=90.0, elevation=9000.0))
    validate_context(GeographicContext(latitude=0.0, elevation=-100.0))
    with pytest.raises(PreconditionError, match="Latitude"):
        validate_context(GeographicContext(latitude=91.0))
    with pytest.raises(PreconditionError, match="Elevation"):
        validate_context(GeographicContext(elevation=-200.0))


def test_latitude_radians() -> None:
    """Test degree to radian conversion."""
    assert GeographicContext(latitude=90.0).latitude_radians == pytest.approx(
        math.pi / 2
    )
