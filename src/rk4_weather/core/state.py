"""Atmospheric state, rates of change and geographic context.

This module defines the value types that flow through the integrator. States
are frozen dataclasses; arithmetic between them goes through ``combine`` which
always returns a new instance.

Classes
-------
WeatherState
    The five prognostic variables at one instant.
Derivative
    Per-hour rates of change with the same fields as ``WeatherState``.
GeographicContext
    Latitude and elevation held constant for one forecast run.

Functions
---------
combine
    Return ``a + factor * b`` field by field.
validate_state
    Check an initial state against the physical domains.
validate_context
    Check a geographic context against its documented ranges.

Attributes
----------
STATE_DOMAINS : dict[str, tuple[float, float]]
    Inclusive physical domain for each linear state variable.
"""

import math
from dataclasses import astuple, dataclass, fields, replace

from rk4_weather.core.errors import PreconditionError


STATE_DOMAINS: dict[str, tuple[float, float]] = {
    "temperature": (-50.0, 60.0),
    "pressure": (870.0, 1080.0),
    "humidity": (0.0, 100.0),
    "wind_speed": (0.0, 40.0),
}

LATITUDE_RANGE = (0.0, 90.0)
ELEVATION_RANGE = (-100.0, 9000.0)
FULL_CIRCLE = 360.0

_LABELS = {
    "temperature": "Temperature",
    "pressure": "Pressure",
    "humidity": "Humidity",
    "wind_speed": "Wind speed",
    "wind_direction": "Wind direction",
    "latitude": "Latitude",
    "elevation": "Elevation",
}


@dataclass(frozen=True)
class WeatherState:
    """Atmospheric conditions at a single point and instant.

    Attributes
    ----------
    temperature : float
        Air temperature in degrees Celsius.
    pressure : float
        Surface pressure in hPa.
    humidity : float
        Relative humidity in percent.
    wind_speed : float
        Wind speed in m/s.
    wind_direction : float
        Direction the wind blows from, in degrees.
    """

    temperature: float
    pressure: float
    humidity: float
    wind_speed: float
    wind_direction: float

    def copy(self) -> "WeatherState":
        """Return an equal, independent state."""
        return replace(self)

    def as_tuple(self) -> tuple[float, ...]:
        """Return the fields in declaration order."""
        return astuple(self)

    def is_finite(self) -> bool:
        """Return True when no field is NaN or infinite."""
        return all(math.isfinite(value) for value in astuple(self))


@dataclass(frozen=True)
class Derivative(WeatherState):
    """Instantaneous rates of change, in units per simulated hour.

    Rates share the field layout of ``WeatherState`` but are never clamped.
    """


@dataclass(frozen=True)
class GeographicContext:
    """Location parameters that modulate the derivative model.

    Attributes
    ----------
    latitude : float
        Latitude in degrees, in [0, 90].
    elevation : float
        Elevation above sea level in metres, in [-100, 9000].
    """

    latitude: float = 45.0
    elevation: float = 100.0

    @property
    def latitude_radians(self) -> float:
        """Latitude converted to radians."""
        return math.radians(self.latitude)


def combine(a: WeatherState, b: WeatherState, factor: float) -> WeatherState:
    """Return ``a + factor * b`` as a new ``WeatherState``.

    Parameters
    ----------
    a : WeatherState
        Base state.
    b : WeatherState
        State or derivative to accumulate.
    factor : float
        Weight applied to ``b``.

    Returns
    -------
    WeatherState
        The weighted sum. Neither argument is modified.
    """
    return WeatherState(
        *(x + factor * y for x, y in zip(astuple(a), astuple(b), strict=True))
    )


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not math.isfinite(value) or value < low or value > high:
        raise PreconditionError(
            f"{_LABELS[name]} must be between {low:.1f} and {high:.1f} (got {value})"
        )


def validate_state(state: WeatherState) -> None:
    """Raise ``PreconditionError`` if a state lies outside its physical domain.

    Wind direction is circular and must be in ``[0, 360)``.
    """
    for field in fields(WeatherState):
        value = getattr(state, field.name)
        if field.name == "wind_direction":
            if not math.isfinite(value) or value < 0.0 or value >= FULL_CIRCLE:
                raise PreconditionError(
                    f"Wind direction must be in [0.0, 360.0) (got {value})"
                )
            continue
        _check_range(field.name, value, *STATE_DOMAINS[field.name])


def validate_context(context: GeographicContext) -> None:
    """Raise ``PreconditionError`` if latitude or elevation is out of range."""
    _check_range("latitude", context.latitude, *LATITUDE_RANGE)
    _check_range("elevation", context.elevation, *ELEVATION_RANGE)
