"""Diagnostics derived from a single weather state.

Functions
---------
classify_weather
    Describe a state with threshold-based condition labels.
heat_index
    Apparent ("feels like") temperature from temperature and humidity.
compass_direction
    Eight-point compass label for a wind direction.
"""

import math

from rk4_weather.core.state import WeatherState


COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

# Rothfusz regression coefficients, applied to degrees Celsius.
HEAT_INDEX_COEFFICIENTS = (
    -8.78469475556,
    1.61139411,
    2.33854883889,
    -0.14611605,
    -0.012308094,
    -0.0164248277778,
    0.002211732,
    0.00072546,
    -0.000003582,
)
HEAT_INDEX_THRESHOLD = 27.0


def classify_weather(state: WeatherState) -> str:
    """Return a condition label such as ``"Rain Breezy"`` or ``"Clear Skies"``.

    Up to three qualifiers are joined in a fixed order: precipitation type,
    storm or rain, and wind strength. With no qualifier the state is
    ``"Hot and Dry"`` above 30 °C and ``"Clear Skies"`` otherwise.
    """
    t, h, w = state.temperature, state.humidity, state.wind_speed
    parts: list[str] = []

    if t < 0 and h > 80:
        parts.append("Snow")
    elif t < 5 and h > 90:
        parts.append("Freezing Fog")

    if h > 85 and t > 25:
        parts.append("Thunderstorm")
    elif h > 80:
        parts.append("Rain")

    if w > 15:
        parts.append("Gale")
    elif w > 10:
        parts.append("Breezy")

    if not parts:
        return "Hot and Dry" if t > 30 else "Clear Skies"
    return " ".join(parts)


def heat_index(temperature: float, humidity: float) -> float:
    """Return the heat index in degrees Celsius.

    Below 27 °C the temperature is returned unchanged.
    """
    if temperature < HEAT_INDEX_THRESHOLD:
        return temperature

    c1, c2, c3, c4, c5, c6, c7, c8, c9 = HEAT_INDEX_COEFFICIENTS
    t, rh = temperature, humidity
    return (
        c1
        + c2 * t
        + c3 * rh
        + c4 * t * rh
        + c5 * t**2
        + c6 * rh**2
        + c7 * t**2 * rh
        + c8 * t * rh**2
        + c9 * t**2 * rh**2
    )


def compass_direction(degrees: float) -> str:
    """Return the nearest of the eight compass points.

    Directions exactly between two points round clockwise, so 22.5° is NE.
    """
    sector = math.floor((degrees % 360.0) / 45.0 + 0.5)
    return COMPASS_POINTS[sector % 8]
