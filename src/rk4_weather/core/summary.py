"""Aggregate statistics and warnings for a finished forecast.

Functions
---------
summarize
    Compute temperature, humidity and wind statistics over a trajectory.
weather_alerts
    Turn a summary into human-readable severe weather warnings.
"""

from dataclasses import dataclass

import numpy as np

from rk4_weather.core.trajectory import Trajectory


HEAT_WARNING_TEMP = 35.0
WIND_WARNING_SPEED = 20.0
HUMIDITY_WARNING_LEVEL = 85.0
FREEZE_WARNING_TEMP = 0.0


@dataclass(frozen=True)
class ForecastSummary:
    """Statistics over every entry of a trajectory."""

    avg_temperature: float
    max_temperature: float
    min_temperature: float
    avg_humidity: float
    max_wind_speed: float


def summarize(trajectory: Trajectory) -> ForecastSummary:
    """Compute summary statistics for ``trajectory``.

    Parameters
    ----------
    trajectory : Trajectory
        Forecast output; must contain at least the initial state.

    Returns
    -------
    ForecastSummary
        Mean, max and min temperature, mean humidity and peak wind speed.

    Raises
    ------
    ValueError
        If the trajectory is empty.
    """
    if len(trajectory) == 0:
        raise ValueError("Cannot summarize an empty trajectory")

    temps = np.array([s.temperature for s in trajectory])
    humidity = np.array([s.humidity for s in trajectory])
    wind = np.array([s.wind_speed for s in trajectory])

    return ForecastSummary(
        avg_temperature=float(np.mean(temps)),
        max_temperature=float(np.max(temps)),
        min_temperature=float(np.min(temps)),
        avg_humidity=float(np.mean(humidity)),
        max_wind_speed=float(np.max(wind)),
    )


def weather_alerts(summary: ForecastSummary) -> list[str]:
    """Return warning messages triggered by ``summary``; empty if none."""
    alerts = []
    if summary.max_temperature > HEAT_WARNING_TEMP:
        alerts.append(
            f"HEAT WARNING: Temperatures may exceed {HEAT_WARNING_TEMP:g}°C"
        )
    if summary.max_wind_speed > WIND_WARNING_SPEED:
        alerts.append(
            f"WIND WARNING: Strong winds expected (>{summary.max_wind_speed:.2f} m/s)"
        )
    if summary.avg_humidity > HUMIDITY_WARNING_LEVEL:
        alerts.append("HUMIDITY WARNING: Fog or storm conditions possible")
    if summary.min_temperature < FREEZE_WARNING_TEMP:
        alerts.append("FREEZE WARNING: Temperatures may drop below freezing")
    return alerts
