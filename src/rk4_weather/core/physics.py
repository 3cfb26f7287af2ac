"""Right-hand side of the atmospheric ODE system.

The derivative model turns a ``WeatherState`` into per-hour rates of change
for all five variables. Apart from a small random perturbation of the wind
direction it is a pure function of the state, the simulated time and the
geographic context. The random source is injected so that runs can be
reproduced exactly from a seed.

Classes
-------
PhysicsConstants
    Named tuning constants of the model.
RandomSource
    Protocol for the injected uniform [0, 1) generator.
DerivativeModel
    Callable computing ``Derivative`` values.
"""

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from rk4_weather.core.errors import ComputationError, PreconditionError
from rk4_weather.core.state import Derivative, GeographicContext, WeatherState


@dataclass(frozen=True)
class PhysicsConstants:
    """Tuning constants of the derivative model.

    ``humidity_factor`` and ``earth_radius`` are not used by the current rate
    equations and are kept as configuration knobs.

    ``earth_rotation_rate`` and ``scale_height`` divide in the rate equations
    and must be positive; anything else raises ``PreconditionError``.
    """

    solar_constant: float = 0.1
    cooling_rate: float = 0.05
    pressure_gradient: float = 0.02
    humidity_factor: float = 0.03
    wind_friction: float = 0.1
    coriolis_effect: float = 0.001
    latent_heat: float = 0.07
    adiabatic_lapse: float = 0.0065
    earth_rotation_rate: float = 7.2921e-5
    earth_radius: float = 6371000.0
    scale_height: float = 8500.0
    reference_pressure: float = 1013.0

    def __post_init__(self) -> None:
        for name in ("earth_rotation_rate", "scale_height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise PreconditionError(
                    f"Physics constant {name} must be a positive number (got {value})"
                )

    def as_dict(self) -> dict[str, float]:
        """Return the constants keyed by field name."""
        return dict(self.__dict__)


class RandomSource(Protocol):
    """Anything with a ``random()`` method returning floats in [0, 1)."""

    def random(self) -> float:  # pragma: no cover - protocol
        ...


class DerivativeModel:
    """Compute rates of change for a weather state.

    Parameters
    ----------
    constants : PhysicsConstants, optional
        Model constants. Defaults to ``PhysicsConstants()``.
    rng : RandomSource, optional
        Source of the wind-direction perturbation. ``numpy.random.Generator``
        and ``random.Random`` both qualify. Defaults to
        ``numpy.random.default_rng(seed)``.
    seed : int, optional
        Seed for the default generator. Ignored when ``rng`` is given.
    """

    def __init__(
        self,
        constants: PhysicsConstants | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self.constants = constants or PhysicsConstants()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def __call__(
        self, state: WeatherState, time: float, context: GeographicContext
    ) -> Derivative:
        return self.derivatives(state, time, context)

    def derivatives(
        self, state: WeatherState, time: float, context: GeographicContext
    ) -> Derivative:
        """Return the per-hour rates of change at ``state``.

        Parameters
        ----------
        state : WeatherState
            Current (possibly intermediate) state. Not modified.
        time : float
            Simulated time in hours since the start of the run.
        context : GeographicContext
            Latitude and elevation of the forecast point.

        Returns
        -------
        Derivative
            Rates for temperature, pressure, humidity, wind speed and
            wind direction.

        Raises
        ------
        ComputationError
            If ``sin(latitude)`` is zero, which leaves the geostrophic wind
            undefined.
        """
        sin_lat = math.sin(context.latitude_radians)
        if sin_lat == 0.0:
            raise ComputationError(
                f"Geostrophic wind is undefined at latitude {context.latitude}"
            )

        return Derivative(
            temperature=self._temperature_rate(state, time, context),
            pressure=self._pressure_rate(state, context),
            humidity=self._humidity_rate(state),
            wind_speed=self._wind_speed_rate(state, sin_lat),
            wind_direction=0.3 * (270.0 - state.wind_direction)
            + 2.0 * self._pressure_force(state)
            + 0.5 * (float(self.rng.random()) - 0.5),
        )

    def _temperature_rate(
        self, state: WeatherState, time: float, context: GeographicContext
    ) -> float:
        c = self.constants
        solar_heating = c.solar_constant * math.sin(time * math.pi / 12.0)
        radiative_cooling = c.cooling_rate * (state.temperature - 15.0)
        evaporative_cooling = 0.01 * state.humidity if state.temperature > 20.0 else 0.0
        elevation_effect = -c.adiabatic_lapse * context.elevation
        return solar_heating - radiative_cooling - evaporative_cooling + elevation_effect

    def _pressure_rate(self, state: WeatherState, context: GeographicContext) -> float:
        c = self.constants
        height_factor = math.exp(-context.elevation / c.scale_height)
        return (
            -c.pressure_gradient * (state.temperature - 20.0)
            - 0.01 * state.wind_speed**2
        ) * height_factor

    def _humidity_rate(self, state: WeatherState) -> float:
        max_humidity = 100.0 - 2.0 * (state.temperature - 20.0)
        evaporation = 0.5 if state.temperature > 25.0 else 0.2
        condensation = 0.8 if state.humidity > max_humidity else 0.0
        latent = 1.0 + self.constants.latent_heat * state.temperature / 30.0
        return (evaporation - condensation - 0.01 * state.wind_speed) * latent

    def _pressure_force(self, state: WeatherState) -> float:
        return 0.1 * (self.constants.reference_pressure - state.pressure)

    def _wind_speed_rate(self, state: WeatherState, sin_lat: float) -> float:
        c = self.constants
        deficit = c.reference_pressure - state.pressure
        geostrophic = deficit / (2.0 * c.earth_rotation_rate * sin_lat * 100000.0)
        coriolis = c.coriolis_effect * state.wind_speed * sin_lat
        friction = c.wind_friction * state.wind_speed
        return (
            0.1 * (geostrophic - state.wind_speed)
            + self._pressure_force(state)
            + coriolis
            - friction
        )
