"""Fourth-order Runge-Kutta stepping and post-step constraint enforcement.

Functions
---------
enforce_constraints
    Clamp or wrap a state into its physical domain.

Classes
-------
RK4Integrator
    Advances a state by one classical RK4 step.
"""

from collections.abc import Callable

from rk4_weather.core.errors import ComputationError
from rk4_weather.core.state import (
    FULL_CIRCLE,
    STATE_DOMAINS,
    GeographicContext,
    WeatherState,
    combine,
)


DerivativeFn = Callable[[WeatherState, float, GeographicContext], WeatherState]


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def wrap_direction(degrees: float) -> float:
    """Wrap an angle in degrees into ``[0, 360)``."""
    return (degrees % FULL_CIRCLE + FULL_CIRCLE) % FULL_CIRCLE


def enforce_constraints(state: WeatherState) -> WeatherState:
    """Return ``state`` with each field moved into its valid range.

    Humidity, wind speed and pressure are clamped and wind direction is
    wrapped. Temperature is left untouched. Applying the function twice gives
    the same result as applying it once.
    """
    return WeatherState(
        temperature=state.temperature,
        pressure=_clamp(state.pressure, STATE_DOMAINS["pressure"]),
        humidity=_clamp(state.humidity, STATE_DOMAINS["humidity"]),
        wind_speed=_clamp(state.wind_speed, STATE_DOMAINS["wind_speed"]),
        wind_direction=wrap_direction(state.wind_direction),
    )


class RK4Integrator:
    """Classical four-stage Runge-Kutta stepper.

    Parameters
    ----------
    derivative_fn : callable
        ``f(state, time, context)`` returning per-hour rates, usually a
        ``DerivativeModel``.
    """

    def __init__(self, derivative_fn: DerivativeFn) -> None:
        self.derivative_fn = derivative_fn

    def step(
        self,
        state: WeatherState,
        time: float,
        step_size: float,
        context: GeographicContext,
    ) -> WeatherState:
        """Advance ``state`` from ``time`` to ``time + step_size``.

        Parameters
        ----------
        state : WeatherState
            State at the start of the step.
        time : float
            Simulated time in hours at the start of the step.
        step_size : float
            Step length in hours.
        context : GeographicContext
            Location passed through to every derivative evaluation.

        Returns
        -------
        WeatherState
            Constrained state at the end of the step.

        Raises
        ------
        ComputationError
            If the combined state contains NaN or infinity.
        """
        f = self.derivative_fn
        h = step_size

        k1 = f(state, time, context)
        k2 = f(combine(state, k1, h / 2.0), time + h / 2.0, context)
        k3 = f(combine(state, k2, h / 2.0), time + h / 2.0, context)
        k4 = f(combine(state, k3, h), time + h, context)

        result = combine(state, k1, h / 6.0)
        result = combine(result, k2, h / 3.0)
        result = combine(result, k3, h / 3.0)
        result = combine(result, k4, h / 6.0)

        if not result.is_finite():
            raise ComputationError(
                f"Non-finite state after RK4 step at t={time:.3f} h: {result}"
            )
        return enforce_constraints(result)
