"""Tests for the derivative model."""

import math
import random

import numpy as np
import pytest

from rk4_weather.core.errors import ComputationError, PreconditionError
from rk4_weather.core.physics import DerivativeModel, PhysicsConstants
from rk4_weather.core.state import Derivative, GeographicContext, WeatherState


class TestDerivativeModel:
    """Rates for the default scenario and its variations."""

    @pytest.fixture
    def model(self, fixed_random) -> DerivativeModel:
        """Model whose random perturbation is exactly zero."""
        return DerivativeModel(rng=fixed_random)

    def test_default_rates(
        self,
        model: DerivativeModel,
        default_state: WeatherState,
        default_context: GeographicContext,
    ) -> None:
        """Test every rate for 22 °C, 1013 hPa, 60 %, 5 m/s at 45°N."""
        rates = model.derivatives(default_state, 0.0, default_context)

        assert isinstance(rates, Derivative)
        # radiative -0.35, evaporative -0.6, elevation -0.65
        assert rates.temperature == pytest.approx(-1.6)
        assert rates.pressure == pytest.approx(-0.29 * math.exp(-100.0 / 8500.0))
        assert rates.humidity == pytest.approx(0.15 * (1 + 0.07 * 22.0 / 30.0))
        assert rates.wind_speed == pytest.approx(
            -1.0 + 0.001 * 5.0 * math.sin(math.radians(45.0))
        )
        assert rates.wind_direction == pytest.approx(27.0)

    def test_solar_heating_peaks_at_six_hours(
        self,
        model: DerivativeModel,
        default_state: WeatherState,
        default_context: GeographicContext,
    ) -> None:
        """Test the 24 h diurnal cycle of solar heating."""
        at_zero = model.derivatives(default_state, 0.0, default_context)
        at_six = model.derivatives(default_state, 6.0, default_context)
        assert at_six.temperature - at_zero.temperature == pytest.approx(0.1)

    def test_no_evaporative_cooling_when_cool(self, model: DerivativeModel) -> None:
        """Test that evaporative cooling only applies above 20 °C."""
        state = WeatherState(15.0, 1013.0, 80.0, 0.0, 270.0)
        rates = model.derivatives(state, 0.0, GeographicContext(45.0, 0.0))
        assert rates.temperature == pytest.approx(0.0)

    def test_condensation_above_saturation(self, model: DerivativeModel) -> None:
        """Test humidity falls once it exceeds the temperature-based maximum."""
        # max humidity at 30 °C is 80 %
        state = WeatherState(30.0, 1013.0, 90.0, 0.0, 270.0)
        rates = model.derivatives(state, 0.0, GeographicContext(45.0, 0.0))
        assert rates.humidity == pytest.approx((0.5 - 0.8) * (1 + 0.07))

    def test_low_pressure_accelerates_wind(
        self, model: DerivativeModel, default_context: GeographicContext
    ) -> None:
        """Test the geostrophic and pressure-force terms for a deficit."""
        state = WeatherState(20.0, 1003.0, 50.0, 0.0, 270.0)
        rates = model.derivatives(state, 0.0, default_context)
        sin_lat = math.sin(math.radians(45.0))
        geostrophic = 10.0 / (2 * 7.2921e-5 * sin_lat * 100000.0)
        assert rates.wind_speed == pytest.approx(0.1 * geostrophic + 1.0)
        assert rates.wind_direction == pytest.approx(2.0)

    def test_random_perturbation_range(
        self, default_state: WeatherState, default_context: GeographicContext
    ) -> None:
        """Test the perturbation spans [-0.25, 0.25) around the mean rate."""
        low = DerivativeModel(rng=_Constant(0.0))
        high = DerivativeModel(rng=_Constant(0.999999))
        base = 0.3 * (270.0 - 180.0)

        assert low(default_state, 0.0, default_context).wind_direction == (
            pytest.approx(base - 0.25)
        )
        assert high(default_state, 0.0, default_context).wind_direction == (
            pytest.approx(base + 0.25, abs=1e-5)
        )

    def test_state_not_mutated(
        self,
        model: DerivativeModel,
        default_state: WeatherState,
        default_context: GeographicContext,
    ) -> None:
        """Test that evaluating rates leaves the input state unchanged."""
        before = default_state.copy()
        model.derivatives(default_state, 3.0, default_context)
        assert default_state == before

    def test_equator_raises(
        self, model: DerivativeModel, default_state: WeatherState
    ) -> None:
        """Test that the undefined geostrophic wind at 0° is an error."""
        with pytest.raises(ComputationError, match="latitude 0"):
            model.derivatives(default_state, 0.0, GeographicContext(0.0, 100.0))

    def test_custom_constants(
        self, fixed_random, default_context: GeographicContext
    ) -> None:
        """Test that configured constants change the rates."""
        model = DerivativeModel(
            PhysicsConstants(cooling_rate=0.0, adiabatic_lapse=0.0), rng=fixed_random
        )
        state = WeatherState(18.0, 1013.0, 50.0, 0.0, 270.0)
        assert model(state, 0.0, default_context).temperature == pytest.approx(0.0)


class _Constant:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def test_seeded_models_agree(
    default_state: WeatherState, default_context: GeographicContext
) -> None:
    """Test that equal seeds give equal perturbation sequences."""
    a = DerivativeModel(seed=7)
    b = DerivativeModel(seed=7)
    for hour in range(5):
        assert a(default_state, hour, default_context) == b(
            default_state, hour, default_context
        )


def test_accepts_stdlib_random(
    default_state: WeatherState, default_context: GeographicContext
) -> None:
    """Test that a ``random.Random`` instance works as the source."""
    model = DerivativeModel(rng=random.Random(3))
    rates = model(default_state, 0.0, default_context)
    assert 26.75 <= rates.wind_direction < 27.25


def test_default_source_is_numpy_generator() -> None:
    """Test the default random source."""
    assert isinstance(DerivativeModel().rng, np.random.Generator)


def test_constants_as_dict() -> None:
    """Test the named constant set."""
    constants = PhysicsConstants().as_dict()
    assert constants["solar_constant"] == 0.1
    assert constants["humidity_factor"] == 0.03
    assert constants["adiabatic_lapse"] == 0.0065


@pytest.mark.parametrize(
    "overrides",
    [
        {"earth_rotation_rate": 0.0},
        {"earth_rotation_rate": -7.2921e-5},
        {"scale_height": 0.0},
        {"scale_height": math.nan},
    ],
)
def test_denominator_constants_must_be_positive(overrides: dict[str, float]) -> None:
    """Test constants used as divisors are rejected when not positive."""
    with pytest.raises(PreconditionError, match="must be a positive number"):
        PhysicsConstants(**overrides)
