"""Basic import tests to verify package structure."""

from rk4_weather import __version__, core
from rk4_weather.cli.main import app


def test_import_modules() -> None:
    """Test that the public API is exposed from the core package."""
    for name in (
        "ForecastEngine",
        "DerivativeModel",
        "RK4Integrator",
        "WeatherState",
        "GeographicContext",
        "classify_weather",
        "heat_index",
        "enforce_constraints",
        "load_config",
        "logger",
    ):
        assert hasattr(core, name), name


def test_version() -> None:
    """Test the package version string."""
    assert __version__ == "0.1.0"


def test_cli_app_registered() -> None:
    """Test the CLI application object is importable."""
    assert app.info.name == "rk4-weather"
