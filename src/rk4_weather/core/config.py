"""Forecast configuration loading.

Run settings live in a YAML file with the sections ``forecast``,
``location``, ``initial_state`` and ``physics``, plus an optional top-level
``run_dir`` for log files. Every key is optional; missing values fall back to
``DEFAULT_CONFIG``. The merged result is converted to nested ``Namespace``
objects for dotted access (``cfg.location.latitude``).

Functions
---------
load_config
    Read a YAML file and merge it over the defaults.
to_namespace
    Recursively convert dictionaries into ``Namespace`` objects.
build_initial_state
    Create the starting ``WeatherState`` from a configuration.
build_context
    Create the ``GeographicContext`` from a configuration.
build_constants
    Create ``PhysicsConstants`` with configured overrides.
"""

import copy
from argparse import Namespace
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from rk4_weather.core.errors import PreconditionError
from rk4_weather.core.physics import PhysicsConstants
from rk4_weather.core.state import GeographicContext, WeatherState


DEFAULT_CONFIG: dict[str, Any] = {
    "run_dir": None,
    "forecast": {
        "duration_hours": 24.0,
        "step_size": 0.1,
        "seed": None,
    },
    "location": {
        "latitude": 45.0,
        "elevation": 100.0,
    },
    "initial_state": {
        "temperature": 22.0,
        "pressure": 1013.0,
        "humidity": 60.0,
        "wind_speed": 5.0,
        "wind_direction": 180.0,
    },
    "physics": {},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def to_namespace(obj: Any) -> Any:
    """Convert nested dictionaries into nested ``Namespace`` objects."""
    if isinstance(obj, dict):
        ns = Namespace()
        for key, value in obj.items():
            setattr(ns, key, to_namespace(value))
        return ns
    return obj


def load_config(config_path: str | Path | None = None) -> Namespace:
    """Load run settings from YAML, falling back to the defaults.

    Parameters
    ----------
    config_path : str | Path, optional
        YAML file to read. When omitted only ``DEFAULT_CONFIG`` is used.

    Returns
    -------
    argparse.Namespace
        Merged configuration with nested sections as namespaces.

    Raises
    ------
    PreconditionError
        If the file does not contain a YAML mapping at the top level.
    """
    raw: dict[str, Any] = {}
    if config_path is not None:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise PreconditionError(
                f"Configuration file {config_path} must contain a mapping"
            )
        raw = loaded

    return to_namespace(_merge(DEFAULT_CONFIG, raw))


def build_initial_state(cfg: Namespace) -> WeatherState:
    s = cfg.initial_state
    return WeatherState(
        temperature=float(s.temperature),
        pressure=float(s.pressure),
        humidity=float(s.humidity),
        wind_speed=float(s.wind_speed),
        wind_direction=float(s.wind_direction),
    )


def build_context(cfg: Namespace) -> GeographicContext:
    return GeographicContext(
        latitude=float(cfg.location.latitude),
        elevation=float(cfg.location.elevation),
    )


def build_constants(cfg: Namespace) -> PhysicsConstants:
    """Return ``PhysicsConstants`` with the ``physics`` section applied.

    Raises
    ------
    PreconditionError
        If the section names a constant the model does not have, or gives a
        denominator constant (``earth_rotation_rate``, ``scale_height``) that is
        not positive.
    """
    overrides = vars(cfg.physics) if isinstance(cfg.physics, Namespace) else {}
    known = {f.name for f in fields(PhysicsConstants)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise PreconditionError(f"Unknown physics constants: {', '.join(unknown)}")
    return PhysicsConstants(**{k: float(v) for k, v in overrides.items()})
