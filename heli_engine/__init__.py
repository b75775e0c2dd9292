# heli_engine/__init__.py
from __future__ import annotations

from heli_engine.core.astronomy import (
    compute_solar_snapshot,
    get_orbital_degree,
    get_zenith_angle,
)
from heli_engine.core.validators import (
    InvalidObserverCoordinate,
    InvalidTimestamp,
    ValidationError,
)
from heli_engine.version import VERSION

__all__ = [
    "get_orbital_degree",
    "get_zenith_angle",
    "compute_solar_snapshot",
    "ValidationError",
    "InvalidTimestamp",
    "InvalidObserverCoordinate",
    "VERSION",
]
