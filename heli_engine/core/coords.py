# heli_engine/core/coords.py
"""
Coordinate transforms used by the zenith-angle pipeline.

ecliptic (λ, β) + true obliquity ε  →  equatorial (α, δ)
θ0 + observer longitude − α          →  local hour angle H
H, δ, observer latitude φ            →  altitude / zenith angle

All inputs and outputs are degrees; radians stay inside the trig helpers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from heli_engine.core.constants import asind, atan2d, cosd, sind, tand, wrap180
from heli_engine.core.validators import parse_latlon

__all__ = [
    "EquatorialPosition",
    "ObserverLocation",
    "HorizontalPosition",
    "ecliptic_to_equatorial",
    "local_hour_angle",
    "altitude_from_equatorial",
    "horizontal_position",
]


@dataclass(frozen=True)
class EquatorialPosition:
    right_ascension: float  # α, deg [0, 360)
    declination: float      # δ, deg [-90, 90]


@dataclass(frozen=True)
class ObserverLocation:
    latitude: float   # φ, deg [-90, 90]
    longitude: float  # deg, east-positive

    @classmethod
    def from_degrees(cls, latitude: Any, longitude: Any) -> "ObserverLocation":
        """Validated constructor; raises InvalidObserverCoordinate."""
        lat, lon = parse_latlon(latitude, longitude)
        return cls(latitude=lat, longitude=lon)


@dataclass(frozen=True)
class HorizontalPosition:
    hour_angle: float  # H, deg [-180, 180)
    altitude: float    # deg, negative below the horizon

    @property
    def zenith_angle(self) -> float:
        return 90.0 - self.altitude


def ecliptic_to_equatorial(longitude: float, latitude: float, obliquity: float) -> EquatorialPosition:
    """Meeus 13.3 / 13.4 with ε the true obliquity."""
    lam, beta, eps = float(longitude), float(latitude), float(obliquity)
    ra = atan2d(sind(lam) * cosd(eps) - tand(beta) * sind(eps), cosd(lam))
    dec = asind(sind(beta) * cosd(eps) + cosd(beta) * sind(eps) * sind(lam))
    return EquatorialPosition(right_ascension=ra, declination=dec)


def local_hour_angle(gmst: float, longitude: float, right_ascension: float) -> float:
    """H = θ0 + L − α (east-positive longitude), wrapped to [-180, 180)."""
    return wrap180(float(gmst) + float(longitude) - float(right_ascension))


def altitude_from_equatorial(hour_angle: float, declination: float, latitude: float) -> float:
    return asind(
        sind(latitude) * sind(declination)
        + cosd(latitude) * cosd(declination) * cosd(hour_angle)
    )


def horizontal_position(observer: ObserverLocation, gmst: float, eq: EquatorialPosition) -> HorizontalPosition:
    h = local_hour_angle(gmst, observer.longitude, eq.right_ascension)
    alt = altitude_from_equatorial(h, eq.declination, observer.latitude)
    return HorizontalPosition(hour_angle=h, altitude=alt)
