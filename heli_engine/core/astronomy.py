# -*- coding: utf-8 -*-
"""
Solar orbital degree & zenith angle (public façade).

Pipeline (every call is a pure function of its arguments):

    timestamp_ms ─► JD ─► solar_position ─► orbital degree
                    │          │
                    │          └► ecliptic_to_equatorial ─┐
                    └► mean_sidereal_time ────────────────┴► hour angle ─► altitude ─► zenith

Public API:
    get_orbital_degree(timestamp_ms) -> float          # [0, 360)
    get_zenith_angle(lat, lon, timestamp_ms) -> float  # 90 − altitude, unclamped
    compute_solar_snapshot(timestamp_ms, latitude=None, longitude=None) -> dict

Config (read once from env; every call accepts keyword overrides):
    HELI_SOLAR_MODEL    meeus | iau2006          (default meeus)
    HELI_ORBITAL_FRAME  geocentric | heliocentric (default geocentric)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import os

from heli_engine.core.constants import wrap_deg
from heli_engine.core.coords import (
    ObserverLocation,
    ecliptic_to_equatorial,
    horizontal_position,
)
from heli_engine.core.sidereal import mean_sidereal_time
from heli_engine.core.solar import EclipticPosition, solar_position
from heli_engine.core.timescales import julian_day_from_timestamp_ms
from heli_engine.core.validators import (
    parse_orbital_frame,
    parse_solar_model,
    parse_timestamp_ms,
)

__all__ = [
    "CFG",
    "get_orbital_degree",
    "get_zenith_angle",
    "compute_solar_snapshot",
    "orbital_degree_from_ecliptic",
]

log = logging.getLogger(__name__)

_PROJECT_SOURCE_TAG = "heli_engine.astronomy(core)"


# ───────────────────────────── Config (single source) ─────────────────
@dataclass(frozen=True)
class _HeliCfg:
    solar_model: str
    orbital_frame: str


CFG = _HeliCfg(
    solar_model=(os.getenv("HELI_SOLAR_MODEL", "meeus").strip().lower() or "meeus"),
    orbital_frame=(os.getenv("HELI_ORBITAL_FRAME", "geocentric").strip().lower() or "geocentric"),
)


def _resolve(model: Optional[str], orbital_frame: Optional[str]) -> tuple[str, str]:
    return (
        parse_solar_model(model, default=CFG.solar_model),
        parse_orbital_frame(orbital_frame, default=CFG.orbital_frame),
    )


# ───────────────────────────── Orbital degree ─────────────────────────
def orbital_degree_from_ecliptic(ecliptic: EclipticPosition, orbital_frame: str = "geocentric") -> float:
    """
    Geocentric frame returns the Sun's apparent longitude as-is.
    Heliocentric frame returns Earth's longitude as seen from the Sun (λ + 180°).
    """
    lon = ecliptic.longitude
    if parse_orbital_frame(orbital_frame) == "heliocentric":
        lon += 180.0
    return wrap_deg(lon)


def get_orbital_degree(
    timestamp_ms: int,
    *,
    model: Optional[str] = None,
    orbital_frame: Optional[str] = None,
) -> float:
    model, frame = _resolve(model, orbital_frame)
    jd = julian_day_from_timestamp_ms(timestamp_ms)
    sun = solar_position(jd, model=model)
    deg = orbital_degree_from_ecliptic(sun.ecliptic, frame)
    log.debug("orbital_degree ts=%s jd=%.8f model=%s frame=%s deg=%.6f",
              timestamp_ms, jd, model, frame, deg)
    return deg


# ───────────────────────────── Zenith angle ───────────────────────────
def get_zenith_angle(
    lat: float,
    lon: float,
    timestamp_ms: int,
    *,
    model: Optional[str] = None,
) -> float:
    model = parse_solar_model(model, default=CFG.solar_model)
    observer = ObserverLocation.from_degrees(lat, lon)
    jd = julian_day_from_timestamp_ms(timestamp_ms)

    sun = solar_position(jd, model=model)
    eq = ecliptic_to_equatorial(sun.ecliptic.longitude, sun.ecliptic.latitude, sun.obliquity.true)
    gmst = mean_sidereal_time(jd, model=model)
    hz = horizontal_position(observer, gmst, eq)

    log.debug("zenith_angle lat=%.6f lon=%.6f ts=%s ha=%.6f alt=%.6f",
              observer.latitude, observer.longitude, timestamp_ms, hz.hour_angle, hz.altitude)
    return hz.zenith_angle


# ───────────────────────────── Snapshot ───────────────────────────────
def compute_solar_snapshot(
    timestamp_ms: int,
    latitude: Any = None,
    longitude: Any = None,
    *,
    model: Optional[str] = None,
    orbital_frame: Optional[str] = None,
) -> Dict[str, Any]:
    """Every intermediate quantity of one pipeline run, JSON-friendly."""
    model, frame = _resolve(model, orbital_frame)
    ts = parse_timestamp_ms(timestamp_ms)
    observer = None
    if latitude is not None or longitude is not None:
        observer = ObserverLocation.from_degrees(latitude, longitude)

    jd = julian_day_from_timestamp_ms(ts)
    sun = solar_position(jd, model=model)
    eq = ecliptic_to_equatorial(sun.ecliptic.longitude, sun.ecliptic.latitude, sun.obliquity.true)
    gmst = mean_sidereal_time(jd, model=model)

    out: Dict[str, Any] = {
        "timestamp_ms": ts,
        "jd": sun.jd,
        "t_centuries": sun.t,
        "orbital_degree": orbital_degree_from_ecliptic(sun.ecliptic, frame),
        "sun": {
            "mean_longitude_deg": sun.mean_longitude,
            "mean_anomaly_deg": sun.mean_anomaly,
            "equation_of_center_deg": sun.equation_of_center,
            "true_longitude_deg": sun.true_longitude,
            "apparent_longitude_deg": sun.ecliptic.longitude,
            "latitude_deg": sun.ecliptic.latitude,
            "omega_deg": sun.omega,
        },
        "nutation": {"dpsi_deg": sun.nutation.dpsi, "deps_deg": sun.nutation.deps},
        "obliquity": {"mean_deg": sun.obliquity.mean, "true_deg": sun.obliquity.true},
        "equatorial": {"ra_deg": eq.right_ascension, "dec_deg": eq.declination},
        "gmst_deg": gmst,
        "observer": None,
        "meta": {"model": model, "orbital_frame": frame, "module": _PROJECT_SOURCE_TAG},
    }

    if observer is not None:
        hz = horizontal_position(observer, gmst, eq)
        out["observer"] = {
            "latitude": observer.latitude,
            "longitude": observer.longitude,
            "hour_angle_deg": hz.hour_angle,
            "altitude_deg": hz.altitude,
            "zenith_angle_deg": hz.zenith_angle,
        }
    return out
