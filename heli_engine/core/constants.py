# -*- coding: utf-8 -*-
"""
heli_engine — core constants & small angle helpers

Purpose
-------
Single source of truth for:
- epoch / calendar constants
- the low-precision solar theory coefficients (Meeus ch. 22, 25)
- mean sidereal time coefficients (Meeus 12.4)
- tiny angle helpers (wrap/Δ/trig in degrees)

Design
------
- Pure-Python, no external dependencies.
- Safe to import from any core module.
- Functions are pure; constants are immutable by convention.
"""

from __future__ import annotations
from typing import Tuple
import math

__all__ = [
    # models
    "SOLAR_MODELS", "ORBITAL_FRAMES",
    # solar theory
    "SUN_MEAN_LONGITUDE", "SUN_MEAN_ANOMALY", "SUN_CENTER_SIN1", "SUN_CENTER_SIN2",
    "SUN_CENTER_SIN3", "MOON_NODE", "ABERRATION_DEG", "NUTATION_LON_AMP_DEG",
    "NUTATION_PSI_ARCSEC", "NUTATION_EPS_ARCSEC", "MEAN_OBLIQUITY",
    # sidereal
    "GMST_J2000_DEG", "GMST_RATE_DEG_PER_DAY", "GMST_T2", "GMST_T3_DIVISOR",
    # helpers
    "wrap_deg", "wrap180", "delta_deg", "sind", "cosd", "tand", "asind", "atan2d", "poly",
]

# ── models ───────────────────────────────────────────────────────────────────
SOLAR_MODELS: Tuple[str, ...] = ("meeus", "iau2006")
ORBITAL_FRAMES: Tuple[str, ...] = ("geocentric", "heliocentric")

# ── Sun (polynomials in T, Julian centuries from J2000.0) ────────────────────
SUN_MEAN_LONGITUDE: Tuple[float, ...] = (280.46646, 36000.76983, 0.0003032)
SUN_MEAN_ANOMALY: Tuple[float, ...] = (357.52911, 35999.05029, -0.0001537)
SUN_CENTER_SIN1: Tuple[float, ...] = (1.914602, -0.004817, -0.000014)
SUN_CENTER_SIN2: Tuple[float, ...] = (0.019993, -0.000101)
SUN_CENTER_SIN3: float = 0.000289

# Longitude of the ascending node of the Moon's mean orbit
MOON_NODE: Tuple[float, ...] = (125.04, -1934.136)

# Apparent longitude: λ = ☉ − ABERRATION − NUTATION_LON_AMP · sin Ω
ABERRATION_DEG = 0.00569
NUTATION_LON_AMP_DEG = 0.00478

# First-order nutation amplitudes (arcsec)
NUTATION_PSI_ARCSEC = -17.20
NUTATION_EPS_ARCSEC = 9.20

# Mean obliquity of the ecliptic (deg)
MEAN_OBLIQUITY: Tuple[float, ...] = (23.439291, -0.0130042, -0.00000000164, 0.000000000504)

# ── Greenwich mean sidereal time ─────────────────────────────────────────────
GMST_J2000_DEG = 280.46061837
GMST_RATE_DEG_PER_DAY = 360.98564736629
GMST_T2 = 0.000387933
GMST_T3_DIVISOR = 38_710_000.0

# ── tiny angle helpers (no external imports) ──────────────────────────────────
def wrap_deg(x: float) -> float:
    """
    Wrap any angle to [0, 360).
    """
    x = math.fmod(float(x), 360.0)
    if x < 0.0:
        x += 360.0
    # fmod of a tiny negative can round up to exactly 360.0
    return 0.0 if x >= 360.0 else x

def wrap180(x: float) -> float:
    """Wrap any angle to [-180, 180)."""
    return wrap_deg(float(x) + 180.0) - 180.0

def delta_deg(a: float, b: float) -> float:
    """
    Shortest signed difference b - a in degrees, range (-180, 180].
    """
    d = wrap_deg(b) - wrap_deg(a)
    if d > 180.0:
        d -= 360.0
    elif d <= -180.0:
        d += 360.0
    return d

def sind(a: float) -> float: return math.sin(math.radians(a))
def cosd(a: float) -> float: return math.cos(math.radians(a))
def tand(a: float) -> float: return math.tan(math.radians(a))

def asind(x: float) -> float:
    # rounding can push |x| a hair past 1
    return math.degrees(math.asin(max(-1.0, min(1.0, float(x)))))

def atan2d(y: float, x: float) -> float:
    if x == 0.0 and y == 0.0: return 0.0
    return wrap_deg(math.degrees(math.atan2(y, x)))

def poly(t: float, coeffs: Tuple[float, ...]) -> float:
    """Evaluate c0 + c1·t + c2·t² + … (Horner)."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * t + c
    return acc
