# -*- coding: utf-8 -*-
"""
Geocentric position of the Sun at a Julian Day.

Two models share one result shape:

- ``meeus``   : low-precision solar theory (Meeus ch. 22 & 25), every
                coefficient in app-local constants, ~0.01° accuracy.
- ``iau2006`` : same solar longitude theory, but mean obliquity and nutation
                come from ERFA (``obl06`` / ``nut06a``).

Public API:
    solar_position(jd, *, model="meeus") -> SolarPosition
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import logging
import math

import erfa  # PyERFA (IAU SOFA routines)

from heli_engine.core.constants import (
    ABERRATION_DEG,
    MEAN_OBLIQUITY,
    MOON_NODE,
    NUTATION_EPS_ARCSEC,
    NUTATION_LON_AMP_DEG,
    NUTATION_PSI_ARCSEC,
    SUN_CENTER_SIN1,
    SUN_CENTER_SIN2,
    SUN_CENTER_SIN3,
    SUN_MEAN_ANOMALY,
    SUN_MEAN_LONGITUDE,
    cosd,
    poly,
    sind,
    wrap_deg,
)
from heli_engine.core.timescales import julian_centuries
from heli_engine.core.validators import parse_solar_model

__all__ = [
    "EclipticPosition",
    "NutationCorrection",
    "Obliquity",
    "SolarPosition",
    "solar_position",
    "mean_obliquity",
    "nutation",
]

log = logging.getLogger(__name__)

# ───────────────────────────── Value types ─────────────────────────────

@dataclass(frozen=True)
class EclipticPosition:
    longitude: float   # deg, [0, 360)
    latitude: float    # deg, 0.0 for the Sun


@dataclass(frozen=True)
class NutationCorrection:
    dpsi: float        # nutation in longitude, deg
    deps: float        # nutation in obliquity, deg


@dataclass(frozen=True)
class Obliquity:
    mean: float        # ε0, deg
    nutation: float    # Δε, deg

    @property
    def true(self) -> float:
        return self.mean + self.nutation


@dataclass(frozen=True)
class SolarPosition:
    jd: float
    t: float                    # Julian centuries from J2000.0
    mean_longitude: float       # L0, deg [0, 360)
    mean_anomaly: float         # M, deg [0, 360)
    equation_of_center: float   # C, deg
    true_longitude: float       # ☉ = L0 + C, deg [0, 360)
    omega: float                # Ω, deg [0, 360)
    ecliptic: EclipticPosition  # apparent λ, β
    nutation: NutationCorrection
    obliquity: Obliquity
    model: str

# ───────────────────────────── Helpers ─────────────────────────────

def _split_jd(jd: float) -> Tuple[float, float]:
    d = math.floor(jd)
    return float(d), float(jd - d)


def _equation_of_center(t: float, m_deg: float) -> float:
    return (
        poly(t, SUN_CENTER_SIN1) * sind(m_deg)
        + poly(t, SUN_CENTER_SIN2) * sind(2.0 * m_deg)
        + SUN_CENTER_SIN3 * sind(3.0 * m_deg)
    )


def mean_obliquity(t: float) -> float:
    """ε0 (deg), secular polynomial in T."""
    return poly(t, MEAN_OBLIQUITY)


def nutation(omega_deg: float) -> NutationCorrection:
    """First-order nutation from the lunar node only."""
    return NutationCorrection(
        dpsi=NUTATION_PSI_ARCSEC * sind(omega_deg) / 3600.0,
        deps=NUTATION_EPS_ARCSEC * cosd(omega_deg) / 3600.0,
    )


def _erfa_obliquity_and_nutation(jd: float) -> Tuple[float, NutationCorrection]:
    # TT ≈ UTC here; the ~69 s offset is far below this model's resolution
    d1, d2 = _split_jd(jd)
    eps0 = erfa.obl06(d1, d2)
    dpsi, deps = erfa.nut06a(d1, d2)
    return math.degrees(eps0), NutationCorrection(dpsi=math.degrees(dpsi), deps=math.degrees(deps))

# ───────────────────────────── Main API ─────────────────────────────

def solar_position(jd: float, *, model: str = "meeus") -> SolarPosition:
    model = parse_solar_model(model)
    jd = float(jd)
    t = julian_centuries(jd)

    l0 = wrap_deg(poly(t, SUN_MEAN_LONGITUDE))
    m = wrap_deg(poly(t, SUN_MEAN_ANOMALY))
    c = _equation_of_center(t, m)
    sun_true = wrap_deg(l0 + c)
    omega = wrap_deg(poly(t, MOON_NODE))

    if model == "iau2006":
        eps0, nut = _erfa_obliquity_and_nutation(jd)
        lam = sun_true - ABERRATION_DEG + nut.dpsi
    else:
        eps0 = mean_obliquity(t)
        nut = nutation(omega)
        lam = sun_true - ABERRATION_DEG - NUTATION_LON_AMP_DEG * sind(omega)

    pos = SolarPosition(
        jd=jd,
        t=t,
        mean_longitude=l0,
        mean_anomaly=m,
        equation_of_center=c,
        true_longitude=sun_true,
        omega=omega,
        ecliptic=EclipticPosition(longitude=wrap_deg(lam), latitude=0.0),
        nutation=nut,
        obliquity=Obliquity(mean=eps0, nutation=nut.deps),
        model=model,
    )
    log.debug("solar_position jd=%.8f model=%s lambda=%.6f eps=%.6f",
              jd, model, pos.ecliptic.longitude, pos.obliquity.true)
    return pos
