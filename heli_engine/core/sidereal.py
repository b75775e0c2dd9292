# heli_engine/core/sidereal.py
from __future__ import annotations

import math

import erfa  # PyERFA

from heli_engine.core.constants import (
    GMST_J2000_DEG,
    GMST_RATE_DEG_PER_DAY,
    GMST_T2,
    GMST_T3_DIVISOR,
    wrap_deg,
)
from heli_engine.core.timescales import J2000_JD, julian_centuries
from heli_engine.core.validators import parse_solar_model

__all__ = ["mean_sidereal_time"]


def _meeus_gmst_deg(jd: float) -> float:
    # Meeus 12.4; valid for any instant, not only 0h UT
    t = julian_centuries(jd)
    theta = (
        GMST_J2000_DEG
        + GMST_RATE_DEG_PER_DAY * (jd - J2000_JD)
        + GMST_T2 * t * t
        - (t ** 3) / GMST_T3_DIVISOR
    )
    return wrap_deg(theta)


def _erfa_gmst_deg(jd: float) -> float:
    d1 = math.floor(jd)
    d2 = jd - d1
    # UT1 ≈ UTC and TT ≈ UTC (DUT1 and ΔT are not modelled)
    return wrap_deg(math.degrees(erfa.gmst06(d1, d2, d1, d2)))


def mean_sidereal_time(jd: float, *, model: str = "meeus") -> float:
    """Greenwich mean sidereal time θ0 in degrees, [0, 360)."""
    if parse_solar_model(model) == "iau2006":
        return _erfa_gmst_deg(float(jd))
    return _meeus_gmst_deg(float(jd))
