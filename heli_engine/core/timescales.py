# heli_engine/core/timescales.py
# -----------------------------------------------------------------------------
# Millisecond UTC timestamp → civil UTC date → Julian Day.
#
# Public API:
#   utc_civil_from_timestamp_ms(timestamp_ms)   -> CivilTime
#   julian_day_from_timestamp_ms(timestamp_ms) -> float
#   julian_day(year, month, decimal_day)        -> float
#   julian_centuries(jd)                        -> float
#
# Guarantees:
#   • Proleptic Gregorian calendar for every date (B term always applied),
#     astronomical year numbering (year 0 = 1 BC).
#   • Floor split of negative timestamps (pre-1970 instants are valid).
#   • Years YEAR_MIN..YEAR_MAX decode; anything else raises InvalidTimestamp.
#     There is no fallback value.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math

from heli_engine.core.validators import InvalidTimestamp, parse_timestamp_ms

__all__ = [
    "J2000_JD",
    "DAYS_PER_CENTURY",
    "YEAR_MIN",
    "YEAR_MAX",
    "CivilTime",
    "julian_day",
    "julian_day_from_timestamp_ms",
    "julian_centuries",
    "utc_civil_from_timestamp_ms",
]

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0

# Signed 16-bit year range
YEAR_MIN = -32768
YEAR_MAX = 32767

_MS_PER_DAY = 86_400_000
_NANOS_PER_DAY = 86_400_000_000_000.0
_DAYS_0000_03_01_TO_EPOCH = 719_468
_DAYS_PER_ERA = 146_097  # 400 Gregorian years


@dataclass(frozen=True)
class CivilTime:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    nanosecond: int

# ───────────────────────────── Decoding ─────────────────────────────

def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Days since 1970-01-01 → proleptic Gregorian (year, month, day)."""
    z = days + _DAYS_0000_03_01_TO_EPOCH
    era = z // _DAYS_PER_ERA
    doe = z - era * _DAYS_PER_ERA                                # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365  # [0, 399]
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)              # [0, 365], March-based
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day

def utc_civil_from_timestamp_ms(timestamp_ms: Any) -> CivilTime:
    """Decode a millisecond Unix timestamp into UTC calendar fields."""
    ts = parse_timestamp_ms(timestamp_ms)
    days, ms_of_day = divmod(ts, _MS_PER_DAY)
    year, month, day = _civil_from_days(days)
    if not (YEAR_MIN <= year <= YEAR_MAX):
        raise InvalidTimestamp({
            "loc": ["timestamp_ms"],
            "msg": f"timestamp_ms {ts} is outside the representable UTC range "
                   f"(years {YEAR_MIN}..{YEAR_MAX})",
            "type": "value_error.timestamp_range",
        })
    secs, ms = divmod(ms_of_day, 1000)
    hour, rem = divmod(secs, 3600)
    minute, second = divmod(rem, 60)
    return CivilTime(year, month, day, hour, minute, second, ms * 1_000_000)

# ───────────────────────────── Julian Day ─────────────────────────────

def julian_day(year: int, month: int, decimal_day: float) -> float:
    """Gregorian calendar date with fractional day → JD (Meeus 7.1, floor form)."""
    y, m = int(year), int(month)
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (y + 4716))
        + math.floor(30.6001 * (m + 1))
        + decimal_day
        + b
        - 1524.5
    )

def julian_day_from_timestamp_ms(timestamp_ms: Any) -> float:
    ct = utc_civil_from_timestamp_ms(timestamp_ms)
    decimal_day = (
        ct.day
        + ct.hour / 24.0
        + ct.minute / 1440.0
        + ct.second / 86400.0
        + ct.nanosecond / _NANOS_PER_DAY
    )
    return float(julian_day(ct.year, ct.month, decimal_day))

def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (float(jd) - J2000_JD) / DAYS_PER_CENTURY
