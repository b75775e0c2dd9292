# tests/test_timescales.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, strategies as st

from heli_engine.core.timescales import (
    J2000_JD,
    julian_centuries,
    julian_day,
    julian_day_from_timestamp_ms,
    YEAR_MAX,
    YEAR_MIN,
    CivilTime,
    utc_civil_from_timestamp_ms,
)
from heli_engine.core.validators import InvalidTimestamp, ValidationError

from conftest import TS_MAX_MS, TS_MIN_MS, ts_ms

MS_PER_DAY = 86_400_000


# ─────────────────────────────────────────────────────────────────────────────
# Calendar formula
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "y,m,d,jd",
    [
        (2000, 1, 1.5, 2451545.0),
        (1987, 1, 27.0, 2446822.5),
        (1988, 6, 19.5, 2447332.0),
        (1957, 10, 4.81, 2436116.31),
        (1600, 12, 31.0, 2305812.5),
    ],
)
def test_julian_day_reference_dates(y, m, d, jd) -> None:
    assert julian_day(y, m, d) == pytest.approx(jd, abs=1e-9)

def test_january_and_february_use_previous_year_branch() -> None:
    # Feb 28 → Mar 1 across a Gregorian leap year is two days
    assert julian_day(2024, 3, 1.0) - julian_day(2024, 2, 28.0) == pytest.approx(2.0)
    # and one day in a common century year (1900 is not leap in Gregorian)
    assert julian_day(1900, 3, 1.0) - julian_day(1900, 2, 28.0) == pytest.approx(1.0)


# ─────────────────────────────────────────────────────────────────────────────
# Timestamp → JD
# ─────────────────────────────────────────────────────────────────────────────

def test_unix_epoch() -> None:
    assert julian_day_from_timestamp_ms(0) == 2440587.5

def test_j2000_noon() -> None:
    assert julian_day_from_timestamp_ms(946728000000) == pytest.approx(J2000_JD, abs=1e-9)

def test_sputnik_instant_pre_1970() -> None:
    # 1957-10-04 19:26:24 UTC
    assert julian_day_from_timestamp_ms(-386310816000) == pytest.approx(2436116.31, abs=1e-8)

def test_sub_second_resolution() -> None:
    jd0 = julian_day_from_timestamp_ms(0)
    assert julian_day_from_timestamp_ms(1) - jd0 == pytest.approx(1.0 / MS_PER_DAY, abs=1e-9)
    assert julian_day_from_timestamp_ms(-1) < jd0

def test_negative_millisecond_floors_into_previous_second() -> None:
    assert utc_civil_from_timestamp_ms(-1) == CivilTime(1969, 12, 31, 23, 59, 59, 999_000_000)

def test_civil_decoding_of_known_instants() -> None:
    assert utc_civil_from_timestamp_ms(0) == CivilTime(1970, 1, 1, 0, 0, 0, 0)
    assert utc_civil_from_timestamp_ms(951782400000) == CivilTime(2000, 2, 29, 0, 0, 0, 0)
    assert utc_civil_from_timestamp_ms(1718539200123) == CivilTime(2024, 6, 16, 12, 0, 0, 123_000_000)

@pytest.mark.parametrize("s", ["0", " 0 ", "+0", "-0"])
def test_string_timestamp_is_accepted(s) -> None:
    assert julian_day_from_timestamp_ms(s) == 2440587.5

@pytest.mark.parametrize("s", ["1_000", "1e3", "0x10", "", "--1", "١٢"])
def test_loose_integer_strings_rejected(s) -> None:
    with pytest.raises(InvalidTimestamp):
        julian_day_from_timestamp_ms(s)


# ─────────────────────────────────────────────────────────────────────────────
# Years outside 1..9999
# ─────────────────────────────────────────────────────────────────────────────

def test_year_zero_decodes() -> None:
    # 0000-12-31T00:00Z, the day before 0001-01-01 (1 BC, leap in the proleptic calendar)
    ts = -62135683200000
    assert utc_civil_from_timestamp_ms(ts) == CivilTime(0, 12, 31, 0, 0, 0, 0)
    assert julian_day_from_timestamp_ms(ts) == 1721424.5

def test_year_ten_thousand_decodes() -> None:
    ts = 253402300800000
    assert utc_civil_from_timestamp_ms(ts) == CivilTime(10000, 1, 1, 0, 0, 0, 0)
    assert julian_day_from_timestamp_ms(ts) == pytest.approx(julian_day(10000, 1, 1.0), abs=1e-6)

def test_julian_day_zero() -> None:
    # JD 0.0 is -4713-11-24T12:00Z proleptic Gregorian
    ts = -210866760000000
    assert utc_civil_from_timestamp_ms(ts) == CivilTime(-4713, 11, 24, 12, 0, 0, 0)
    assert julian_day_from_timestamp_ms(ts) == pytest.approx(0.0, abs=1e-9)

def test_range_edges_decode() -> None:
    lo = utc_civil_from_timestamp_ms(TS_MIN_MS)
    hi = utc_civil_from_timestamp_ms(TS_MAX_MS)
    assert (lo.year, lo.month, lo.day, lo.hour) == (YEAR_MIN, 1, 1, 0)
    assert (hi.year, hi.month, hi.day, hi.hour, hi.minute, hi.second) == (YEAR_MAX, 12, 31, 23, 59, 59)
    assert julian_day_from_timestamp_ms(TS_MIN_MS) == pytest.approx(julian_day(YEAR_MIN, 1, 1.0), abs=1e-6)
    assert julian_day_from_timestamp_ms(TS_MAX_MS) == pytest.approx(julian_day(YEAR_MAX + 1, 1, 1.0), abs=1e-6)

@given(ts=st.integers(min_value=-62135596800000, max_value=253402300799999))
def test_civil_matches_datetime_where_it_overlaps(ts) -> None:
    dt = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=ts)
    ct = utc_civil_from_timestamp_ms(ts)
    assert (ct.year, ct.month, ct.day, ct.hour, ct.minute, ct.second) == (
        dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
    )
    assert ct.nanosecond == dt.microsecond * 1000

@pytest.mark.parametrize("bad", [TS_MIN_MS - 1, TS_MAX_MS + 1, 10**20, -(10**20)])
def test_out_of_range_raises_invalid_timestamp(bad) -> None:
    with pytest.raises(InvalidTimestamp) as ei:
        julian_day_from_timestamp_ms(bad)
    assert ei.value.errors()[0]["loc"] == ["timestamp_ms"]

@pytest.mark.parametrize("bad", [True, 1.5, float("nan"), "abc", None, [1]])
def test_non_integer_raises_invalid_timestamp(bad) -> None:
    with pytest.raises(InvalidTimestamp):
        julian_day_from_timestamp_ms(bad)

def test_invalid_timestamp_is_a_value_error() -> None:
    assert issubclass(InvalidTimestamp, ValidationError)
    assert issubclass(InvalidTimestamp, ValueError)


# ─────────────────────────────────────────────────────────────────────────────
# Centuries
# ─────────────────────────────────────────────────────────────────────────────

def test_julian_centuries() -> None:
    assert julian_centuries(J2000_JD) == 0.0
    assert julian_centuries(J2000_JD + 36525.0) == pytest.approx(1.0)
    assert julian_centuries(2448908.5) == pytest.approx(-0.072183436, abs=1e-9)


# ─────────────────────────────────────────────────────────────────────────────
# Properties
# ─────────────────────────────────────────────────────────────────────────────

@given(
    a=st.integers(min_value=TS_MIN_MS, max_value=TS_MAX_MS),
    b=st.integers(min_value=TS_MIN_MS, max_value=TS_MAX_MS),
)
def test_monotonic_in_timestamp(a, b) -> None:
    lo, hi = sorted((a, b))
    assert julian_day_from_timestamp_ms(lo) <= julian_day_from_timestamp_ms(hi)

@given(ts=st.integers(min_value=TS_MIN_MS, max_value=TS_MAX_MS - MS_PER_DAY))
def test_one_day_later_is_one_jd_later(ts) -> None:
    d = julian_day_from_timestamp_ms(ts + MS_PER_DAY) - julian_day_from_timestamp_ms(ts)
    assert d == pytest.approx(1.0, abs=1e-8)

@given(
    y=st.integers(min_value=1975, max_value=2020),
    m=st.integers(min_value=1, max_value=12),
    d=st.integers(min_value=1, max_value=28),  # keep clear of leap-second days
    hh=st.integers(min_value=0, max_value=23),
    mm=st.integers(min_value=0, max_value=59),
    ss=st.integers(min_value=0, max_value=59),
)
def test_matches_erfa_dtf2d(ensure_erfa, y, m, d, hh, mm, ss) -> None:
    erfa = ensure_erfa
    d1, d2 = erfa.dtf2d("UTC", y, m, d, hh, mm, float(ss))
    ours = julian_day_from_timestamp_ms(ts_ms(y, m, d, hh, mm, ss))
    assert ours == pytest.approx(float(d1) + float(d2), abs=1e-8)
