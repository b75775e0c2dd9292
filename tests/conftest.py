# tests/conftest.py
"""Hypothesis profiles, the decodable timestamp range and an ERFA fixture."""
from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest
from hypothesis import settings, HealthCheck


settings.register_profile(
    "dev",
    settings(deadline=None, max_examples=60, suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile(
    "ci",
    settings(deadline=None, max_examples=200, suppress_health_check=[HealthCheck.too_slow]),
)

_profile = "ci" if os.getenv("CI") else os.getenv("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# -32768-01-01T00:00:00.000Z .. 32767-12-31T23:59:59.999Z
TS_MIN_MS = -1096225401600000
TS_MAX_MS = 971890963199999


def ts_ms(*args: int) -> int:
    """Millisecond timestamp of a UTC civil instant in years 1..9999: ts_ms(2024, 6, 16, 12)."""
    dt = datetime(*args, tzinfo=timezone.utc)
    return int(round(dt.timestamp() * 1000))


@pytest.fixture(scope="session")
def ensure_erfa():
    import erfa
    for fn in ("dtf2d", "obl06", "nut06a", "gmst06"):
        assert hasattr(erfa, fn), f"ERFA.{fn} not available"
    return erfa
