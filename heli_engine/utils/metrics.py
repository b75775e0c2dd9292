# heli_engine/utils/metrics.py
from __future__ import annotations

from functools import wraps
from time import perf_counter
from typing import Callable, Final

from prometheus_client import Counter, Gauge, Histogram

# Keep names stable; dashboards key on them.
MET_REQUESTS: Final = Counter("heli_api_requests_total", "API requests", ["route"])
MET_VALIDATION: Final = Counter("heli_validation_errors_total", "Rejected inputs", ["kind"])
GAUGE_APP_UP: Final = Gauge("heli_app_up", "1 if app is running")
REQ_LATENCY: Final = Histogram("heli_request_seconds", "API request latency", ["route"])


def timed(route: str) -> Callable:
    """Count and time a view under a fixed route label."""
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            MET_REQUESTS.labels(route=route).inc()
            t0 = perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                REQ_LATENCY.labels(route=route).observe(perf_counter() - t0)
        return wrapper
    return deco
