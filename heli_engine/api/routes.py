# heli_engine/api/routes.py
"""
HeliEngine — API routes

- /api/orbital-degree   Sun's apparent ecliptic longitude for a timestamp
- /api/zenith-angle     Sun's zenith angle for an observer + timestamp
- /api/solar-position   full pipeline snapshot (diagnostics / front-ends)
- /api/config, /api/health

GET reads query parameters; POST reads a JSON object (query parameters are
merged underneath, body wins). Validation errors propagate to the app-level
handler, which renders them as 400.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from heli_engine.core.astronomy import (
    compute_solar_snapshot,
    get_orbital_degree,
    get_zenith_angle,
)
from heli_engine.core.validators import (
    InvalidTimestamp,
    parse_orbital_frame,
    parse_solar_model,
    parse_timestamp_ms,
)
from heli_engine.utils.metrics import timed
from heli_engine.version import VERSION

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)


# ───────────────────────── helpers ─────────────────────────
def _request_data() -> Dict[str, Any]:
    data: Dict[str, Any] = dict(request.args.items())
    if request.method == "POST":
        body = request.get_json(force=True, silent=True)
        if body is None:
            raise BadRequest("POST body must be valid JSON")
        if not isinstance(body, dict):
            raise BadRequest("JSON body must be an object")
        data.update(body)
    log.debug("%s %s params=%s", request.method, request.path, sorted(data))
    return data


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if data.get(k) is not None:
            return data[k]
    return None


def _timestamp(data: Dict[str, Any]) -> int:
    raw = _first(data, "timestamp_ms", "ts")
    if raw is None:
        raise InvalidTimestamp({"loc": ["timestamp_ms"], "msg": "timestamp_ms is required", "type": "value_error.missing"})
    return parse_timestamp_ms(raw)


def _app_cfg(key: str) -> Optional[str]:
    cfg = getattr(current_app, "cfg", None) or {}
    return cfg.get(key)


def _model(data: Dict[str, Any]) -> str:
    return parse_solar_model(data.get("model"), default=_app_cfg("solar_model") or "meeus")


def _frame(data: Dict[str, Any]) -> str:
    return parse_orbital_frame(data.get("orbital_frame"), default=_app_cfg("orbital_frame") or "geocentric")


# ───────────────────────── routes ─────────────────────────
@api.get("/api/health")
def health():
    return jsonify(ok=True, status="ok", version=VERSION), 200


@api.get("/api/config")
def config():
    return jsonify(
        ok=True,
        version=VERSION,
        solar_model=parse_solar_model(_app_cfg("solar_model")),
        orbital_frame=parse_orbital_frame(_app_cfg("orbital_frame")),
    ), 200


@api.route("/api/orbital-degree", methods=["GET", "POST"])
@timed("/api/orbital-degree")
def orbital_degree():
    data = _request_data()
    ts = _timestamp(data)
    model, frame = _model(data), _frame(data)
    deg = get_orbital_degree(ts, model=model, orbital_frame=frame)
    return jsonify(
        ok=True,
        timestamp_ms=ts,
        orbital_degree=deg,
        meta={"model": model, "orbital_frame": frame},
    ), 200


@api.route("/api/zenith-angle", methods=["GET", "POST"])
@timed("/api/zenith-angle")
def zenith_angle():
    data = _request_data()
    ts = _timestamp(data)
    lat = _first(data, "latitude", "lat")
    lon = _first(data, "longitude", "lon")
    model = _model(data)
    z = get_zenith_angle(lat, lon, ts, model=model)
    return jsonify(
        ok=True,
        timestamp_ms=ts,
        latitude=float(lat),
        longitude=float(lon),
        zenith_angle=z,
        altitude=90.0 - z,
        meta={"model": model},
    ), 200


@api.route("/api/solar-position", methods=["GET", "POST"])
@timed("/api/solar-position")
def solar_position():
    data = _request_data()
    ts = _timestamp(data)
    out = compute_solar_snapshot(
        ts,
        _first(data, "latitude", "lat"),
        _first(data, "longitude", "lon"),
        model=_model(data),
        orbital_frame=_frame(data),
    )
    out["ok"] = True
    return jsonify(out), 200
