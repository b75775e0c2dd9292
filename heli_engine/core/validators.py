# heli_engine/core/validators.py
from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional, Tuple, Union

from heli_engine.core.constants import ORBITAL_FRAMES, SOLAR_MODELS

__all__ = [
    "ValidationError",
    "InvalidTimestamp",
    "InvalidObserverCoordinate",
    "parse_timestamp_ms",
    "parse_solar_model",
    "parse_orbital_frame",
    "parse_latlon",
]

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Structured validator error (has .errors() for the HTTP layer)."""
    code = "validation_error"

    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", self.code))
        elif isinstance(details, list):
            self._details = details
            super().__init__(self._details[0]["msg"] if self._details else self.code)
        else:
            self._details = [{"loc": [], "msg": self.code, "type": "value_error"}]
            super().__init__(self.code)

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


class InvalidTimestamp(ValidationError):
    """Millisecond timestamp that does not decode to a civil UTC datetime."""
    code = "invalid_timestamp"


class InvalidObserverCoordinate(ValidationError):
    """Observer latitude outside [-90, 90] or a non-finite coordinate."""
    code = "invalid_observer_coordinate"


# ───────────────────────── helpers ─────────────────────────

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

_MODEL_ALIASES = {
    "low": "meeus",
    "iau": "iau2006",
    "erfa": "iau2006",
}

def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}

def _as_float(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        x = float(v)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


# ───────────────────────── atomic parsers ─────────────────────────

def parse_timestamp_ms(v: Any, key: str = "timestamp_ms") -> int:
    """
    Accept an int, or a string of ASCII digits with an optional sign (query strings).
    Floats are accepted only when integral; bools are rejected.
    """
    if isinstance(v, bool):
        raise InvalidTimestamp(_err(key, "timestamp_ms must be an integer", "type_error.integer"))
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        if math.isfinite(v) and v.is_integer():
            return int(v)
        raise InvalidTimestamp(_err(key, "timestamp_ms must be an integer", "type_error.integer"))
    if isinstance(v, str) and _INT_RE.fullmatch(v):
        return int(v)
    raise InvalidTimestamp(_err(key, "timestamp_ms must be an integer", "type_error.integer"))

def parse_solar_model(val: Any | None, default: str = "meeus") -> str:
    s = str(val or default).strip().lower()
    s = _MODEL_ALIASES.get(s, s)
    if s not in SOLAR_MODELS:
        raise ValidationError(_err("model", "model must be 'meeus' or 'iau2006'", "value_error.model"))
    return s

def parse_orbital_frame(val: Any | None, default: str = "geocentric") -> str:
    s = str(val or default).strip().lower()
    if s not in ORBITAL_FRAMES:
        raise ValidationError(_err("orbital_frame", "orbital_frame must be 'geocentric' or 'heliocentric'",
                                   "value_error.orbital_frame"))
    return s

def parse_latlon(lat: Any, lon: Any, lat_key="latitude", lon_key="longitude") -> Tuple[float, float]:
    """
    Observer coordinates: latitude in [-90, 90], longitude any finite signed value
    (east-positive). Out-of-range input is reported, never clamped.
    """
    lat_f = _as_float(lat); lon_f = _as_float(lon)
    if lat_f is None or lon_f is None:
        raise InvalidObserverCoordinate(
            _err([lat_key, lon_key], "latitude/longitude must be finite numbers", "type_error.float")
        )
    if not (-90.0 <= lat_f <= 90.0):
        raise InvalidObserverCoordinate(_err(lat_key, "latitude must be between -90 and 90"))
    return lat_f, lon_f
