# heli_engine/utils/config.py
import os
import yaml

_DEFAULTS = {
    "solar_model": "meeus",
    "orbital_frame": "geocentric",
    "cors": {"origin": "*"},
}

class AttrDict(dict):
    """Dict that also supports attribute access: cfg.solar_model and cfg['solar_model'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def default_config():
    return _to_attr(_DEFAULTS)

def load_config(path: str):
    """
    Load YAML config from `path` on top of the built-in defaults.
    Optional env overrides (win over the file):
      - HELI_SOLAR_MODEL
      - HELI_ORBITAL_FRAME
      - CORS_ALLOW_ORIGIN
    Returns an AttrDict for convenient access.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path!r} must contain a mapping")

    merged = dict(_DEFAULTS)
    merged.update(data)

    model = os.getenv("HELI_SOLAR_MODEL")
    if model:
        merged["solar_model"] = model
    frame = os.getenv("HELI_ORBITAL_FRAME")
    if frame:
        merged["orbital_frame"] = frame
    origin = os.getenv("CORS_ALLOW_ORIGIN")
    if origin:
        merged["cors"] = {**(merged.get("cors") or {}), "origin": origin}

    return _to_attr(merged)
