# heli_engine/main.py
from __future__ import annotations

import logging
import os
import traceback

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from heli_engine.api.routes import api as _api_bp
from heli_engine.core.validators import ValidationError
from heli_engine.utils.config import default_config, load_config
from heli_engine.utils.metrics import GAUGE_APP_UP, MET_VALIDATION
from heli_engine.version import VERSION

# ───────────────────────── helpers: logging & errors ─────────────────────────
def _configure_logging(app: Flask) -> None:
    gerr = logging.getLogger("gunicorn.error")
    if gerr.handlers:
        app.logger.handlers = gerr.handlers
        app.logger.setLevel(gerr.level)
    else:
        logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

def _register_errors(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        MET_VALIDATION.labels(kind=e.code).inc()
        app.logger.warning("400 %s at %s %s: %s", e.code, request.method, request.path, e)
        return jsonify(
            ok=False,
            error=e.code,
            message=str(e),
            details=e.errors(),
            path=request.path,
        ), 400

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        app.logger.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        return jsonify(
            ok=False,
            error="http_error",
            code=e.code,
            name=e.name,
            message=e.description,
            path=request.path,
        ), e.code

    @app.errorhandler(Exception)
    def _any(e: Exception):
        tb = traceback.format_exc()
        app.logger.error("UNHANDLED %s at %s %s\n%s", type(e).__name__, request.method, request.path, tb)
        return jsonify(
            ok=False,
            error="internal_error",
            type=type(e).__name__,
            message=str(e),
            path=request.path,
        ), 500

# ───────────────────────── health & metrics ─────────────────────────
def _register_health(app: Flask) -> None:
    @app.route("/", methods=["GET"])
    def root():
        return jsonify(ok=True, service="heli-engine", version=VERSION, health="/health"), 200

    @app.route("/health", methods=["GET"])
    @app.route("/healthz", methods=["GET"])
    def health():
        return jsonify(ok=True, status="ok"), 200

def _metrics_auth_ok() -> bool:
    auth = request.authorization
    user = os.getenv("METRICS_USER", "")
    pw = os.getenv("METRICS_PASS", "")
    return bool(
        auth and auth.type == "basic" and auth.username == user and auth.password == pw and user and pw
    )

def _register_metrics(app: Flask) -> None:
    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        if not _metrics_auth_ok():
            return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="metrics"'})
        GAUGE_APP_UP.set(1.0)
        return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)

# ───────────────────────── app factory ─────────────────────────
def create_app() -> Flask:
    app = Flask(__name__)
    app.config["JSON_SORT_KEYS"] = False
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    _configure_logging(app)

    cfg_path = os.environ.get("HELI_CONFIG", "config/defaults.yaml")
    try:
        app.cfg = load_config(cfg_path)  # type: ignore[attr-defined]
    except OSError as e:
        app.logger.info("config %s not readable (%s); using built-in defaults", cfg_path, e)
        app.cfg = default_config()  # type: ignore[attr-defined]

    GAUGE_APP_UP.set(1.0)

    _register_health(app)
    _register_errors(app)
    _register_metrics(app)
    app.register_blueprint(_api_bp)

    CORS(
        app,
        resources={r"/.*": {"origins": app.cfg.get("cors", {}).get("origin", "*")}},  # type: ignore[attr-defined]
        supports_credentials=False,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    app.logger.info(
        "App initialized; version=%s solar_model=%s orbital_frame=%s",
        VERSION, app.cfg.get("solar_model"), app.cfg.get("orbital_frame"),  # type: ignore[attr-defined]
    )
    return app

# ───────────────────────── app instance ─────────────────────────
app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
