# ephemeris_api/main.py
from __future__ import annotations

import logging
import traceback
from time import perf_counter
from typing import Any, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from ephemeris_api.api.routes import api
from ephemeris_api.core.ephemeris_adapter import EphemerisConfig, SwissEphemeris
from ephemeris_api.utils.config import load_config
from ephemeris_api.utils.metrics import (
    GAUGE_APP_UP,
    MET_REQUESTS,
    REQ_LATENCY,
    metrics_response,
)
from ephemeris_api.version import VERSION

# Advertised to clients; /api/aspects is listed but not served.
ENDPOINTS = {
    "planets": "/api/planets",
    "houses": "/api/houses",
    "aspects": "/api/aspects",
}

_SEEDED_ROUTES = ("/", "/api/planets", "/api/houses", "/api/chart", "/health", "/healthz")


# ───────────────────────── helpers: logging & errors ─────────────────────────
def _configure_logging(app: Flask, level: str) -> None:
    gerr = logging.getLogger("gunicorn.error")
    if gerr.handlers:
        app.logger.handlers = gerr.handlers
        app.logger.setLevel(gerr.level)
    else:
        logging.basicConfig(level=str(level).upper())


def _register_errors(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        app.logger.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        return jsonify(error=e.name, message=e.description), e.code

    @app.errorhandler(Exception)
    def _any(e: Exception):
        tb = traceback.format_exc()
        app.logger.error("UNHANDLED %s at %s %s\n%s", type(e).__name__, request.method, request.path, tb)
        return jsonify(error="Something went wrong!", message=str(e)), 500


# ───────────────────────── health & discovery ─────────────────────────
def _register_health(app: Flask, service: str) -> None:
    @app.route("/", methods=["GET"])
    def root():
        return jsonify(status="ok", service=service, version=VERSION, endpoints=ENDPOINTS), 200

    @app.route("/health", methods=["GET"])
    @app.route("/healthz", methods=["GET"])
    def health():
        return jsonify(status="ok"), 200

    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint():
        return metrics_response()

    @app.get("/__debug/ephem")
    def __debug_ephem():
        return jsonify(diagnostics=app.extensions["ephemeris"].diagnostics()), 200


def _register_metrics_hooks(app: Flask) -> None:
    for route in _SEEDED_ROUTES:
        MET_REQUESTS.labels(route=route).inc(0)
    GAUGE_APP_UP.set(1.0)

    @app.before_request
    def _before():
        p = request.path or ""
        if p in _SEEDED_ROUTES:
            MET_REQUESTS.labels(route=p).inc()
            request.environ["ephem_api.t0"] = perf_counter()

    @app.after_request
    def _after(resp):
        t0 = request.environ.get("ephem_api.t0")
        if t0 is not None:
            REQ_LATENCY.labels(route=request.path).observe(perf_counter() - t0)
        return resp


# ───────────────────────── app factory ─────────────────────────
def create_app(cfg: Optional[Any] = None, oracle: Optional[Any] = None) -> Flask:
    """
    Build the Flask app.

    The ephemeris is configured exactly once here, before any request is
    served; tests pass their own ``oracle`` instead.
    """
    cfg = cfg or load_config()
    app = Flask(__name__)
    app.json.sort_keys = False
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore

    _configure_logging(app, cfg.log_level)
    app.config["EPHEM_API"] = cfg

    if oracle is None:
        oracle = SwissEphemeris.configure(EphemerisConfig(ephe_path=cfg.ephe_path))
    app.extensions["ephemeris"] = oracle

    _register_metrics_hooks(app)
    _register_health(app, cfg.service)
    _register_errors(app)
    app.register_blueprint(api)

    # CORS for the spreadsheet client
    CORS(
        app,
        resources={r"/*": {"origins": cfg.cors_origin}},
        send_wildcard=cfg.cors_origin == "*",
        supports_credentials=False,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    app.logger.info(
        "App initialized; service=%s version=%s endpoints=%s",
        cfg.service, VERSION, ", ".join(sorted(r.rule for r in app.url_map.iter_rules() if r.endpoint != "static")),
    )
    return app


# ───────────────────────── app instance ─────────────────────────
app = create_app()

if __name__ == "__main__":
    cfg = app.config["EPHEM_API"]
    app.logger.info("Swiss Ephemeris API Server running on port %s", cfg.port)
    app.run(host="0.0.0.0", port=int(cfg.port))
