# ephemeris_api/utils/metrics.py
from __future__ import annotations

import os
from typing import Final

from flask import Response, request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Keep names stable; dashboards key on them.
MET_REQUESTS: Final = Counter("ephem_api_requests_total", "API requests", ["route"])
REQ_LATENCY: Final = Histogram("ephem_api_request_seconds", "API request latency", ["route"])
MET_BODY_SKIPPED: Final = Counter(
    "ephem_api_body_skipped_total", "Bodies left out of a response after an ephemeris error", ["body"]
)
MET_HOUSE_FAILURES: Final = Counter(
    "ephem_api_house_failures_total", "House computations that failed", ["system"]
)
GAUGE_APP_UP: Final = Gauge("ephem_api_up", "1 if app is running")


def _metrics_auth_ok() -> bool:
    user = os.getenv("METRICS_USER", "")
    pw = os.getenv("METRICS_PASS", "")
    if not (user and pw):
        return True
    auth = request.authorization
    return bool(auth and auth.type == "basic" and auth.username == user and auth.password == pw)


def metrics_response() -> Response:
    if not _metrics_auth_ok():
        return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="metrics"'})
    GAUGE_APP_UP.set(1.0)
    return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)
