# ephemeris_api/api/routes.py
"""
Ephemeris API routes
- POST /api/planets : positions for the fixed body catalog
- POST /api/houses  : ascendant, midheaven and cusps 1..12
- POST /api/chart   : both, under "planets" and "houses"

Error policy:
- missing/invalid fields      → 400 {"error"}
- house computation failure   → 500 {"error": "Failed to calculate houses", "message"}
- anything else in a handler  → 500 {"error": "Internal server error", "message"}
A body that fails on its own is left out of the response; the request still succeeds.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from ephemeris_api.core.bodies import resolve_bodies
from ephemeris_api.core.chart import assemble_chart
from ephemeris_api.core.ephemeris_adapter import EphemerisError
from ephemeris_api.core.houses import resolve_houses
from ephemeris_api.core.timescales import to_ephemeris_time
from ephemeris_api.core.validators import (
    ValidationError,
    parse_houses_payload,
    parse_planets_payload,
)

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)


# ───────────────────────── helpers ─────────────────────────
def _oracle():
    return current_app.extensions["ephemeris"]


def _body_json() -> Dict[str, Any]:
    # malformed or non-object bodies fall through to field validation
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _validation_error(e: ValidationError):
    log.info("Rejected %s: %s", request.path, e.errors())
    return jsonify({"error": str(e)}), 400


def _houses_error(e: EphemerisError):
    return jsonify({"error": "Failed to calculate houses", "message": e.message}), 500


def _internal_error(e: Exception):
    log.exception("Error in %s", request.path)
    return jsonify({"error": "Internal server error", "message": str(e)}), 500


# ───────────────────────── planets ─────────────────────────
@api.post("/api/planets")
def planets():
    try:
        civil = parse_planets_payload(_body_json())
        oracle = _oracle()
        jd_ut = to_ephemeris_time(oracle, civil)
        readings = resolve_bodies(oracle, jd_ut)
        return jsonify({name: r.to_dict() for name, r in readings.items()}), 200
    except ValidationError as e:
        return _validation_error(e)
    except Exception as e:
        return _internal_error(e)


# ───────────────────────── houses ─────────────────────────
@api.post("/api/houses")
def houses():
    try:
        civil, location, house_type = parse_houses_payload(_body_json())
        oracle = _oracle()
        jd_ut = to_ephemeris_time(oracle, civil)
        cusps = resolve_houses(oracle, jd_ut, location, house_type)
        return jsonify(cusps.to_dict()), 200
    except ValidationError as e:
        return _validation_error(e)
    except EphemerisError as e:
        if e.stage != "houses":
            return _internal_error(e)
        return _houses_error(e)
    except Exception as e:
        return _internal_error(e)


# ───────────────────────── chart ─────────────────────────
@api.post("/api/chart")
def chart():
    try:
        civil, location, house_type = parse_houses_payload(_body_json())
        result = assemble_chart(_oracle(), civil, location, house_type)
        return jsonify(result.to_dict()), 200
    except ValidationError as e:
        return _validation_error(e)
    except EphemerisError as e:
        if e.stage != "houses":
            return _internal_error(e)
        return _houses_error(e)
    except Exception as e:
        return _internal_error(e)
