# ephemeris_api/core/validators.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple, Union

from ephemeris_api.core.constants import DEFAULT_HOUSE_SYSTEM
from ephemeris_api.core.houses import GeoCoordinate
from ephemeris_api.core.timescales import CivilDateTime

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Structured validator error (has .errors())."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", "validation_error"))
        elif isinstance(details, list):
            self._details = details
            super().__init__(self._details[0]["msg"] if self._details else "validation_error")
        else:
            self._details = [{"loc": [], "msg": "validation_error", "type": "value_error"}]
            super().__init__("validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


# ───────────────────────── helpers ─────────────────────────

MSG_MISSING_TIME = "Missing required fields: year, month, day, hour, min"
MSG_MISSING_PLACE = "Missing required fields: year, month, day, hour, min, lat, lon"

_DATE_KEYS = ("year", "month", "day")
_CLOCK_KEYS = ("hour", "min")
_PLACE_KEYS = ("lat", "lon")


def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}


def _missing(body: Dict[str, Any], keys_falsy: Tuple[str, ...], keys_none: Tuple[str, ...]) -> List[str]:
    # date parts count as missing when falsy (0 included); clock/place only when absent or null
    out = [k for k in keys_falsy if not body.get(k)]
    out += [k for k in keys_none if body.get(k) is None]
    return out


def _as_number(body: Dict[str, Any], key: str) -> float:
    v = body.get(key)
    if isinstance(v, bool):
        raise ValidationError(_err(key, f"{key} must be a number", "type_error.float"))
    try:
        x = float(v)
    except (TypeError, ValueError):
        raise ValidationError(_err(key, f"{key} must be a number", "type_error.float")) from None
    if not math.isfinite(x):
        raise ValidationError(_err(key, f"{key} must be a number", "type_error.float"))
    return x


def _as_int(body: Dict[str, Any], key: str) -> int:
    x = _as_number(body, key)
    if not x.is_integer():
        raise ValidationError(_err(key, f"{key} must be an integer", "type_error.integer"))
    return int(x)


# ───────────────────────── payload parsers ─────────────────────────

def parse_civil(body: Dict[str, Any], *, with_place: bool = False) -> CivilDateTime:
    missing = _missing(body, _DATE_KEYS, _CLOCK_KEYS + (_PLACE_KEYS if with_place else ()))
    if missing:
        msg = MSG_MISSING_PLACE if with_place else MSG_MISSING_TIME
        raise ValidationError([_err(k, msg, "value_error.missing") for k in missing])
    return CivilDateTime(
        year=_as_int(body, "year"),
        month=_as_int(body, "month"),
        day=_as_int(body, "day"),
        hour=_as_number(body, "hour"),
        minute=_as_number(body, "min"),
    )


def parse_location(body: Dict[str, Any]) -> GeoCoordinate:
    lat = _as_number(body, "lat")
    lon = _as_number(body, "lon")
    if not (-90.0 <= lat <= 90.0):
        raise ValidationError(_err("lat", "lat must be between -90 and 90"))
    if not (-180.0 <= lon <= 180.0):
        raise ValidationError(_err("lon", "lon must be between -180 and 180"))
    return GeoCoordinate(latitude=lat, longitude=lon)


def parse_planets_payload(body: Dict[str, Any]) -> CivilDateTime:
    """lat/lon are accepted by /api/planets but not used."""
    return parse_civil(body)


def parse_houses_payload(body: Dict[str, Any]) -> Tuple[CivilDateTime, GeoCoordinate, Optional[str]]:
    civil = parse_civil(body, with_place=True)
    location = parse_location(body)
    house_type = body.get("house_type", DEFAULT_HOUSE_SYSTEM)
    return civil, location, house_type
