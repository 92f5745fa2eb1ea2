# ephemeris_api/core/houses.py
from __future__ import annotations

"""
House cusp resolver.

What this module guarantees:
- House system names resolve to one-letter Swiss codes; anything unknown or
  absent resolves to placidus, silently.
- One ephemeris call yields ascendant, midheaven and cusps 1..12 in order.
  Cusp 10 is taken as computed, never copied from the midheaven.
- Every angle goes through the zodiac normalizer.
- Failures are not swallowed: an EphemerisError propagates to the caller and
  fails the whole request.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import logging

from ephemeris_api.core.constants import DEFAULT_HOUSE_SYSTEM, HOUSE_COUNT, HOUSE_SYSTEMS
from ephemeris_api.core.ephemeris_adapter import EphemerisError
from ephemeris_api.core.zodiac import ZodiacPosition, normalize
from ephemeris_api.utils.metrics import MET_HOUSE_FAILURES

log = logging.getLogger(__name__)

__all__ = ["GeoCoordinate", "HouseCusps", "house_system_code", "resolve_houses"]


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class HouseCusps:
    ascendant: ZodiacPosition
    midheaven: ZodiacPosition
    houses: Tuple[ZodiacPosition, ...]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "ascendant": self.ascendant.to_dict(),
            "midheaven": self.midheaven.to_dict(),
        }
        for i, cusp in enumerate(self.houses, start=1):
            out[f"house{i}"] = cusp.to_dict()
        return out


def house_system_code(system: Optional[str]) -> str:
    code = HOUSE_SYSTEMS.get(system) if isinstance(system, str) else None
    if code is None:
        log.debug("house system %r not recognized; using %s", system, DEFAULT_HOUSE_SYSTEM)
        return HOUSE_SYSTEMS[DEFAULT_HOUSE_SYSTEM]
    return code


def resolve_houses(
    oracle, jd_ut: float, location: GeoCoordinate, system: Optional[str] = DEFAULT_HOUSE_SYSTEM
) -> HouseCusps:
    code = house_system_code(system)
    try:
        cusps, asc, mc = oracle.house_cusps(jd_ut, location.latitude, location.longitude, code)
    except EphemerisError as e:
        log.error(
            "House calculation failed (hsys=%s lat=%s lon=%s jd=%s): %s",
            code, location.latitude, location.longitude, jd_ut, e.message,
        )
        MET_HOUSE_FAILURES.labels(system=code).inc()
        raise
    if len(cusps) != HOUSE_COUNT:
        MET_HOUSE_FAILURES.labels(system=code).inc()
        raise EphemerisError("houses", f"expected {HOUSE_COUNT} cusps, got {len(cusps)}", hsys=code)
    return HouseCusps(
        ascendant=normalize(asc),
        midheaven=normalize(mc),
        houses=tuple(normalize(c) for c in cusps),
    )
