# ephemeris_api/core/bodies.py
from __future__ import annotations

"""
Body position resolver.

Queries the ephemeris once per catalog body. A failing body is logged,
counted and left out of the result; the remaining bodies are still returned.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional
import logging

from ephemeris_api.core.constants import BODIES
from ephemeris_api.core.ephemeris_adapter import EphemerisError
from ephemeris_api.core.zodiac import ZodiacPosition, normalize
from ephemeris_api.utils.metrics import MET_BODY_SKIPPED

log = logging.getLogger(__name__)

__all__ = ["BodyReading", "resolve_bodies"]


@dataclass(frozen=True)
class BodyReading:
    body: str
    position: ZodiacPosition
    speed: float

    @property
    def is_retrograde(self) -> bool:
        return self.speed < 0

    def to_dict(self) -> Dict[str, Any]:
        # isRetro is a "true"/"false" string; the spreadsheet client parses text
        p = self.position
        return {
            "longitude": p.longitude,
            "full_degree": p.full_degree,
            "normDegree": p.full_degree,
            "sign": p.sign,
            "degree": p.degree,
            "speed": self.speed,
            "isRetro": "true" if self.is_retrograde else "false",
        }


def resolve_bodies(
    oracle, jd_ut: float, catalog: Optional[Iterable[str]] = None
) -> Dict[str, BodyReading]:
    out: Dict[str, BodyReading] = {}
    for name in (BODIES if catalog is None else catalog):
        try:
            lon, speed = oracle.body_position(jd_ut, name)
        except EphemerisError as e:
            log.warning("Error calculating %s at jd=%s: %s", name, jd_ut, e.message)
            MET_BODY_SKIPPED.labels(body=name).inc()
            continue
        out[name] = BodyReading(body=name, position=normalize(lon), speed=speed)
    return out
