# ephemeris_api/core/chart.py
from __future__ import annotations

"""Chart assembler: full body catalog plus houses, under separate keys."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ephemeris_api.core.bodies import BodyReading, resolve_bodies
from ephemeris_api.core.houses import GeoCoordinate, HouseCusps, resolve_houses
from ephemeris_api.core.timescales import CivilDateTime, to_ephemeris_time

__all__ = ["ChartResult", "assemble_chart"]


@dataclass(frozen=True)
class ChartResult:
    bodies: Dict[str, BodyReading]
    houses: HouseCusps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "planets": {name: r.to_dict() for name, r in self.bodies.items()},
            "houses": self.houses.to_dict(),
        }


def assemble_chart(
    oracle, civil: CivilDateTime, location: GeoCoordinate, system: Optional[str]
) -> ChartResult:
    jd_ut = to_ephemeris_time(oracle, civil)
    bodies = resolve_bodies(oracle, jd_ut)
    # raises EphemerisError; a chart never carries empty houses
    houses = resolve_houses(oracle, jd_ut, location, system)
    return ChartResult(bodies=bodies, houses=houses)
