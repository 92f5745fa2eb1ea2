# ephemeris_api/core/zodiac.py
from __future__ import annotations

"""
Angle normalizer.

Maps any real longitude onto [0, 360) and derives the zodiac sign and the
degree inside that sign. Total over finite floats; raw longitudes coming back
from the ephemeris may be negative or exceed a full turn.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ephemeris_api.core.constants import SIGNS, SIGN_SPAN_DEG

__all__ = ["ZodiacPosition", "wrap360", "normalize"]


def wrap360(x: float) -> float:
    """Positive modulo 360. Never returns 360.0."""
    v = float(x) % 360.0
    # tiny negatives round up to exactly 360.0
    return 0.0 if v >= 360.0 else v


@dataclass(frozen=True)
class ZodiacPosition:
    longitude: float      # raw, as returned by the ephemeris
    full_degree: float    # [0, 360)
    sign: str
    degree: float         # [0, 30)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "longitude": self.longitude,
            "full_degree": self.full_degree,
            "sign": self.sign,
            "degree": self.degree,
        }


def normalize(raw_longitude: float) -> ZodiacPosition:
    full = wrap360(raw_longitude)
    idx = min(int(full // SIGN_SPAN_DEG), len(SIGNS) - 1)
    degree = full - idx * SIGN_SPAN_DEG
    return ZodiacPosition(
        longitude=float(raw_longitude),
        full_degree=full,
        sign=SIGNS[idx],
        degree=degree,
    )
