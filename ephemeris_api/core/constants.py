# ephemeris_api/core/constants.py
# -*- coding: utf-8 -*-
"""
Core constants

Single source of truth for:
- zodiac sign names (Aries → Pisces, 30° each starting at 0°)
- the fixed body catalog served by /api/planets and /api/chart
- house system names and their one-letter Swiss Ephemeris codes

All tables are read-only process-wide constants; nothing here is mutated
after import.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Final, Mapping, Tuple

__all__ = [
    "SIGNS", "SIGN_SPAN_DEG",
    "BODIES",
    "HOUSE_SYSTEMS", "DEFAULT_HOUSE_SYSTEM", "HOUSE_COUNT",
]

# ── zodiac ───────────────────────────────────────────────────────────────────
SIGNS: Final[Tuple[str, ...]] = (
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)
SIGN_SPAN_DEG: Final[float] = 30.0

# ── body catalog ─────────────────────────────────────────────────────────────
# Order is the response field order.
BODIES: Final[Tuple[str, ...]] = (
    "sun", "moon", "mercury", "venus", "mars",
    "jupiter", "saturn", "uranus", "neptune", "pluto",
    "true_node", "chiron",
    "ceres", "pallas", "juno", "vesta",
)

# ── house systems ────────────────────────────────────────────────────────────
HOUSE_SYSTEMS: Final[Mapping[str, str]] = MappingProxyType({
    "placidus": "P",
    "whole_sign": "W",
    "koch": "K",
    "equal": "E",
    "campanus": "C",
})
DEFAULT_HOUSE_SYSTEM: Final[str] = "placidus"
HOUSE_COUNT: Final[int] = 12
