# ephemeris_api/core/ephemeris_adapter.py
# -----------------------------------------------------------------------------
# Swiss Ephemeris adapter (pyswisseph)
#
# Highlights
# • Frozen Config + explicit one-time path setup (the only global side effect)
# • Catalog name → Swiss body id table owned here, not by callers
# • Gregorian calendar always passed to julday
# • Clean error taxonomy: every swisseph.Error surfaces as EphemerisError
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging
import os
import threading

import swisseph as swe

log = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Constants / environment
# ─────────────────────────────────────────────────────────────────────────────
DEFAULT_FLAGS: int = swe.FLG_SWIEPH | swe.FLG_SPEED

_BODY_IDS: Mapping[str, int] = {
    "sun": swe.SUN,
    "moon": swe.MOON,
    "mercury": swe.MERCURY,
    "venus": swe.VENUS,
    "mars": swe.MARS,
    "jupiter": swe.JUPITER,
    "saturn": swe.SATURN,
    "uranus": swe.URANUS,
    "neptune": swe.NEPTUNE,
    "pluto": swe.PLUTO,
    "true_node": swe.TRUE_NODE,
    "chiron": swe.CHIRON,
    "ceres": swe.CERES,
    "pallas": swe.PALLAS,
    "juno": swe.JUNO,
    "vesta": swe.VESTA,
}

# ─────────────────────────────────────────────────────────────────────────────
# Exceptions
# ─────────────────────────────────────────────────────────────────────────────
class EphemerisError(RuntimeError):
    """Categorized error for adapter callers."""
    def __init__(self, stage: str, message: str, **context: Any):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message
        self.context = context

# ─────────────────────────────────────────────────────────────────────────────
# Adapter configuration
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class EphemerisConfig:
    ephe_path: Optional[str] = None
    flags: int = DEFAULT_FLAGS

    @classmethod
    def from_env(cls) -> "EphemerisConfig":
        return cls(ephe_path=os.getenv("SE_EPHE_PATH") or None)

# Path setup is process-wide inside the C library; done once, before serving.
_LOCK_PATH = threading.Lock()
_CONFIGURED_PATH: List[Optional[str]] = []


def _set_ephe_path_once(path: Optional[str]) -> None:
    with _LOCK_PATH:
        if _CONFIGURED_PATH and _CONFIGURED_PATH[0] == path:
            return
        if path:
            if not os.path.isdir(path):
                log.warning("Ephemeris path %s does not exist; swisseph will fall back to Moshier", path)
            swe.set_ephe_path(path)
            log.info("Ephemeris path set to %s", path)
        else:
            log.info("No ephemeris path configured; using swisseph defaults")
        _CONFIGURED_PATH[:] = [path]

# ─────────────────────────────────────────────────────────────────────────────
# Oracle
# ─────────────────────────────────────────────────────────────────────────────
class SwissEphemeris:
    """
    Handle over the Swiss Ephemeris library.

    Build it with :meth:`configure` once at process start and pass the handle
    to the resolvers. Calls are synchronous and stateless; no retries.
    """

    def __init__(self, config: EphemerisConfig):
        self.config = config

    @classmethod
    def configure(cls, config: Optional[EphemerisConfig] = None) -> "SwissEphemeris":
        cfg = config or EphemerisConfig.from_env()
        _set_ephe_path_once(cfg.ephe_path)
        return cls(cfg)

    # ── time ────────────────────────────────────────────────────────────────
    def julday(self, year: int, month: int, day: int, hour: float) -> float:
        try:
            return float(swe.julday(int(year), int(month), int(day), float(hour), swe.GREG_CAL))
        except (swe.Error, TypeError, ValueError) as e:
            raise EphemerisError("julday", str(e), year=year, month=month, day=day, hour=hour) from e

    # ── bodies ──────────────────────────────────────────────────────────────
    def body_position(self, jd_ut: float, body: str) -> Tuple[float, float]:
        """Return (ecliptic longitude, longitude speed in deg/day)."""
        try:
            body_id = _BODY_IDS[body]
        except KeyError:
            raise EphemerisError("calc", f"unknown body '{body}'", body=body) from None
        try:
            xx, _retflag = swe.calc_ut(jd_ut, body_id, self.config.flags)
        except swe.Error as e:
            raise EphemerisError("calc", str(e), body=body, jd_ut=jd_ut) from e
        if len(xx) < 4:
            raise EphemerisError("calc", f"unexpected result length {len(xx)}", body=body, jd_ut=jd_ut)
        return float(xx[0]), float(xx[3])

    # ── houses ──────────────────────────────────────────────────────────────
    def house_cusps(
        self, jd_ut: float, lat: float, lon: float, code: str
    ) -> Tuple[List[float], float, float]:
        """Return (cusps 1..12, ascendant, midheaven)."""
        try:
            cusps, ascmc = swe.houses(jd_ut, float(lat), float(lon), code.encode("ascii"))
        except swe.Error as e:
            raise EphemerisError("houses", str(e), jd_ut=jd_ut, lat=lat, lon=lon, hsys=code) from e
        cs = list(cusps)
        # older builds return a dummy slot at index 0
        if len(cs) == 13:
            cs = cs[1:]
        if len(cs) != 12 or len(ascmc) < 2:
            raise EphemerisError(
                "houses", f"unexpected cusp/angle shape ({len(cs)}, {len(ascmc)})", hsys=code,
            )
        return [float(c) for c in cs], float(ascmc[0]), float(ascmc[1])

    # ── diagnostics ─────────────────────────────────────────────────────────
    def diagnostics(self) -> Dict[str, Any]:
        return {
            "engine": "swisseph",
            "version": getattr(swe, "version", None),
            "ephe_path": self.config.ephe_path,
            "flags": self.config.flags,
        }


def supported_bodies() -> List[str]:
    return list(_BODY_IDS.keys())
