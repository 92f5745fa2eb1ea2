# tests/conftest.py
from __future__ import annotations

"""
Pytest configuration for the ephemeris API suite.

- Registers Hypothesis profiles for local dev and CI.
- Provides a deterministic in-memory ephemeris (FakeEphemeris) that honours the
  oracle contract and can be told to fail per body or for house computation.
- App/client fixtures inject the fake through create_app(oracle=...).
"""

import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest
from hypothesis import settings, HealthCheck

from ephemeris_api.core.ephemeris_adapter import EphemerisError
from ephemeris_api.main import create_app
from ephemeris_api.utils.config import load_config


# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=200,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Fake ephemeris
# ──────────────────────────────────────────────────────────────────────────────
# Raw longitudes deliberately include negatives and values past 360.
FAKE_LON: Dict[str, float] = {
    "sun": 280.37, "moon": 223.32, "mercury": 271.89, "venus": 241.57,
    "mars": 327.96, "jupiter": 25.25, "saturn": 40.40, "uranus": 314.81,
    "neptune": 303.19, "pluto": 251.45, "true_node": -234.5, "chiron": 251.59,
    "ceres": 183.2, "pallas": 400.0, "juno": 10.0, "vesta": 725.0,
}
FAKE_SPEED: Dict[str, float] = {
    "sun": 1.019, "moon": 12.02, "mercury": -0.4, "venus": 1.2, "mars": 0.77,
    "jupiter": 0.04, "saturn": -0.02, "uranus": 0.05, "neptune": 0.036, "pluto": -0.01,
    "true_node": -0.05, "chiron": 0.08, "ceres": 0.4, "pallas": 0.3, "juno": 0.0, "vesta": 0.45,
}


def gregorian_jd(year: int, month: int, day: int, hour: float) -> float:
    y, m = year, month
    if m <= 2:
        y -= 1
        m += 12
    a = y // 100
    b = 2 - a + a // 4
    return int(365.25 * (y + 4716)) + int(30.6001 * (m + 1)) + day + hour / 24.0 + b - 1524.5


class FakeEphemeris:
    def __init__(self, fail_bodies: Iterable[str] = (), house_error: Optional[str] = None):
        self.fail_bodies = set(fail_bodies)
        self.house_error = house_error
        self.calls: List[Tuple[Any, ...]] = []

    def julday(self, year: int, month: int, day: int, hour: float) -> float:
        self.calls.append(("julday", year, month, day, hour))
        return gregorian_jd(year, month, day, hour)

    def body_position(self, jd_ut: float, body: str) -> Tuple[float, float]:
        self.calls.append(("calc", jd_ut, body))
        if body in self.fail_bodies:
            raise EphemerisError("calc", f"SwissEph file for {body} not found", body=body)
        return FAKE_LON[body], FAKE_SPEED[body]

    def house_cusps(self, jd_ut: float, lat: float, lon: float, code: str):
        self.calls.append(("houses", jd_ut, lat, lon, code))
        if self.house_error:
            raise EphemerisError("houses", self.house_error, hsys=code)
        asc = 100.0 + lat
        cusps = [asc + 30.0 * i for i in range(12)]
        # MC differs from cusp 10 on purpose
        return cusps, asc, -80.0

    def codes_used(self) -> List[str]:
        return [c[-1] for c in self.calls if c[0] == "houses"]


# ──────────────────────────────────────────────────────────────────────────────
# Global fixtures
# ──────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def fake_oracle() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture
def make_client():
    def _make(oracle):
        app = create_app(cfg=load_config(), oracle=oracle)
        app.testing = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client, fake_oracle):
    return make_client(fake_oracle)


@pytest.fixture
def base_payload() -> Dict[str, Any]:
    return {"year": 2000, "month": 1, "day": 1, "hour": 12, "min": 0}


@pytest.fixture
def place_payload(base_payload) -> Dict[str, Any]:
    return {**base_payload, "lat": 51.5, "lon": -0.12}
