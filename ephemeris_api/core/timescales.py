# ephemeris_api/core/timescales.py
from __future__ import annotations

"""
Civil date/time → ephemeris time (Julian Day, UT).

The fractional hour is ``hour + minute / 60``. Calendar bounds are not checked
here; out-of-range values go straight to the ephemeris, which is the behaviour
the spreadsheet client relies on.
"""

from dataclasses import dataclass

__all__ = ["CivilDateTime", "to_ephemeris_time"]


@dataclass(frozen=True)
class CivilDateTime:
    year: int
    month: int
    day: int
    hour: float
    minute: float

    @property
    def decimal_hour(self) -> float:
        return float(self.hour) + float(self.minute) / 60.0


def to_ephemeris_time(oracle, civil: CivilDateTime) -> float:
    """Julian Day (UT) on the proleptic Gregorian calendar."""
    return oracle.julday(civil.year, civil.month, civil.day, civil.decimal_hour)
