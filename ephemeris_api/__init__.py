# ephemeris_api/__init__.py
from ephemeris_api.version import VERSION

__all__ = ["VERSION"]
