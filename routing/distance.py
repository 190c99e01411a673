"""
Purpose: Great-circle distance between two coordinates (haversine).
What it does:
- distance(lat1, lon1, lat2, lon2) -> kilometers
- parse_coordinate("lat,lon") -> (lat, lon)

Rule: Pure functions. No HTTP, no batching logic.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Tuple

from .errors import InvalidCoordinate

# internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0


def _require_finite(value) -> float:
    # bool is a Real subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidCoordinate(value)
    as_float = float(value)
    if not math.isfinite(as_float):
        raise InvalidCoordinate(value)
    return as_float


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in kilometers between (lat1, lon1) and (lat2, lon2).

    Raises InvalidCoordinate if any input is not a finite real number.
    """
    lat1, lon1, lat2, lon2 = (_require_finite(v) for v in (lat1, lon1, lat2, lon2))

    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def parse_coordinate(location: str) -> LatLon:
    """
    Parse a "lat,lon" string into a (lat, lon) tuple of floats.
    """
    if not isinstance(location, str):
        raise InvalidCoordinate(location, "expected a 'lat,lon' string")

    parts = location.split(",")
    if len(parts) != 2:
        raise InvalidCoordinate(location, "expected exactly one comma")

    try:
        lat, lon = (float(part.strip()) for part in parts)
    except ValueError:
        raise InvalidCoordinate(location, "non-numeric part") from None

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(location)

    return lat, lon
