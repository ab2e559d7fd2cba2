import math
from typing import NamedTuple

EARTH_RADIUS_MILES = 3958.8


class Coordinate(NamedTuple):
    lat: float
    lng: float


def distance_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two points, in miles."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push h just past 1 near the antipode.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_MILES * math.atan2(math.sqrt(h), math.sqrt(1 - h))
