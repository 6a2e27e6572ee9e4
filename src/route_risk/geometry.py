"""Great-circle distance between coordinates."""

import math

from .models import Coordinate

EARTH_RADIUS_M = 6_371_000


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in meters."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def path_length(coordinates: list[Coordinate]) -> float:
    """Sum of haversine distances between consecutive vertices."""
    return sum(distance(coordinates[i - 1], coordinates[i]) for i in range(1, len(coordinates)))
