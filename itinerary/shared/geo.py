"""
Great-circle distance helpers.

Single source of distance maths for clustering, day assignment, candidate
scoring and daily travel totals.
"""

import math
from typing import Iterable, Optional, Sequence

from itinerary.shared.schemas.places import Place


EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def place_distance_km(a: Place, b: Place) -> Optional[float]:
    """Distance between two places, or None if either has no coordinates."""
    if not (a.has_coordinates and b.has_coordinates):
        return None
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def total_distance_km(places: Sequence[Place]) -> float:
    """
    Sum of consecutive leg distances along an ordered place sequence.

    Legs with a coordinate-less endpoint (e.g. confirmed bookings without a
    geocode) contribute nothing.
    """
    total = 0.0
    for current, following in zip(places, places[1:]):
        leg = place_distance_km(current, following)
        if leg is not None:
            total += leg
    return total


def mean_point(points: Iterable[tuple]) -> Optional[tuple]:
    """Arithmetic mean of (lat, lon) pairs; None for an empty iterable."""
    lat_sum = lon_sum = 0.0
    count = 0
    for lat, lon in points:
        lat_sum += lat
        lon_sum += lon
        count += 1
    if count == 0:
        return None
    return lat_sum / count, lon_sum / count
