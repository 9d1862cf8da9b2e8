"""Geographic calculations - Pure functions.

This module provides great-circle distance calculations between points.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A point on the Earth's surface.

    Attributes:
        latitude: Degrees, [-90, 90]
        longitude: Degrees, [-180, 180]
    """
    latitude: float
    longitude: float


def calculate_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    # Haversine formula
    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Round-off can push h just outside [0, 1] near antipodes and poles
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check latitude is in [-90, 90] and longitude in [-180, 180]."""
    return -90 <= latitude <= 90 and -180 <= longitude <= 180
