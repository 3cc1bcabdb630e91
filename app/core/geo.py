"""Geo utilities: distance (Haversine), unit conversion and coordinate bounds."""

import math

EARTH_RADIUS_KM = 6371.0
MILES_PER_KM = 0.621371

# Coordinate bounds for validation
LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute great-circle distance between two (lat, lon) points in kilometers.
    Uses the Haversine formula. Inputs are not range-checked here.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def km_to_miles(km: float) -> float:
    """Convert kilometers to miles."""
    return km * MILES_PER_KM


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """True if lat is in [-90, 90] and lon is in [-180, 180]."""
    return LAT_MIN <= lat <= LAT_MAX and LON_MIN <= lon <= LON_MAX
