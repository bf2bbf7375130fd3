"""Great circle distances between points on the earth's surface"""

import math

EARTH_RADIUS_M = 6_371_007.2


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great circle distance in metres between two WGS84
    coordinates, using the haversine formula.

    Args:
        lat1 (float): Latitude of the first point
        lon1 (float): Longitude of the first point
        lat2 (float): Latitude of the second point
        lon2 (float): Longitude of the second point

    Returns:
        float: The distance between both points in metres
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = (math.sin(dphi / 2.0) ** 2) + (
        math.cos(phi1) * math.cos(phi2) * (math.sin(dlambda / 2.0) ** 2)
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


def distance(source, dest) -> float:
    """Convenience wrapper around `haversine` for any two objects exposing
    `lat` and `lon` attributes, such as node records."""
    return haversine(source.lat, source.lon, dest.lat, dest.lon)
