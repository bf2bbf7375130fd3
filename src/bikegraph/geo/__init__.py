"""Geometry helpers: great circle distances and SRTM elevation lookups."""

from bikegraph.geo.geodesy import EARTH_RADIUS_M, distance, haversine
from bikegraph.geo.elevation import ElevationSampler, tile_name

__all__ = [
    "EARTH_RADIUS_M",
    "ElevationSampler",
    "distance",
    "haversine",
    "tile_name",
]
