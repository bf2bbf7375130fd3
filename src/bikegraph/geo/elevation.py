"""Contains the ElevationSampler class, which estimates the height of a
coordinate from SRTM1 .hgt tiles.

Each tile covers one degree of latitude and longitude, and holds a grid of
3601x3601 big-endian signed 16 bit samples, stored row by row from north to
south."""

import logging
import math
import os
from typing import Optional, Set, Tuple

import numpy as np

from bikegraph.errors import ElevationTileError, MissingElevationTile

logger = logging.getLogger(__name__)

TILE_SAMPLES = 3601
SAMPLES_PER_DEGREE = TILE_SAMPLES - 1
SAMPLE_DTYPE = np.dtype(">i2")


def tile_name(lat: float, lon: float) -> str:
    """Generate the name of the tile which contains the provided point,
    e.g. N50E010.hgt. Cells south of the equator or west of the prime
    meridian use the S and W prefixes."""
    north = math.floor(lat)
    east = math.floor(lon)
    lat_prefix = "N" if north >= 0 else "S"
    lon_prefix = "E" if east >= 0 else "W"
    return f"{lat_prefix}{abs(north):02}{lon_prefix}{abs(east):03}.hgt"


class ElevationSampler:
    """Looks up elevations for coordinates by bilinear interpolation over
    the four samples surrounding them. Only the most recently used tile is
    kept open."""

    def __init__(self, srtm_dir: str):
        """Create a sampler which reads tiles from `srtm_dir`

        Args:
            srtm_dir (str): The folder containing the .hgt files
        """
        self.srtm_dir = srtm_dir

        self._tile_path: Optional[str] = None
        self._tile: Optional[np.memmap] = None
        self._missing: Set[str] = set()

    def _load_tile(self, path: str) -> np.memmap:
        """Map the contents of the tile at `path` into memory, reusing the
        previous mapping where the same tile is requested twice in a row."""
        if path == self._tile_path and self._tile is not None:
            return self._tile

        if not os.path.isfile(path):
            raise MissingElevationTile(path)

        try:
            tile = np.memmap(
                path,
                dtype=SAMPLE_DTYPE,
                mode="r",
                shape=(TILE_SAMPLES * TILE_SAMPLES,),
            )
        except ValueError as exc:
            raise ElevationTileError(
                f"Tile {path} does not hold {TILE_SAMPLES}x{TILE_SAMPLES} "
                "samples"
            ) from exc

        self._tile_path = path
        self._tile = tile
        return tile

    @staticmethod
    def _offsets(lat: float, lon: float) -> Tuple[float, float]:
        """Work out the (1-based) row and column offsets of a point within
        its tile. Both are fractional, the integer parts identify the
        nearest sample towards the north-west."""
        lat_offset = TILE_SAMPLES - (lat - math.floor(lat)) * SAMPLES_PER_DEGREE
        lon_offset = (lon - math.floor(lon)) * SAMPLES_PER_DEGREE
        return lat_offset, lon_offset

    def _read_sample(
        self, tile: np.memmap, row: int, col: int, lat: float, lon: float
    ) -> float:
        index = (row - 1) * TILE_SAMPLES + col
        if row < 1 or not 0 <= col < TILE_SAMPLES or index >= tile.shape[0]:
            raise ElevationTileError(
                f"Reading failed at {lat}, {lon} (row {row}, column {col})"
            )
        return float(tile[index])

    def elevation(self, lat: float, lon: float) -> float:
        """Estimate the elevation of a single point.

        Args:
            lat (float): Latitude of the point
            lon (float): Longitude of the point

        Returns:
            float: The interpolated elevation in metres, or 0.0 when no tile
              covers the point
        """
        path = os.path.join(self.srtm_dir, tile_name(lat, lon))
        try:
            tile = self._load_tile(path)
        except MissingElevationTile as exc:
            if exc.path not in self._missing:
                self._missing.add(exc.path)
                logger.warning(
                    "Could not find elevation tile %s, using height 0",
                    exc.path,
                )
            return 0.0

        lat_offset, lon_offset = self._offsets(lat, lon)
        lat_frac = lat_offset - math.floor(lat_offset)
        lon_frac = lon_offset - math.floor(lon_offset)

        row_floor, row_ceil = math.floor(lat_offset), math.ceil(lat_offset)
        col_floor, col_ceil = math.floor(lon_offset), math.ceil(lon_offset)

        h1 = self._read_sample(tile, row_floor, col_floor, lat, lon)
        h2 = self._read_sample(tile, row_ceil, col_floor, lat, lon)
        h3 = self._read_sample(tile, row_floor, col_ceil, lat, lon)
        h4 = self._read_sample(tile, row_ceil, col_ceil, lat, lon)

        return (
            h1 * (1.0 - lat_frac) * (1.0 - lon_frac)
            + h2 * lat_frac * (1.0 - lon_frac)
            + h3 * (1.0 - lat_frac) * lon_frac
            + h4 * lat_frac * lon_frac
        )

    @property
    def missing_tiles(self) -> Set[str]:
        """The paths of all tiles which were requested but not found"""
        return set(self._missing)
