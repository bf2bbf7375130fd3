"""Spatial binning shared by the grid metrics"""

import math
from dataclasses import dataclass
from typing import Tuple

from bikegraph.containers import NodeRecord
from bikegraph.errors import ConfigurationError
from bikegraph.metrics.base import NodeMetric


@dataclass(frozen=True)
class Grid:
    """Divides the map into square cells of `cell_size` degrees, counting
    from the cell whose south-west corner sits at the origin. Built once
    from the extraction config and shared by every grid metric.

    Args:
        origin_lat (float): Latitude of the south-west corner of cell (0, 0)
        origin_lon (float): Longitude of the south-west corner of cell (0, 0)
        cell_size (float): Edge length of a cell in degrees
    """

    origin_lat: float = 0.0
    origin_lon: float = 0.0
    cell_size: float = 0.1

    def __post_init__(self):
        if not self.cell_size > 0:
            raise ConfigurationError(
                f"Grid cell size must be positive, got {self.cell_size}"
            )

    def cell(self, lat: float, lon: float) -> Tuple[int, int]:
        """Return the (x, y) cell containing the point"""
        x = math.floor((lon - self.origin_lon) / self.cell_size)
        y = math.floor((lat - self.origin_lat) / self.cell_size)
        return x, y


class GridX(NodeMetric):
    """Column of the grid cell the edge starts in"""

    name = "grid:x"

    def __init__(self, grid: Grid):
        self.grid = grid

    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        return float(self.grid.cell(source.lat, source.lon)[0])


class GridY(NodeMetric):
    """Row of the grid cell the edge starts in"""

    name = "grid:y"

    def __init__(self, grid: Grid):
        self.grid = grid

    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        return float(self.grid.cell(source.lat, source.lon)[1])


class ChessBoard(NodeMetric):
    """Colours the grid like a chess board: 0 for 'white' cells, 1 for
    'black' ones"""

    name = "grid:chessboard"

    def __init__(self, grid: Grid):
        self.grid = grid

    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        x, y = self.grid.cell(source.lat, source.lon)
        return float((x + y) % 2)
