"""Concrete metrics, and the lookup from metric name to a factory for it"""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Sequence

import numpy as np

from bikegraph.containers import NodeRecord
from bikegraph.geo import distance
from bikegraph.metrics.base import CostMetric, Metric, NodeMetric, TagMetric
from bikegraph.metrics.grid import ChessBoard, Grid, GridX, GridY
from bikegraph.errors import NonFiniteTimeError

BICYCLE_RELATION_FACTOR = 0.5

UNSUITABILITY_BY_HIGHWAY = {
    "primary": 5.0,
    "primary_link": 5.0,
    "secondary": 4.0,
    "secondary_link": 4.0,
    "tertiary": 3.0,
    "tertiary_link": 3.0,
    "road": 3.0,
    "bridleway": 3.0,
    "unclassified": 2.0,
    "residential": 2.0,
    "traffic_island": 2.0,
    "living_street": 1.0,
    "service": 1.0,
    "track": 1.0,
    "platform": 1.0,
    "pedestrian": 1.0,
    "path": 1.0,
    "footway": 1.0,
    "cycleway": 0.5,
}
UNKNOWN_UNSUITABILITY = 6.0

CAR_SPEED_BY_HIGHWAY = {
    "motorway": 130.0,
    "trunk": 130.0,
    "primary": 100.0,
    "secondary": 80.0,
    "trunk_link": 80.0,
    "motorway_link": 70.0,
    "primary_link": 70.0,
    "secondary_link": 70.0,
    "tertiary": 70.0,
    "tertiary_link": 70.0,
    "service": 30.0,
    "living_street": 5.0,
}
DEFAULT_CAR_SPEED = 50.0

FAST_CAR_UNLIMITED_SPEED = 200.0
FAST_CAR_MOTORWAY_SPEED = 160.0
TRUCK_MAX_SPEED = 80.0


def has_bicycle_infrastructure(tags: Mapping[str, str]) -> bool:
    """True if the way has a cycleway, or explicitly allows bicycles"""
    bicycle = tags.get("bicycle")
    return "cycleway" in tags or (bicycle is not None and bicycle != "no")


def bicycle_unsuitability(
    tags: Mapping[str, str], bicycle_relation: bool = False
) -> float:
    """Score how unpleasant a way is to cycle along, from 0.5 (dedicated
    infrastructure) to 6 (unknown road class). Ways which are part of a
    signed bicycle route get their score halved.

    Args:
        tags (Mapping[str, str]): The tags of the way
        bicycle_relation (bool): Whether the way is scored as part of a
          bicycle route relation

    Returns:
        float: The unsuitability of the way
    """
    factor = BICYCLE_RELATION_FACTOR if bicycle_relation else 1.0

    if has_bicycle_infrastructure(tags):
        return 0.5 * factor

    if tags.get("sidewalk") == "yes":
        return 1.0 * factor

    unsuitability = UNSUITABILITY_BY_HIGHWAY.get(
        tags.get("highway"), UNKNOWN_UNSUITABILITY
    )
    return unsuitability * factor


def parse_maxspeed(tags: Mapping[str, str]) -> Optional[float]:
    """Return the numeric maxspeed tag if it is set to a positive number"""
    raw = tags.get("maxspeed")
    if raw is None:
        return None
    try:
        speed = float(raw.strip())
    except ValueError:
        return None
    if math.isfinite(speed) and speed > 0:
        return speed
    return None


class BicycleUnsuitability(TagMetric):
    name = "unsuitability:bicycle"

    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        return bicycle_unsuitability(tags, bicycle_relation)


class CarSpeed(TagMetric):
    """Expected speed of a car in km/h. Uses the maxspeed tag where it is
    set, otherwise a default for the road class."""

    name = "speed:car"

    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        speed = parse_maxspeed(tags)
        if speed is not None:
            return speed
        return CAR_SPEED_BY_HIGHWAY.get(tags.get("highway"), DEFAULT_CAR_SPEED)


class FastCarSpeed(CarSpeed):
    """Like CarSpeed, but makes use of unrestricted motorways"""

    name = "speed:fast_car"

    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        if tags.get("maxspeed") == "none":
            return FAST_CAR_UNLIMITED_SPEED
        if parse_maxspeed(tags) is None and tags.get("highway") == "motorway":
            return FAST_CAR_MOTORWAY_SPEED
        return super().calc(tags, bicycle_relation)


class TruckSpeed(CarSpeed):
    """CarSpeed, capped at the speed limit for heavy goods vehicles"""

    name = "speed:truck"

    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        return min(super().calc(tags, bicycle_relation), TRUCK_MAX_SPEED)


class RandomWeights(TagMetric):
    """Uniformly distributed weights in [0, 1), one draw per way. Useful
    for benchmarking route planners against uncorrelated costs."""

    name = "random"

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        return float(self.rng.random())


class Distance(NodeMetric):
    name = "distance"

    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        return distance(source, dest)


class HeightAscent(NodeMetric):
    name = "height:ascent"

    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        return max(0.0, dest.height - source.height)


class TravelTime(CostMetric):
    """Travel time derived from the distance and the speed metric for a
    vehicle type, computed as distance * 360 / speed."""

    def __init__(self, mode: str):
        self.mode = mode
        self.name = f"time:{mode}"
        self.speed_name = f"speed:{mode}"
        self.depends_on = (Distance.name, self.speed_name)

    def calc(self, costs: Sequence[float], indices: Dict[str, int]) -> float:
        dist = self.lookup(costs, indices, Distance.name)
        speed = self.lookup(costs, indices, self.speed_name)
        try:
            time = dist * 360.0 / speed
        except ZeroDivisionError:
            time = math.inf if dist else math.nan
        if not math.isfinite(time):
            raise NonFiniteTimeError(self.name, time, dist, speed)
        return time


@dataclass
class MetricContext:
    """State shared between metrics, created once before extraction"""

    grid: Grid = field(default_factory=Grid)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)


CATALOGUE: Dict[str, Callable[[MetricContext], Metric]] = {
    Distance.name: lambda ctx: Distance(),
    HeightAscent.name: lambda ctx: HeightAscent(),
    BicycleUnsuitability.name: lambda ctx: BicycleUnsuitability(),
    CarSpeed.name: lambda ctx: CarSpeed(),
    FastCarSpeed.name: lambda ctx: FastCarSpeed(),
    TruckSpeed.name: lambda ctx: TruckSpeed(),
    "time:car": lambda ctx: TravelTime("car"),
    "time:fast_car": lambda ctx: TravelTime("fast_car"),
    "time:truck": lambda ctx: TravelTime("truck"),
    GridX.name: lambda ctx: GridX(ctx.grid),
    GridY.name: lambda ctx: GridY(ctx.grid),
    ChessBoard.name: lambda ctx: ChessBoard(ctx.grid),
    RandomWeights.name: lambda ctx: RandomWeights(ctx.rng),
}
