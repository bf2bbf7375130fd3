"""Edge metrics. Each metric computes one named cost from either the tags of
a way, the endpoints of an edge, or previously computed costs."""

from bikegraph.metrics.base import CostMetric, Metric, NodeMetric, TagMetric
from bikegraph.metrics.catalogue import (
    CATALOGUE,
    BicycleUnsuitability,
    CarSpeed,
    Distance,
    FastCarSpeed,
    HeightAscent,
    MetricContext,
    RandomWeights,
    TravelTime,
    TruckSpeed,
    bicycle_unsuitability,
    has_bicycle_infrastructure,
)
from bikegraph.metrics.grid import ChessBoard, Grid, GridX, GridY
from bikegraph.metrics.registry import MetricRegistry

__all__ = [
    "CATALOGUE",
    "BicycleUnsuitability",
    "CarSpeed",
    "ChessBoard",
    "CostMetric",
    "Distance",
    "FastCarSpeed",
    "Grid",
    "GridX",
    "GridY",
    "HeightAscent",
    "Metric",
    "MetricContext",
    "MetricRegistry",
    "NodeMetric",
    "RandomWeights",
    "TagMetric",
    "TravelTime",
    "TruckSpeed",
    "bicycle_unsuitability",
    "has_bicycle_infrastructure",
]
