"""Extracts multi-criteria bicycle routing graphs from OSM and SRTM data."""

from bikegraph.containers import ExtractionConfig, NodeRecord, ResolvedEdge
from bikegraph.extractor import GraphExtractor
from bikegraph.graph_utils import Graph
from bikegraph.metrics import MetricRegistry

__all__ = [
    "ExtractionConfig",
    "Graph",
    "GraphExtractor",
    "MetricRegistry",
    "NodeRecord",
    "ResolvedEdge",
]
