"""Replaces external node ids with dense indices, and fills in the geometry
and full cost vector of each edge."""

import math
from typing import Dict, Iterable, List, Sequence, Tuple

from tqdm import tqdm

from bikegraph.containers import NodeRecord, ResolvedEdge, UnresolvedEdge
from bikegraph.errors import DanglingEdgeReference, NonFiniteMetricError
from bikegraph.geo import distance
from bikegraph.metrics import (
    CostMetric,
    MetricRegistry,
    NodeMetric,
    TagMetric,
)


class NodeResolver:
    """Holds the mapping from external node id to dense index. Must only be
    created once every node has been seen."""

    def __init__(self, nodes: Sequence[NodeRecord], registry: MetricRegistry):
        self.nodes = nodes
        self.registry = registry
        self.lookup: Dict[int, Tuple[int, NodeRecord]] = {
            node.osm_id: (index, node) for index, node in enumerate(nodes)
        }

    def _endpoint(self, osm_id: int) -> Tuple[int, NodeRecord]:
        try:
            return self.lookup[osm_id]
        except KeyError:
            raise DanglingEdgeReference(osm_id) from None

    def _costs(
        self, edge: UnresolvedEdge, source: NodeRecord, dest: NodeRecord
    ) -> Tuple[float, ...]:
        """Evaluate every registered metric for the edge, in registry
        order"""
        costs: List[float] = []
        for metric in self.registry:
            if isinstance(metric, TagMetric):
                value = edge.tag_costs[metric.name]
            elif isinstance(metric, NodeMetric):
                value = metric.calc(source, dest)
            elif isinstance(metric, CostMetric):
                value = metric.calc(costs, self.registry.indices)
            else:
                raise TypeError(f"Unsupported metric type: {metric!r}")

            if not math.isfinite(value):
                raise NonFiniteMetricError(metric.name, value)
            costs.append(value)
        return tuple(costs)

    def resolve(self, edge: UnresolvedEdge) -> ResolvedEdge:
        """Resolve a single edge candidate

        Args:
            edge (UnresolvedEdge): The candidate produced from a way

        Returns:
            ResolvedEdge: The edge between dense indices, with its length,
              elevation gain and costs populated

        Raises:
            DanglingEdgeReference: If either endpoint is not a known node
            NonFiniteMetricError: If any value could not be computed
        """
        source_index, source = self._endpoint(edge.source_osm_id)
        dest_index, dest = self._endpoint(edge.dest_osm_id)

        length = distance(source, dest)
        height = max(0.0, dest.height - source.height)
        for label, value in (
            ("length", length),
            ("height", height),
            ("unsuitability", edge.unsuitability),
        ):
            if not math.isfinite(value):
                raise NonFiniteMetricError(
                    label, value, source.lat, source.lon, dest.lat, dest.lon
                )

        return ResolvedEdge(
            source=source_index,
            dest=dest_index,
            length=length,
            height=height,
            unsuitability=edge.unsuitability,
            costs=self._costs(edge, source, dest),
        )

    def resolve_all(
        self, edges: Iterable[UnresolvedEdge], show_progress: bool = False
    ) -> List[ResolvedEdge]:
        return [
            self.resolve(edge)
            for edge in tqdm(
                edges,
                desc="Resolving edges",
                unit="edge",
                disable=not show_progress,
            )
        ]
