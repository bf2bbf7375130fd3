"""Contains the Graph class, the result of an extraction."""

from dataclasses import dataclass
from typing import List, Tuple

from networkx import MultiDiGraph

from bikegraph.containers import NodeRecord, ResolvedEdge
from bikegraph.metrics import MetricRegistry


@dataclass(frozen=True)
class Graph:
    """Nodes and edges of an extracted graph. The dense index of a node is
    its position in `nodes`.

    Args:
        nodes (Tuple[NodeRecord, ...]): All nodes, in dense index order
        edges (Tuple[ResolvedEdge, ...]): The filtered edges
        registry (MetricRegistry): Defines the layout of each edge's costs
    """

    nodes: Tuple[NodeRecord, ...]
    edges: Tuple[ResolvedEdge, ...]
    registry: MetricRegistry

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def output_costs(self, edge: ResolvedEdge) -> List[float]:
        """The costs of `edge` which should be written out"""
        return self.registry.output_costs(edge.costs)

    def to_networkx(self) -> MultiDiGraph:
        """Convert the graph to a networkx MultiDiGraph, keyed by dense
        node index. Each edge carries one attribute per output metric.

        Returns:
            MultiDiGraph: The converted graph
        """
        graph = MultiDiGraph()
        names = self.registry.output_names()

        for index, node in enumerate(self.nodes):
            graph.add_node(
                index,
                osm_id=node.osm_id,
                lat=node.lat,
                lon=node.lon,
                height=node.height,
            )

        for edge in self.edges:
            graph.add_edge(
                edge.source,
                edge.dest,
                **dict(zip(names, self.output_costs(edge))),
            )

        return graph
