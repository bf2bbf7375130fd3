"""Contains the GraphExtractor class, which turns decoded OSM objects and
SRTM elevation tiles into a multi-criteria routing graph."""

import logging
from typing import Dict, Iterable, List, Optional, Union

from bikegraph.containers import (
    ExtractionConfig,
    NodeRecord,
    OsmNode,
    Relation,
    UnresolvedEdge,
    Way,
)
from bikegraph.errors import ConfigurationError
from bikegraph.extractor.dedup import FilterReport, filter_edges
from bikegraph.extractor.resolver import NodeResolver
from bikegraph.extractor.ways import EDGE_FILTERS, WayProcessor
from bikegraph.geo import ElevationSampler
from bikegraph.graph_utils import Graph
from bikegraph.metrics import MetricRegistry
from bikegraph.reader import is_bicycle_route, is_relevant_way, read_osm

logger = logging.getLogger(__name__)

OsmObject = Union[OsmNode, Way, Relation]


class GraphExtractor:
    """Collects nodes, ways and relations, then builds the graph from them.
    Node elevations are looked up as soon as a node is added; edges are
    only created once every object has been seen, as ways may refer to
    nodes which come later in the input.
    """

    def __init__(
        self,
        config: ExtractionConfig,
        registry: Optional[MetricRegistry] = None,
        sampler: Optional[ElevationSampler] = None,
    ):
        """Create an extractor for the provided configuration

        Args:
            config (ExtractionConfig): User configuration options
            registry (Optional[MetricRegistry]): The metrics to compute for
              each edge, built from `config` if not provided
            sampler (Optional[ElevationSampler]): Source of node elevations,
              reads tiles from `config.srtm_dir` if not provided
        """

        # Store down user preferences
        self.config = config
        self.registry = (
            registry
            if registry is not None
            else MetricRegistry.from_config(config)
        )
        self.sampler = (
            sampler if sampler is not None else ElevationSampler(config.srtm_dir)
        )

        try:
            edge_filter = EDGE_FILTERS[config.edge_filter]()
        except KeyError:
            raise ConfigurationError(
                f"Unknown edge filter '{config.edge_filter}', expected one "
                f"of {sorted(EDGE_FILTERS)}"
            ) from None
        self.processor = WayProcessor(self.registry, edge_filter)

        self.nodes: List[NodeRecord] = []
        self.ways: Dict[int, Way] = {}
        self.relations: List[Relation] = []
        self.report: Optional[FilterReport] = None
        self._node_ids = set()

    def add_node(self, node: OsmNode):
        """Record a node, along with its elevation"""
        if node.osm_id in self._node_ids:
            logger.debug("Ignoring repeated node %d", node.osm_id)
            return
        self._node_ids.add(node.osm_id)
        self.nodes.append(
            NodeRecord(
                osm_id=node.osm_id,
                lat=node.lat,
                lon=node.lon,
                height=self.sampler.elevation(node.lat, node.lon),
            )
        )

    def add_way(self, way: Way):
        self.ways[way.way_id] = way

    def add_relation(self, relation: Relation):
        if is_bicycle_route(relation.tags):
            self.relations.append(relation)

    def ingest(self, objects: Iterable[OsmObject]):
        """Add every object from a stream of decoded OSM objects"""
        for obj in objects:
            if isinstance(obj, OsmNode):
                self.add_node(obj)
            elif isinstance(obj, Way):
                self.add_way(obj)
            elif isinstance(obj, Relation):
                self.add_relation(obj)
            else:
                raise TypeError(f"Unsupported OSM object: {obj!r}")

    def build_edges(self) -> List[UnresolvedEdge]:
        """Generate the edge candidates for all usable ways, followed by the
        discounted candidates for the ways of each bicycle route."""
        edges: List[UnresolvedEdge] = []
        for way in self.ways.values():
            if len(way.nodes) < 2:
                logger.debug("Skipping way %d with fewer than 2 nodes", way.way_id)
                continue
            if not is_relevant_way(way.tags):
                continue
            edges.extend(self.processor.process_usable_way(way))

        for relation in self.relations:
            edges.extend(self.processor.process_relation(relation, self.ways))

        return edges

    def extract(self, objects: Optional[Iterable[OsmObject]] = None) -> Graph:
        """Run the full extraction.

        Args:
            objects (Optional[Iterable[OsmObject]]): Decoded OSM objects. If
              not provided, they are read from `config.osm_path`.

        Returns:
            Graph: The extracted nodes and filtered edges
        """
        if objects is None:
            logger.info("Extracting data out of: %s", self.config.osm_path)
            objects = read_osm(self.config.osm_path)

        self.ingest(objects)
        logger.info(
            "Loaded %d nodes, %d ways and %d bicycle routes",
            len(self.nodes),
            len(self.ways),
            len(self.relations),
        )

        candidates = self.build_edges()
        logger.info("Calculating distances and height differences on edges")
        resolver = NodeResolver(self.nodes, self.registry)
        edges = resolver.resolve_all(
            candidates, show_progress=self.config.show_progress
        )

        logger.info("Deleting duplicate edges")
        edges, self.report = filter_edges(edges)

        return Graph(
            nodes=tuple(self.nodes), edges=tuple(edges), registry=self.registry
        )
