from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field

DEFAULT_METRICS = ("distance", "height:ascent", "unsuitability:bicycle")


@dataclass
class ExtractionConfig:
    """Contains user configuration options for the extraction of a routable
    graph from OSM and SRTM data

    Args:
        osm_path (str): The location of the OSM XML file to extract from.
        srtm_dir (str): The folder which holds the SRTM .hgt tiles used to
          look up node elevations.
        output_path (str): The location the graph file should be written to.
        metrics (Tuple[str, ...]): The names of the metrics which should be
          written out for each edge. The registry may reorder them so that
          every metric follows the metrics it depends on.
        internal_metrics (Tuple[str, ...]): Metrics which should be computed
          but left out of the output. Prerequisites of the selected metrics
          are added here automatically.
        edge_filter (str): Either 'bicycle' or 'car', determines which ways
          are considered usable.
        gzip_output (bool): Whether the graph file should be gzipped.
        grid_cell_size (float): Edge length in degrees of the cells used by
          the grid metrics.
        grid_origin (Tuple[float, float]): The latitude/longitude of the
          south-west corner of grid cell (0, 0).
        random_seed (Optional[int]): Seed for the 'random' metric.
        show_progress (bool): Whether tqdm progress bars should be shown.
    """

    osm_path: str = ""
    srtm_dir: str = ""
    output_path: str = ""
    metrics: Tuple[str, ...] = DEFAULT_METRICS
    internal_metrics: Tuple[str, ...] = ()
    edge_filter: str = "bicycle"
    gzip_output: bool = False
    grid_cell_size: float = 0.1
    grid_origin: Tuple[float, float] = (0.0, 0.0)
    random_seed: Optional[int] = None
    show_progress: bool = True


@dataclass(frozen=True)
class OsmNode:
    """A node as produced by the decoder, before elevation lookup"""

    osm_id: int
    lat: float
    lon: float


@dataclass(frozen=True)
class Way:
    """An ordered sequence of node references plus its tags"""

    way_id: int
    nodes: Tuple[int, ...]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Member:
    member_type: str
    member_id: int


@dataclass(frozen=True)
class Relation:
    """A tagged grouping of other map objects, e.g. a signed cycle route"""

    relation_id: int
    tags: Dict[str, str] = field(default_factory=dict)
    members: Tuple[Member, ...] = ()


@dataclass(frozen=True)
class NodeRecord:
    """A node of the output graph

    Args:
        osm_id (int): The identifier of the node in the source dataset
        lat (float): Latitude
        lon (float): Longitude
        height (float): Elevation in metres, 0.0 where no tile was found"""

    osm_id: int
    lat: float
    lon: float
    height: float = 0.0


@dataclass(frozen=True)
class UnresolvedEdge:
    """A directed edge candidate which still refers to its endpoints by
    their external ids. Tag derived costs for the emitting way are carried
    along, keyed by metric name."""

    source_osm_id: int
    dest_osm_id: int
    unsuitability: float
    tag_costs: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedEdge:
    """A directed edge between two dense node indices

    Args:
        source (int): Dense index of the start node
        dest (int): Dense index of the end node
        length (float): Great circle length in metres
        height (float): Elevation gain in metres, never negative
        unsuitability (float): Cycling unsuitability of the emitting way
        costs (Tuple[float, ...]): The full cost vector, laid out as per
          the metric registry (internal metrics included)"""

    source: int
    dest: int
    length: float
    height: float
    unsuitability: float
    costs: Tuple[float, ...] = ()

    @property
    def filter_key(self) -> Tuple[int, int, float, float, float]:
        """The tuple used for sorting and duplicate detection"""
        return (
            self.source,
            self.dest,
            self.unsuitability,
            self.height,
            self.length,
        )
