"""Serialises a Graph to text. The layout is:

    # comment lines, including the names of the written metrics
    <metric count>
    <node count>
    <edge count>
    <index> <osm id> <lat> <lon> <height> 0         (one line per node)
    <source> <dest> <cost> ... <cost> -1 -1          (one line per edge)
"""

import gzip
import logging
from datetime import datetime
from typing import IO, Optional

from bikegraph.graph_utils import Graph

logger = logging.getLogger(__name__)


def write_graph(graph: Graph, fobj: IO[str], built_on: Optional[datetime] = None):
    """Write `graph` to an open text stream.

    Args:
        graph (Graph): The graph to write
        fobj (IO[str]): The stream to write to
        built_on (Optional[datetime]): Timestamp for the header, defaults to
          the current time
    """
    built_on = built_on or datetime.now()
    registry = graph.registry

    fobj.write("# Build by: bikegraph\n")
    fobj.write(f"# Build on: {built_on.isoformat()}\n")
    fobj.write(f"# metrics: {', '.join(registry.output_names())}\n")

    fobj.write(f"{registry.metric_count()}\n")
    fobj.write(f"{graph.node_count}\n")
    fobj.write(f"{graph.edge_count}\n")

    for index, node in enumerate(graph.nodes):
        fobj.write(
            f"{index} {node.osm_id} {node.lat} {node.lon} {node.height} 0\n"
        )

    for edge in graph.edges:
        costs = " ".join(str(cost) for cost in graph.output_costs(edge))
        if costs:
            fobj.write(f"{edge.source} {edge.dest} {costs} -1 -1\n")
        else:
            fobj.write(f"{edge.source} {edge.dest} -1 -1\n")


def dump_graph(graph: Graph, path: str, gzip_output: bool = False):
    """Write `graph` to the file at `path`, gzipped if requested"""
    logger.info(
        "Writing %d nodes and %d edges to %s",
        graph.node_count,
        graph.edge_count,
        path,
    )
    if gzip_output:
        with gzip.open(path, "wt", encoding="utf8") as fobj:
            write_graph(graph, fobj)
    else:
        with open(path, "w", encoding="utf8") as fobj:
            write_graph(graph, fobj)
