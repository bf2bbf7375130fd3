"""Removes duplicated and Pareto dominated edges between the same pair of
nodes."""

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, List, Tuple

from bikegraph.containers import ResolvedEdge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterReport:
    """Number of edges removed at each stage of the filter"""

    duplicates: int = 0
    dominated: int = 0


def dominates(first: ResolvedEdge, second: ResolvedEdge) -> bool:
    """True if `first` is at least as good as `second` in length, elevation
    gain and unsuitability."""
    return (
        first.length <= second.length
        and first.height <= second.height
        and first.unsuitability <= second.unsuitability
    )


def sort_edges(edges: Iterable[ResolvedEdge]) -> List[ResolvedEdge]:
    """Order by source, destination, unsuitability, elevation gain and
    length. Resolved edges are always finite, so this is a total order."""
    return sorted(edges, key=lambda edge: edge.filter_key)


def remove_duplicates(edges: List[ResolvedEdge]) -> List[ResolvedEdge]:
    """Drop edges whose filter key equals that of their predecessor. Expects
    sorted input."""
    unique: List[ResolvedEdge] = []
    for edge in edges:
        if unique and unique[-1].filter_key == edge.filter_key:
            continue
        unique.append(edge)
    return unique


def remove_dominated(edges: List[ResolvedEdge]) -> List[ResolvedEdge]:
    """Drop every edge which is dominated by another edge between the same
    nodes. Expects sorted, duplicate free input: a later edge can then never
    dominate an earlier one, so each edge only needs checking against the
    survivors before it."""
    survivors: List[ResolvedEdge] = []
    for _, group in groupby(edges, key=lambda edge: (edge.source, edge.dest)):
        kept: List[ResolvedEdge] = []
        for edge in group:
            if any(dominates(other, edge) for other in kept):
                continue
            kept.append(edge)
        survivors.extend(kept)
    return survivors


def filter_edges(
    edges: Iterable[ResolvedEdge],
) -> Tuple[List[ResolvedEdge], FilterReport]:
    """Sort the edges, then remove exact duplicates followed by dominated
    edges.

    Args:
        edges (Iterable[ResolvedEdge]): The resolved edge candidates

    Returns:
        Tuple[List[ResolvedEdge], FilterReport]: The surviving edges in
          sorted order, and the number of edges removed by each stage
    """
    edges = sort_edges(edges)
    edge_count = len(edges)

    edges = remove_duplicates(edges)
    duplicates = edge_count - len(edges)
    logger.info("Removed %d duplicated edges", duplicates)

    before = len(edges)
    edges = remove_dominated(edges)
    dominated = before - len(edges)
    logger.info("Removed %d dominated edges, %d remain", dominated, len(edges))

    return edges, FilterReport(duplicates=duplicates, dominated=dominated)
