"""Turns ways, and the ways referenced by bicycle route relations, into
directed edge candidates."""

from typing import Dict, Iterator, List, Mapping, Optional

from bikegraph.containers import Relation, UnresolvedEdge, Way
from bikegraph.reader import is_bicycle_route
from bikegraph.metrics import (
    MetricRegistry,
    bicycle_unsuitability,
    has_bicycle_infrastructure,
)

NOT_FOR_BICYCLES = frozenset(
    {
        "motorway",
        "motorway_link",
        "trunk",
        "trunk_link",
        "proposed",
        "steps",
        "elevator",
        "corridor",
        "raceway",
        "rest_area",
        "construction",
    }
)

DRIVABLE_HIGHWAYS = frozenset(
    {
        "motorway",
        "motorway_link",
        "trunk",
        "trunk_link",
        "primary",
        "primary_link",
        "secondary",
        "secondary_link",
        "tertiary",
        "tertiary_link",
        "unclassified",
        "residential",
        "living_street",
        "service",
        "road",
    }
)

TRUE_VALUES = frozenset({"yes", "true", "1"})
FALSE_VALUES = frozenset({"no", "false", "0"})


class BicycleEdgeFilter:
    """Decides whether a way can be used by bicycles"""

    name = "bicycle"

    def is_usable(self, tags: Mapping[str, str]) -> bool:
        if tags.get("bicycle") == "no":
            return False
        if has_bicycle_infrastructure(tags):
            return True

        sidewalk = tags.get("sidewalk")
        if sidewalk is not None and sidewalk != "no":
            return True

        return tags.get("highway") not in NOT_FOR_BICYCLES


class CarEdgeFilter:
    """Decides whether a way can be used by cars"""

    name = "car"

    def is_usable(self, tags: Mapping[str, str]) -> bool:
        for key in ("access", "motor_vehicle", "motorcar"):
            if tags.get(key) == "no":
                return False
        return tags.get("highway") in DRIVABLE_HIGHWAYS


EDGE_FILTERS = {
    BicycleEdgeFilter.name: BicycleEdgeFilter,
    CarEdgeFilter.name: CarEdgeFilter,
}


def parse_oneway(value: Optional[str]) -> Optional[bool]:
    """Interpret the value of a oneway tag. Returns None if the tag is
    missing or holds something other than a yes/no equivalent."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def is_one_way(tags: Mapping[str, str]) -> bool:
    """Motorways are one way unless tagged otherwise, everything else has
    to be tagged oneway explicitly."""
    one_way = parse_oneway(tags.get("oneway"))
    if one_way is not None:
        return one_way
    return tags.get("highway") == "motorway"


class WayProcessor:
    """Generates edge candidates for individual ways. Unsuitability and the
    tag metrics are evaluated once per way and shared by all of its edges.
    """

    def __init__(self, registry: MetricRegistry, edge_filter=None):
        """
        Args:
            registry (MetricRegistry): Provides the tag metrics to evaluate
            edge_filter: An object with an `is_usable(tags)` method, defaults
              to a BicycleEdgeFilter
        """
        self.registry = registry
        self.edge_filter = edge_filter or BicycleEdgeFilter()

    def _tag_costs(
        self, tags: Mapping[str, str], bicycle_relation: bool
    ) -> Dict[str, float]:
        return {
            metric.name: metric.calc(tags, bicycle_relation)
            for metric in self.registry.tag_metrics
        }

    def process_way(
        self, way: Way, bicycle_relation: bool = False
    ) -> List[UnresolvedEdge]:
        """Emit one candidate per consecutive pair of nodes in the way, plus
        the reverse direction for ways which are not one way.

        Args:
            way (Way): The way to process
            bicycle_relation (bool): Whether the way is processed as part of
              a bicycle route, which discounts its unsuitability

        Returns:
            List[UnresolvedEdge]: The edge candidates for the way
        """
        unsuitability = bicycle_unsuitability(way.tags, bicycle_relation)
        tag_costs = self._tag_costs(way.tags, bicycle_relation)
        one_way = is_one_way(way.tags)

        edges = []
        for source, dest in zip(way.nodes, way.nodes[1:]):
            edges.append(UnresolvedEdge(source, dest, unsuitability, tag_costs))
            if not one_way:
                edges.append(
                    UnresolvedEdge(dest, source, unsuitability, tag_costs)
                )
        return edges

    def process_usable_way(self, way: Way) -> List[UnresolvedEdge]:
        """Like `process_way`, but returns nothing for ways which are
        rejected by the edge filter"""
        if not self.edge_filter.is_usable(way.tags):
            return []
        return self.process_way(way)

    def process_relation(
        self, relation: Relation, ways: Mapping[int, Way]
    ) -> Iterator[UnresolvedEdge]:
        """Emit discounted candidates for every way in a bicycle route.
        Members which are not ways, or which are missing from `ways`, are
        skipped.

        Args:
            relation (Relation): The route relation
            ways (Mapping[int, Way]): All known ways, keyed by id
        """
        if not is_bicycle_route(relation.tags):
            return
        for member in relation.members:
            if member.member_type != "way":
                continue
            way = ways.get(member.member_id)
            if way is None:
                continue
            yield from self.process_way(way, bicycle_relation=True)
