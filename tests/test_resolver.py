import math

import pytest

from bikegraph.containers import NodeRecord, UnresolvedEdge
from bikegraph.errors import (
    DanglingEdgeReference,
    NonFiniteMetricError,
    NonFiniteTimeError,
)
from bikegraph.extractor.resolver import NodeResolver
from bikegraph.geo import haversine
from bikegraph.metrics import (
    CarSpeed,
    Distance,
    HeightAscent,
    MetricRegistry,
    TravelTime,
)

NODES = [
    NodeRecord(500, 50.0, 10.0, 120.0),
    NodeRecord(300, 50.01, 10.0, 100.0),
    NodeRecord(900, 50.01, 10.01, 130.0),
]


@pytest.fixture
def registry():
    return MetricRegistry.from_names(["distance", "height:ascent", "time:car"])


def candidate(source, dest, unsuitability=2.0, speed=50.0):
    return UnresolvedEdge(source, dest, unsuitability, {"speed:car": speed})


def test_endpoints_are_renumbered(registry):
    resolver = NodeResolver(NODES, registry)
    edge = resolver.resolve(candidate(300, 900))

    assert (edge.source, edge.dest) == (1, 2)
    assert edge.unsuitability == 2.0


def test_geometry_is_computed(registry):
    resolver = NodeResolver(NODES, registry)
    uphill = resolver.resolve(candidate(300, 500))
    downhill = resolver.resolve(candidate(500, 300))

    assert uphill.length == pytest.approx(haversine(50.01, 10.0, 50.0, 10.0))
    assert uphill.length == pytest.approx(downhill.length)
    assert uphill.height == 20.0
    assert downhill.height == 0.0


def test_cost_vector_follows_registry_layout(registry):
    resolver = NodeResolver(NODES, registry)
    edge = resolver.resolve(candidate(300, 900, speed=36.0))

    assert len(edge.costs) == len(registry)
    dist = edge.costs[registry.index("distance")]
    assert dist == pytest.approx(edge.length)
    assert edge.costs[registry.index("height:ascent")] == 30.0
    assert edge.costs[registry.index("speed:car")] == 36.0
    assert edge.costs[registry.index("time:car")] == pytest.approx(dist * 10)


def test_dangling_reference(registry):
    resolver = NodeResolver(NODES, registry)
    with pytest.raises(DanglingEdgeReference) as excinfo:
        resolver.resolve(candidate(300, 4242))
    assert excinfo.value.osm_id == 4242


def test_non_finite_geometry_is_rejected(registry):
    nodes = NODES + [NodeRecord(1, math.nan, 10.0)]
    resolver = NodeResolver(nodes, registry)
    with pytest.raises(NonFiniteMetricError):
        resolver.resolve(candidate(1, 300))


def test_zero_speed_is_rejected():
    class StandStill(CarSpeed):
        def calc(self, tags, bicycle_relation=False):
            return 0.0

    registry = MetricRegistry([Distance(), StandStill(), TravelTime("car")])
    resolver = NodeResolver(NODES, registry)
    with pytest.raises(NonFiniteTimeError):
        resolver.resolve(UnresolvedEdge(300, 500, 1.0, {"speed:car": 0.0}))


def test_resolve_all(registry):
    resolver = NodeResolver(NODES, registry)
    edges = resolver.resolve_all([candidate(500, 300), candidate(300, 500)])
    assert [(e.source, e.dest) for e in edges] == [(0, 1), (1, 0)]


def test_ascent_metric_matches_edge_height():
    registry = MetricRegistry([HeightAscent()])
    resolver = NodeResolver(NODES, registry)
    edge = resolver.resolve(UnresolvedEdge(300, 900, 1.0))
    assert edge.costs == (edge.height,)
