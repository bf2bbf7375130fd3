import pytest

from bikegraph.containers import ExtractionConfig, Member, OsmNode, Relation, Way
from bikegraph.errors import ConfigurationError, DanglingEdgeReference
from bikegraph.extractor import GraphExtractor
from bikegraph.metrics import MetricRegistry


def test_three_node_way(config, three_node_way):
    nodes, way, sampler = three_node_way
    extractor = GraphExtractor(config, sampler=sampler)
    extractor.ingest(nodes + [way])

    candidates = extractor.build_edges()
    assert [(e.source_osm_id, e.dest_osm_id) for e in candidates] == [
        (101, 102),
        (102, 101),
        (102, 103),
        (103, 102),
    ]

    graph = extractor.extract([])
    assert [node.height for node in graph.nodes] == [0.0, 10.0, 5.0]
    assert [(e.source, e.dest) for e in graph.edges] == [
        (0, 1),
        (1, 0),
        (1, 2),
        (2, 1),
    ]
    assert [e.height for e in graph.edges] == [10.0, 0.0, 0.0, 5.0]
    assert {e.unsuitability for e in graph.edges} == {2.0}
    assert all(e.length == pytest.approx(1112, rel=1e-3) for e in graph.edges)
    assert extractor.report.duplicates == 0
    assert extractor.report.dominated == 0


def test_elevation_is_sampled_once_per_node(config, three_node_way):
    nodes, way, sampler = three_node_way
    extractor = GraphExtractor(config, sampler=sampler)
    extractor.ingest(nodes + nodes[:1] + [way])

    assert len(extractor.nodes) == 3
    assert sampler.calls == [(0.0, 0.0), (0.01, 0.0), (0.02, 0.0)]


def test_cost_vector_contents(three_node_way):
    nodes, way, sampler = three_node_way
    config = ExtractionConfig(
        metrics=("height:ascent", "unsuitability:bicycle", "time:car"),
        show_progress=False,
    )
    graph = GraphExtractor(config, sampler=sampler).extract(nodes + [way])

    assert graph.registry.output_names() == [
        "height:ascent",
        "unsuitability:bicycle",
        "time:car",
    ]
    first = graph.edges[0]
    height, unsuitability, time = graph.output_costs(first)
    assert height == 10.0
    assert unsuitability == 2.0
    assert time == pytest.approx(first.length * 360 / 50)


def test_bicycle_route_dominates_plain_edges(config, three_node_way):
    nodes, way, sampler = three_node_way
    route = Relation(5, {"route": "bicycle"}, (Member("way", way.way_id),))
    extractor = GraphExtractor(config, sampler=sampler)
    graph = extractor.extract(nodes + [way, route])

    assert len(graph.edges) == 4
    assert {e.unsuitability for e in graph.edges} == {1.0}
    assert extractor.report.dominated == 4


def test_route_ways_are_used_even_if_unusable(config, fake_sampler):
    nodes = [OsmNode(1, 0.0, 0.0), OsmNode(2, 0.0, 0.01)]
    motorway = Way(3, (1, 2), {"highway": "motorway"})
    ferry = Way(4, (2, 1), {"route": "ferry"})
    route = Relation(
        5, {"route": "bicycle"}, (Member("way", 3), Member("way", 4))
    )

    extractor = GraphExtractor(config, sampler=fake_sampler())
    extractor.ingest(nodes + [motorway, ferry])
    assert extractor.build_edges() == []

    graph = extractor.extract([route])
    assert [(e.source, e.dest, e.unsuitability) for e in graph.edges] == [
        (0, 1, 3.0),
        (1, 0, 3.0),
    ]


def test_car_filter(fake_sampler):
    nodes = [OsmNode(1, 0.0, 0.0), OsmNode(2, 0.0, 0.01), OsmNode(3, 0.0, 0.02)]
    ways = [
        Way(10, (1, 2), {"highway": "motorway"}),
        Way(11, (2, 3), {"highway": "footway"}),
    ]
    config = ExtractionConfig(
        metrics=("time:car",), edge_filter="car", show_progress=False
    )
    graph = GraphExtractor(config, sampler=fake_sampler()).extract(nodes + ways)
    assert [(e.source, e.dest) for e in graph.edges] == [(0, 1)]


def test_unknown_edge_filter(fake_sampler):
    config = ExtractionConfig(edge_filter="horse")
    with pytest.raises(ConfigurationError):
        GraphExtractor(config, sampler=fake_sampler())


def test_dangling_node_reference(config, fake_sampler):
    nodes = [OsmNode(1, 0.0, 0.0)]
    way = Way(3, (1, 2), {"highway": "residential"})
    with pytest.raises(DanglingEdgeReference):
        GraphExtractor(config, sampler=fake_sampler()).extract(nodes + [way])


def test_short_and_irrelevant_ways_are_skipped(config, fake_sampler):
    nodes = [OsmNode(1, 0.0, 0.0), OsmNode(2, 0.0, 0.01)]
    ways = [
        Way(3, (1,), {"highway": "residential"}),
        Way(4, (1, 2), {"building": "yes"}),
    ]
    graph = GraphExtractor(config, sampler=fake_sampler()).extract(nodes + ways)
    assert graph.edges == ()
    assert graph.node_count == 2


def test_unsupported_objects(config, fake_sampler):
    extractor = GraphExtractor(config, sampler=fake_sampler())
    with pytest.raises(TypeError):
        extractor.ingest(["not an osm object"])


def test_explicit_registry(config, three_node_way):
    nodes, way, sampler = three_node_way
    registry = MetricRegistry.from_names(["distance"])
    graph = GraphExtractor(config, registry=registry, sampler=sampler).extract(
        nodes + [way]
    )
    assert graph.registry is registry
    assert all(len(e.costs) == 1 for e in graph.edges)


def test_empty_registry_is_kept(config, three_node_way):
    nodes, way, sampler = three_node_way
    registry = MetricRegistry([])
    extractor = GraphExtractor(config, registry=registry, sampler=sampler)
    assert extractor.registry is registry
    assert extractor.sampler is sampler

    graph = extractor.extract(nodes + [way])
    assert graph.registry.metric_count() == 0
    assert graph.edge_count == 4
    assert all(edge.costs == () for edge in graph.edges)


def test_to_networkx(config, three_node_way):
    nodes, way, sampler = three_node_way
    graph = GraphExtractor(config, sampler=sampler).extract(nodes + [way])
    nx_graph = graph.to_networkx()

    assert nx_graph.number_of_nodes() == 3
    assert nx_graph.number_of_edges() == 4
    assert nx_graph.nodes[1]["osm_id"] == 102
    assert nx_graph.nodes[1]["height"] == 10.0
    attrs = nx_graph.get_edge_data(0, 1)[0]
    assert attrs["height:ascent"] == 10.0
    assert attrs["unsuitability:bicycle"] == 2.0
