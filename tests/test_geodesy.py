import pytest
from geopy.distance import great_circle

from bikegraph.containers import NodeRecord
from bikegraph.geo import EARTH_RADIUS_M, distance, haversine


def test_distance_to_self_is_zero():
    node = NodeRecord(1, 48.7758, 9.1829)
    assert distance(node, node) == 0.0


def test_distance_is_symmetric():
    a = NodeRecord(1, 48.7758, 9.1829)
    b = NodeRecord(2, 52.5200, 13.4050)
    assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)


def test_one_degree_of_latitude_is_about_111_km():
    d = haversine(50.0, 10.0, 51.0, 10.0)
    assert d == pytest.approx(111_000, rel=0.01)


@pytest.mark.parametrize(
    "a, b",
    [
        ((0.0, 0.0), (0.0, 1.0)),
        ((48.7758, 9.1829), (52.5200, 13.4050)),
        ((-33.8688, 151.2093), (51.5074, -0.1278)),
    ],
)
def test_matches_great_circle_on_the_same_sphere(a, b):
    expected = great_circle(a, b, radius=EARTH_RADIUS_M / 1000).meters
    assert haversine(*a, *b) == pytest.approx(expected, rel=1e-9)


def test_distinct_points_have_positive_distance():
    assert haversine(50.0, 10.0, 50.0, 10.000001) > 0
