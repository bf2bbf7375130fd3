import numpy as np
import pytest

from bikegraph.containers import ExtractionConfig, OsmNode, Way
from bikegraph.geo.elevation import SAMPLE_DTYPE, TILE_SAMPLES

OSM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="50.0" lon="10.0"/>
  <node id="2" lat="50.01" lon="10.0"/>
  <node id="3" lat="50.02" lon="10.0"/>
  <node id="4" lat="50.03" lon="10.0">
    <tag k="amenity" v="bench"/>
  </node>
  <node id="5" lat="50.04" lon="10.0"/>
  <node id="6" lat="50.05" lon="10.0"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <tag k="highway" v="residential"/>
  </way>
  <way id="11">
    <nd ref="4"/>
    <nd ref="1"/>
    <tag k="building" v="yes"/>
  </way>
  <way id="12">
    <nd ref="3"/>
    <nd ref="5"/>
    <tag k="route" v="ferry"/>
  </way>
  <relation id="20">
    <member type="way" ref="12" role=""/>
    <member type="node" ref="6" role=""/>
    <tag k="type" v="route"/>
    <tag k="route" v="bicycle"/>
  </relation>
  <relation id="21">
    <member type="way" ref="10" role=""/>
    <tag k="route" v="bus"/>
  </relation>
</osm>
"""


class FakeSampler:
    """Elevation source backed by a dict of (lat, lon) -> height"""

    def __init__(self, heights=None):
        self.heights = heights or {}
        self.calls = []

    def elevation(self, lat, lon):
        self.calls.append((lat, lon))
        return self.heights.get((lat, lon), 0.0)


@pytest.fixture
def fake_sampler():
    return FakeSampler


@pytest.fixture
def config():
    return ExtractionConfig(show_progress=False)


@pytest.fixture
def three_node_way():
    """Residential way A -> B -> C with nodes 0.01 degrees apart and
    elevations of 0, 10 and 5 metres."""
    nodes = [
        OsmNode(101, 0.0, 0.0),
        OsmNode(102, 0.01, 0.0),
        OsmNode(103, 0.02, 0.0),
    ]
    heights = {(0.0, 0.0): 0.0, (0.01, 0.0): 10.0, (0.02, 0.0): 5.0}
    way = Way(1, (101, 102, 103), {"highway": "residential"})
    return nodes, way, FakeSampler(heights)


@pytest.fixture(scope="session")
def tile_dir(tmp_path_factory):
    """A folder holding a single synthetic N50E010 tile. A handful of
    samples are set, everything else is 0."""
    folder = tmp_path_factory.mktemp("srtm")
    samples = np.zeros((TILE_SAMPLES, TILE_SAMPLES), dtype=SAMPLE_DTYPE)

    # Exact sample positions for lat 50.5 / 50.25 and lon 10.25 / 10.5
    samples[1800, 900] = 100
    samples[1800, 1800] = -20
    samples[2700, 900] = 300
    samples[2700, 1800] = 4000

    # Neighbourhood used for interpolation
    samples[1000, 2000] = 100
    samples[1001, 2000] = 200
    samples[1000, 2001] = 300
    samples[1001, 2001] = 400

    samples.tofile(str(folder / "N50E010.hgt"))
    (folder / "N51E010.hgt").write_bytes(b"\x00\x01" * 5)
    return folder


@pytest.fixture
def osm_file(tmp_path):
    path = tmp_path / "map.osm"
    path.write_text(OSM_XML, encoding="utf8")
    return path
