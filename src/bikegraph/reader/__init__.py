"""Decodes OSM XML files into the node, way and relation containers used by
the extractor. Only highway ways, bicycle route relations and the objects
they depend on are returned."""

import gzip
import logging
import xml.etree.ElementTree as ET
from typing import IO, Dict, Iterator, List, Mapping, Set

from bikegraph.containers import Member, OsmNode, Relation, Way

logger = logging.getLogger(__name__)

OBJECT_TAGS = ("node", "way", "relation")


def is_relevant_way(tags: Mapping[str, str]) -> bool:
    return "highway" in tags


def is_bicycle_route(tags: Mapping[str, str]) -> bool:
    return tags.get("route") == "bicycle"


def _open(path: str) -> IO[bytes]:
    if str(path).endswith(".gz"):
        return gzip.open(path, "rb")
    return open(path, "rb")


def _iterparse(fobj: IO[bytes]) -> Iterator[ET.Element]:
    """Yield each completed top level object. The handled element is
    cleared and detached from the root, so memory use stays flat on large
    extracts."""
    root = None
    for event, elem in ET.iterparse(fobj, events=("start", "end")):
        if root is None:
            root = elem
        if event != "end" or elem.tag not in OBJECT_TAGS:
            continue
        yield elem
        elem.clear()
        root.clear()


def _iter_elements(path: str, tag: str) -> Iterator[ET.Element]:
    """Iterate over all top level elements of one type"""
    with _open(path) as fobj:
        for elem in _iterparse(fobj):
            if elem.tag == tag:
                yield elem


def _tags(elem: ET.Element) -> Dict[str, str]:
    return {t.attrib["k"]: t.attrib.get("v", "") for t in elem.findall("tag")}


def _parse_way(elem: ET.Element) -> Way:
    return Way(
        way_id=int(elem.attrib["id"]),
        nodes=tuple(int(nd.attrib["ref"]) for nd in elem.findall("nd")),
        tags=_tags(elem),
    )


def _parse_relation(elem: ET.Element) -> Relation:
    return Relation(
        relation_id=int(elem.attrib["id"]),
        tags=_tags(elem),
        members=tuple(
            Member(member.attrib["type"], int(member.attrib["ref"]))
            for member in elem.findall("member")
        ),
    )


def read_osm(path: str) -> Iterator[object]:
    """Read the objects required to build a routing graph from an OSM XML
    file, which may be gzipped.

    The file is scanned up to three times: once for relations and highway
    ways, once for ways which are only referenced by bicycle routes, and
    once for the nodes all of these ways use.

    Args:
        path (str): The location of the .osm or .osm.gz file

    Yields:
        OsmNode, Way or Relation objects; all nodes come first, followed by
          the ways and finally the relations
    """
    ways: Dict[int, Way] = {}
    relations: List[Relation] = []

    with _open(path) as fobj:
        for elem in _iterparse(fobj):
            if elem.tag == "way":
                way = _parse_way(elem)
                if is_relevant_way(way.tags):
                    ways[way.way_id] = way
            elif elem.tag == "relation":
                if is_bicycle_route(_tags(elem)):
                    relations.append(_parse_relation(elem))

    route_way_ids: Set[int] = {
        member.member_id
        for relation in relations
        for member in relation.members
        if member.member_type == "way" and member.member_id not in ways
    }
    if route_way_ids:
        for elem in _iter_elements(path, "way"):
            if int(elem.attrib["id"]) in route_way_ids:
                way = _parse_way(elem)
                ways[way.way_id] = way

    node_ids: Set[int] = {
        node_id for way in ways.values() for node_id in way.nodes
    }
    logger.info(
        "Found %d ways and %d bicycle routes referencing %d nodes",
        len(ways),
        len(relations),
        len(node_ids),
    )

    for elem in _iter_elements(path, "node"):
        osm_id = int(elem.attrib["id"])
        if osm_id in node_ids:
            yield OsmNode(
                osm_id=osm_id,
                lat=float(elem.attrib["lat"]),
                lon=float(elem.attrib["lon"]),
            )

    yield from ways.values()
    yield from relations
