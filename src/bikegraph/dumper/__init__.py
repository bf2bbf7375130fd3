"""Writes extracted graphs to the plain text graph format."""

from bikegraph.dumper.writer import dump_graph, write_graph

__all__ = ["dump_graph", "write_graph"]
