"""Puzzle data model and the geometric/graph primitives shared by every component."""

from hashi.puzzle.geometry import (
    aligned,
    in_open_interval,
    is_between,
    is_vertical,
    manhattan,
    node_between,
    segments_conflict,
    segments_cross,
    segments_overlap,
)
from hashi.puzzle.types import Edge, Node, NodeIndex, Point, Puzzle, edge_key
from hashi.puzzle.union_find import DisjointSet

__all__ = [
    "DisjointSet",
    "Edge",
    "Node",
    "NodeIndex",
    "Point",
    "Puzzle",
    "aligned",
    "edge_key",
    "in_open_interval",
    "is_between",
    "is_vertical",
    "manhattan",
    "node_between",
    "segments_conflict",
    "segments_cross",
    "segments_overlap",
]
