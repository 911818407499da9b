"""Stateless grid geometry predicates for orthogonal bridges.

All segments handled here are axis-aligned: both endpoints share an x
(vertical) or a y (horizontal). Interval tests are open, so touching at an
endpoint never counts as a crossing.
"""

from typing import Iterable

from hashi.puzzle.types import Point


def aligned(p: Point, q: Point) -> bool:
    """True iff p and q share a row or a column."""
    return p.x == q.x or p.y == q.y


def is_vertical(p: Point, q: Point) -> bool:
    return p.x == q.x


def in_open_interval(value: int, a: int, b: int) -> bool:
    """True iff value lies strictly between a and b (in either order)."""
    return min(a, b) < value < max(a, b)


def manhattan(p: Point, q: Point) -> int:
    return abs(p.x - q.x) + abs(p.y - q.y)


def is_between(u: Point, v: Point, candidate: Point) -> bool:
    """True iff candidate sits on segment u-v strictly inside its span."""
    if is_vertical(u, v):
        return candidate.x == u.x and in_open_interval(candidate.y, u.y, v.y)
    return candidate.y == u.y and in_open_interval(candidate.x, u.x, v.x)


def node_between(u: Point, v: Point, points: Iterable[Point]) -> bool:
    """True iff any point other than u and v blocks segment u-v."""
    return any(
        p != u and p != v and is_between(u, v, p) for p in points
    )


def segments_cross(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """True iff one vertical and one horizontal segment cross in their interiors.

    Parallel segments never cross under this predicate; collinear overlap is
    handled by segments_overlap.
    """
    a_vertical = is_vertical(a1, a2)
    if a_vertical == is_vertical(b1, b2):
        return False

    if a_vertical:
        vert1, vert2, horiz1, horiz2 = a1, a2, b1, b2
    else:
        vert1, vert2, horiz1, horiz2 = b1, b2, a1, a2

    return in_open_interval(vert1.x, horiz1.x, horiz2.x) and in_open_interval(
        horiz1.y, vert1.y, vert2.y
    )


def segments_overlap(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """True iff two collinear segments share more than a single point."""
    a_vertical = is_vertical(a1, a2)
    if a_vertical != is_vertical(b1, b2):
        return False

    if a_vertical:
        if a1.x != b1.x:
            return False
        lo_a, hi_a = sorted((a1.y, a2.y))
        lo_b, hi_b = sorted((b1.y, b2.y))
    else:
        if a1.y != b1.y:
            return False
        lo_a, hi_a = sorted((a1.x, a2.x))
        lo_b, hi_b = sorted((b1.x, b2.x))

    return max(lo_a, lo_b) < min(hi_a, hi_b)


def segments_conflict(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """True iff two bridges cannot both be drawn: a crossing or a collinear overlap."""
    return segments_cross(a1, a2, b1, b2) or segments_overlap(a1, a2, b1, b2)
