"""Player-facing board: edge legality, edge multiset, and win detection."""

from hashi.board.state import GraphState
from hashi.board.win import compute_degrees, degree_mismatches, is_solved, reachable_from

__all__ = [
    "GraphState",
    "compute_degrees",
    "degree_mismatches",
    "is_solved",
    "reachable_from",
]
