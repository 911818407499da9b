"""Player graph state: the bridges currently on the board and their legality."""

import logging
from typing import Iterable

from hashi.puzzle.geometry import aligned, node_between, segments_conflict
from hashi.puzzle.types import Edge, Node, NodeIndex, edge_key

log = logging.getLogger(__name__)

_NEXT_MULTIPLICITY = {0: 1, 1: 2, 2: 0}


class GraphState:
    """Owns the player's edge multiset for one puzzle.

    Edges are stored once per unordered pair under edge_key; multiplicity 0
    is represented by the key being absent. Mutation happens only through
    toggle, set_multiplicity and reset.
    """

    def __init__(self, nodes: Iterable[Node] | NodeIndex) -> None:
        self.index = nodes if isinstance(nodes, NodeIndex) else NodeIndex(nodes)
        self._edges: dict[tuple[str, str], Edge] = {}

    def __len__(self) -> int:
        return len(self._edges)

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.index.nodes

    def multiplicity(self, a: str, b: str) -> int:
        """Current bridge count between a and b (0 when absent)."""
        edge = self._edges.get(edge_key(a, b))
        return edge.multiplicity if edge else 0

    def legal(self, a: str, b: str) -> bool:
        """Whether a bridge between a and b may be placed or updated.

        Illegal when the nodes coincide, are not aligned, have another node
        between them, or the new segment crosses or overlaps an existing
        bridge whose endpoints are both outside {a, b}. Bridges sharing an
        endpoint never block, so raising or clearing an existing pair is
        always permitted.
        """
        if a == b:
            return False
        p = self.index.position(a)
        q = self.index.position(b)

        if not aligned(p, q):
            return False
        if node_between(p, q, self.index.positions):
            return False

        for edge in self._edges.values():
            if edge.touches(a, b):
                continue
            if segments_conflict(
                p,
                q,
                self.index.position(edge.node_a),
                self.index.position(edge.node_b),
            ):
                return False
        return True

    def toggle(self, a: str, b: str) -> int:
        """Cycle the pair through absent -> 1 -> 2 -> absent.

        Does not check legality; call legal first when that should block.

        Returns:
            The new multiplicity (0 when the bridge was removed).
        """
        new = _NEXT_MULTIPLICITY[self.multiplicity(a, b)]
        self.set_multiplicity(a, b, new)
        return new

    def set_multiplicity(self, a: str, b: str, multiplicity: int) -> None:
        """Set the pair to exactly multiplicity (0 removes it)."""
        if multiplicity not in (0, 1, 2):
            raise ValueError(f"multiplicity must be 0, 1 or 2, got {multiplicity}")
        # Resolve both ids so unknown nodes fail loudly
        self.index.slot(a)
        self.index.slot(b)

        key = edge_key(a, b)
        if multiplicity == 0:
            self._edges.pop(key, None)
        else:
            self._edges[key] = Edge(a, b, multiplicity)
        log.debug("Edge %s-%s set to %d", key[0], key[1], multiplicity)

    def current_edges(self) -> tuple[Edge, ...]:
        """Read-only snapshot of the placed bridges."""
        return tuple(self._edges.values())

    def reset(self) -> None:
        """Remove every bridge."""
        self._edges.clear()
