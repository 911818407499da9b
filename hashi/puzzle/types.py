"""Puzzle data structures: grid points, nodes, edges, and the id lookup table."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from hashi.config.puzzle import Difficulty


@dataclass(frozen=True, slots=True)
class Point:
    """Integer grid coordinate, 0 <= x, y < grid_size."""

    x: int
    y: int


@dataclass(slots=True)
class Node:
    """A house: a grid point requiring an exact number of connections.

    required_degree is fixed once generation succeeds. current_degree is a
    cache rewritten from the authoritative edge set by the win-condition
    checker; nothing else should trust it.
    """

    id: str
    position: Point
    required_degree: int = 0
    current_degree: int = 0

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y


def edge_key(a: str, b: str) -> tuple[str, str]:
    """Canonical key for the unordered pair {a, b}."""
    return (a, b) if a < b else (b, a)


@dataclass(frozen=True, slots=True)
class Edge:
    """A cable between two nodes, single or double."""

    node_a: str
    node_b: str
    multiplicity: int = 1

    def __post_init__(self) -> None:
        if self.node_a == self.node_b:
            raise ValueError(f"Edge endpoints must differ, got {self.node_a!r} twice")
        if self.multiplicity not in (1, 2):
            raise ValueError(
                f"multiplicity must be 1 or 2, got {self.multiplicity}"
            )

    @property
    def key(self) -> tuple[str, str]:
        return edge_key(self.node_a, self.node_b)

    def touches(self, *node_ids: str) -> bool:
        """True if either endpoint is one of node_ids."""
        return self.node_a in node_ids or self.node_b in node_ids


class NodeIndex:
    """Id -> slot lookup shared by every component addressing one puzzle.

    Slots follow node insertion order, so slot 0 is the first node and the
    slots double as Union-Find / adjacency-matrix indices.
    """

    def __init__(self, nodes: Iterable[Node]) -> None:
        self._nodes: list[Node] = list(nodes)
        self._slots: dict[str, int] = {}
        for slot, node in enumerate(self._nodes):
            if node.id in self._slots:
                raise ValueError(f"Duplicate node id {node.id!r}")
            self._slots[node.id] = slot

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._slots

    def slot(self, node_id: str) -> int:
        """Slot of node_id; raises KeyError for an unknown id."""
        try:
            return self._slots[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id {node_id!r}") from None

    def node(self, node_id: str) -> Node:
        return self._nodes[self.slot(node_id)]

    def position(self, node_id: str) -> Point:
        return self.node(node_id).position

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def positions(self) -> list[Point]:
        return [n.position for n in self._nodes]


@dataclass(frozen=True)
class Puzzle:
    """Immutable container for a generated puzzle and its provenance.

    solution_edges is the witness used to derive required degrees. It is
    kept for validation and export only; the player-facing graph state is
    seeded from nodes alone.
    """

    nodes: tuple[Node, ...]
    solution_edges: tuple[Edge, ...]
    difficulty: Difficulty
    grid_size: int
    max_degree: int
    generation_seed: int | None = None  # seed of the RNG that built it, if known
    attempt: int = 0  # which attempt produced it (0-indexed)
    is_fallback: bool = False
    index: NodeIndex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", NodeIndex(self.nodes))

    @property
    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    @property
    def required_degrees(self) -> dict[str, int]:
        return {n.id: n.required_degree for n in self.nodes}
