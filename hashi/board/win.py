"""Win-condition checks: exact degrees plus full connectivity."""

from collections import defaultdict, deque
from typing import Iterable, Sequence

from hashi.puzzle.types import Edge, Node


def compute_degrees(nodes: Iterable[Node], edges: Iterable[Edge]) -> dict[str, int]:
    """Sum incident multiplicities per node, from scratch."""
    degrees = {n.id: 0 for n in nodes}
    for e in edges:
        degrees[e.node_a] += e.multiplicity
        degrees[e.node_b] += e.multiplicity
    return degrees


def reachable_from(start: str, edges: Iterable[Edge]) -> set[str]:
    """Breadth-first reachability; multiplicity is ignored."""
    adjacency: dict[str, list[str]] = defaultdict(list)
    for e in edges:
        adjacency[e.node_a].append(e.node_b)
        adjacency[e.node_b].append(e.node_a)

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def degree_mismatches(nodes: Sequence[Node], edges: Sequence[Edge]) -> list[str]:
    """Ids of nodes whose placed degree differs from the required one."""
    degrees = compute_degrees(nodes, edges)
    return [n.id for n in nodes if degrees[n.id] != n.required_degree]


def is_solved(nodes: Sequence[Node], edges: Sequence[Edge]) -> bool:
    """Whether the placed edges solve the puzzle.

    Refreshes every node's current_degree from the edges, fails fast on any
    degree mismatch, then checks that a BFS from the first node reaches
    every node. An empty node set is never solved.
    """
    degrees = compute_degrees(nodes, edges)
    for node in nodes:
        node.current_degree = degrees[node.id]

    if any(n.current_degree != n.required_degree for n in nodes):
        return False
    if not nodes:
        return False

    return len(reachable_from(nodes[0].id, edges)) == len(nodes)
