"""Structural validation of a generated puzzle and its solution witness.

Checks run cheapest first and accumulate human-readable error strings; an
empty list means the puzzle is well formed and its solution edges satisfy
every rule of the game.
"""

import logging
from collections import Counter
from typing import Sequence

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from hashi.puzzle.geometry import aligned, node_between, segments_conflict
from hashi.puzzle.types import Edge, Node

log = logging.getLogger(__name__)


def solution_adjacency(
    nodes: Sequence[Node], edges: Sequence[Edge]
) -> scipy.sparse.csr_matrix:
    """Symmetric sparse adjacency of the solution, weighted by multiplicity."""
    slots = {n.id: i for i, n in enumerate(nodes)}
    n = len(nodes)
    rows = [slots[e.node_a] for e in edges] + [slots[e.node_b] for e in edges]
    cols = [slots[e.node_b] for e in edges] + [slots[e.node_a] for e in edges]
    data = [float(e.multiplicity) for e in edges] * 2
    return scipy.sparse.csr_matrix(
        (np.array(data, dtype=np.float64), (rows, cols)), shape=(n, n)
    )


def validate_puzzle(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    grid_size: int,
    max_degree: int,
) -> list[str]:
    """Validate nodes and solution edges against the rules of Bridges.

    Checks (cheapest first):
    1. Node ids and grid cells are unique; every node lies on the grid
    2. Solution edges reference known nodes, at most one entry per pair
    3. Every edge is orthogonal and not blocked by another node
    4. Required degrees lie in [1, max_degree] and equal the solution's
       incident multiplicities
    5. No two solution edges cross or overlap
    6. The solution connects every node

    Args:
        nodes: Puzzle nodes with required degrees set.
        edges: Solution edges used to derive the degrees.
        grid_size: Board side length.
        max_degree: Degree cap for the tier.

    Returns:
        List of error strings (empty = valid puzzle).
    """
    errors: list[str] = []

    if not nodes:
        return ["Puzzle has no nodes"]

    # 1. Unique ids, unique cells, on-grid positions
    id_counts = Counter(n.id for n in nodes)
    dup_ids = sorted(i for i, c in id_counts.items() if c > 1)
    if dup_ids:
        errors.append(f"Duplicate node ids: {', '.join(dup_ids)}")

    cell_counts = Counter(n.position for n in nodes)
    dup_cells = [p for p, c in cell_counts.items() if c > 1]
    if dup_cells:
        errors.append(
            "Overlapping nodes at "
            + ", ".join(f"({p.x},{p.y})" for p in dup_cells)
        )

    for node in nodes:
        if not (0 <= node.x < grid_size and 0 <= node.y < grid_size):
            errors.append(
                f"Node {node.id} at ({node.x},{node.y}) outside "
                f"{grid_size}x{grid_size} grid"
            )

    if errors:
        return errors

    # 2. Edge references
    by_id = {n.id: n for n in nodes}
    unknown = [e for e in edges if e.node_a not in by_id or e.node_b not in by_id]
    if unknown:
        errors.append(
            f"{len(unknown)} solution edge(s) reference unknown nodes"
        )
        return errors

    pair_counts = Counter(e.key for e in edges)
    for pair, count in pair_counts.items():
        if count > 1:
            errors.append(f"Pair {pair[0]}-{pair[1]} listed {count} times")

    # 3. Geometry of each edge
    positions = [n.position for n in nodes]
    for e in edges:
        p, q = by_id[e.node_a].position, by_id[e.node_b].position
        if not aligned(p, q):
            errors.append(f"Edge {e.node_a}-{e.node_b} is not orthogonal")
        elif node_between(p, q, positions):
            errors.append(f"Edge {e.node_a}-{e.node_b} passes over a node")

    # 4. Degrees
    incident: Counter[str] = Counter()
    for e in edges:
        incident[e.node_a] += e.multiplicity
        incident[e.node_b] += e.multiplicity
    for node in nodes:
        if not 1 <= node.required_degree <= max_degree:
            errors.append(
                f"Node {node.id} required degree {node.required_degree} "
                f"outside [1, {max_degree}]"
            )
        if incident[node.id] != node.required_degree:
            errors.append(
                f"Node {node.id} required degree {node.required_degree} "
                f"!= solution degree {incident[node.id]}"
            )

    # 5. Planarity
    for i in range(len(edges)):
        a = edges[i]
        for j in range(i + 1, len(edges)):
            b = edges[j]
            if b.touches(a.node_a, a.node_b):
                continue
            if segments_conflict(
                by_id[a.node_a].position,
                by_id[a.node_b].position,
                by_id[b.node_a].position,
                by_id[b.node_b].position,
            ):
                errors.append(
                    f"Edges {a.node_a}-{a.node_b} and "
                    f"{b.node_a}-{b.node_b} cross"
                )

    # 6. Connectivity
    if edges or len(nodes) > 1:
        n_components, _ = connected_components(
            solution_adjacency(nodes, edges), directed=False
        )
        if n_components != 1:
            errors.append(
                f"Solution not connected: {n_components} components found"
            )

    if errors:
        log.debug("Puzzle validation found %d error(s)", len(errors))
    return errors
