"""Bridges puzzle generator: random placement, crossing-free Kruskal, retry.

Each attempt places nodes on the grid, enumerates every legal bridge,
grows a random spanning tree that never crosses itself, sprinkles in extra
bridges, and reads the required degrees off the resulting solution. Any
attempt that ends up unusable is thrown away whole and retried with fresh
randomness; after max_attempts the fixed fallback square is returned, so
generate_puzzle never fails.
"""

import logging
from dataclasses import dataclass

import numpy as np

from hashi.config.defaults import DIFFICULTY_SETTINGS
from hashi.config.puzzle import (
    Difficulty,
    DifficultyConfig,
    GeneratorConfig,
    PuzzleConfig,
)
from hashi.generator.validation import validate_puzzle
from hashi.puzzle.geometry import aligned, manhattan, node_between, segments_conflict
from hashi.puzzle.types import Edge, Node, Point, Puzzle
from hashi.puzzle.union_find import DisjointSet
from hashi.reproducibility.seed import make_rng

log = logging.getLogger(__name__)


class PuzzleGenerationError(Exception):
    """Raised when a single generation attempt has to be abandoned."""


@dataclass(frozen=True, slots=True)
class CandidateEdge:
    """A legal bridge position between two nodes, addressed by slot."""

    u: int
    v: int
    distance: int  # Manhattan length on the grid


def place_nodes(
    settings: DifficultyConfig, rng: np.random.Generator, placement_tries: int
) -> list[Node]:
    """Scatter nodes on distinct grid cells.

    Draws the node count uniformly from the tier's range, then samples
    random cells, giving up on a node after placement_tries occupied draws.

    Raises:
        PuzzleGenerationError: If fewer than min_nodes could be placed.
    """
    low, high = settings.node_count_range
    num_nodes = int(rng.integers(low, high, endpoint=True))
    nodes: list[Node] = []
    occupied: set[Point] = set()

    for i in range(num_nodes):
        for _ in range(placement_tries):
            point = Point(
                int(rng.integers(settings.grid_size)),
                int(rng.integers(settings.grid_size)),
            )
            if point not in occupied:
                occupied.add(point)
                nodes.append(Node(id=f"n_{i}", position=point))
                break

    if len(nodes) < settings.min_nodes:
        raise PuzzleGenerationError(
            f"Not enough nodes placed: {len(nodes)} < {settings.min_nodes}"
        )
    return nodes


def enumerate_candidates(
    nodes: list[Node], rng: np.random.Generator
) -> list[CandidateEdge]:
    """List every aligned, unblocked node pair in random order."""
    positions = [n.position for n in nodes]
    candidates: list[CandidateEdge] = []

    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            u, v = positions[i], positions[j]
            if not aligned(u, v):
                continue
            if node_between(u, v, positions):
                continue
            candidates.append(CandidateEdge(i, j, manhattan(u, v)))

    order = rng.permutation(len(candidates))
    return [candidates[k] for k in order]


def _conflicts_with(
    candidate: CandidateEdge, accepted: list[CandidateEdge], positions: list[Point]
) -> bool:
    """True if candidate would cross an accepted edge it shares no endpoint with."""
    a1, a2 = positions[candidate.u], positions[candidate.v]
    for other in accepted:
        if {other.u, other.v} & {candidate.u, candidate.v}:
            continue
        if segments_conflict(a1, a2, positions[other.u], positions[other.v]):
            return True
    return False


def _multiplicity(rng: np.random.Generator, double_probability: float) -> int:
    return 2 if rng.random() < double_probability else 1


def build_spanning_tree(
    nodes: list[Node],
    candidates: list[CandidateEdge],
    rng: np.random.Generator,
    double_probability: float,
) -> tuple[list[CandidateEdge], list[int]]:
    """Randomized Kruskal over the shuffled candidates, avoiding crossings.

    Returns:
        (tree edges, their multiplicities) in acceptance order.

    Raises:
        PuzzleGenerationError: If the tree does not reach every node.
    """
    positions = [n.position for n in nodes]
    ds = DisjointSet(len(nodes))
    tree: list[CandidateEdge] = []
    counts: list[int] = []

    for cand in candidates:
        if ds.connected(cand.u, cand.v):
            continue
        if _conflicts_with(cand, tree, positions):
            continue
        ds.union(cand.u, cand.v)
        tree.append(cand)
        counts.append(_multiplicity(rng, double_probability))

    if ds.count != 1:
        raise PuzzleGenerationError(
            f"Graph not connected: {ds.count} components after spanning tree"
        )
    return tree, counts


def add_extra_edges(
    nodes: list[Node],
    candidates: list[CandidateEdge],
    accepted: list[CandidateEdge],
    counts: list[int],
    rng: np.random.Generator,
    ratio: float,
    double_probability: float,
) -> int:
    """Append non-crossing extra edges to accepted/counts in place.

    Target is floor(ratio * len(accepted)) measured on the spanning tree.

    Returns:
        Number of extra edges added.
    """
    positions = [n.position for n in nodes]
    target = int(len(accepted) * ratio)
    taken = {(c.u, c.v) for c in accepted}
    added = 0

    for cand in candidates:
        if added >= target:
            break
        if (cand.u, cand.v) in taken:
            continue
        if _conflicts_with(cand, accepted, positions):
            continue
        accepted.append(cand)
        counts.append(_multiplicity(rng, double_probability))
        taken.add((cand.u, cand.v))
        added += 1

    return added


def derive_degrees(
    nodes: list[Node],
    accepted: list[CandidateEdge],
    counts: list[int],
    max_degree: int,
) -> list[Edge]:
    """Set required degrees from the accepted edges, dropping overflows.

    Walks edges in acceptance order; an edge that would push either
    endpoint above max_degree is dropped without repair.

    Returns:
        The solution edges that survived, in acceptance order.
    """
    for node in nodes:
        node.required_degree = 0
        node.current_degree = 0

    solution: list[Edge] = []
    for cand, count in zip(accepted, counts):
        nu, nv = nodes[cand.u], nodes[cand.v]
        if (
            nu.required_degree + count > max_degree
            or nv.required_degree + count > max_degree
        ):
            log.debug(
                "Dropping edge %s-%s (x%d): degree cap %d",
                nu.id, nv.id, count, max_degree,
            )
            continue
        nu.required_degree += count
        nv.required_degree += count
        solution.append(Edge(nu.id, nv.id, count))

    return solution


def try_generate(
    settings: DifficultyConfig,
    rng: np.random.Generator,
    generator_config: GeneratorConfig | None = None,
) -> tuple[list[Node], list[Edge]]:
    """Run one generation attempt.

    Returns:
        (nodes with required degrees, solution edges).

    Raises:
        PuzzleGenerationError: On placement exhaustion, a disconnected
            spanning tree, an isolated node after degree pruning, or any
            failed structural check.
    """
    gcfg = generator_config or GeneratorConfig()

    nodes = place_nodes(settings, rng, gcfg.placement_tries)
    candidates = enumerate_candidates(nodes, rng)
    accepted, counts = build_spanning_tree(
        nodes, candidates, rng, gcfg.tree_double_probability
    )
    n_tree = len(accepted)
    n_extra = add_extra_edges(
        nodes,
        candidates,
        accepted,
        counts,
        rng,
        gcfg.extra_edge_ratio,
        gcfg.extra_double_probability,
    )
    solution = derive_degrees(nodes, accepted, counts, settings.max_degree)

    isolated = [n.id for n in nodes if n.required_degree == 0]
    if isolated:
        raise PuzzleGenerationError(f"Isolated node(s): {', '.join(isolated)}")

    errors = validate_puzzle(nodes, solution, settings.grid_size, settings.max_degree)
    if errors:
        raise PuzzleGenerationError("; ".join(errors))

    log.debug(
        "Attempt built %d nodes, %d tree + %d extra edges, %d kept",
        len(nodes), n_tree, n_extra, len(solution),
    )
    return nodes, solution


def create_fallback_puzzle(difficulty: Difficulty | str = Difficulty.EASY) -> Puzzle:
    """The fixed 4-node square loop, every node requiring two connections."""
    difficulty = Difficulty(difficulty)
    settings = DIFFICULTY_SETTINGS[difficulty]
    nodes = (
        Node("n_0", Point(1, 1), required_degree=2),
        Node("n_1", Point(3, 1), required_degree=2),
        Node("n_2", Point(1, 3), required_degree=2),
        Node("n_3", Point(3, 3), required_degree=2),
    )
    edges = (
        Edge("n_0", "n_1", 1),
        Edge("n_1", "n_3", 1),
        Edge("n_3", "n_2", 1),
        Edge("n_2", "n_0", 1),
    )
    return Puzzle(
        nodes=nodes,
        solution_edges=edges,
        difficulty=difficulty,
        grid_size=settings.grid_size,
        max_degree=settings.max_degree,
        is_fallback=True,
    )


def generate_puzzle(
    difficulty: Difficulty | str = Difficulty.EASY,
    rng: np.random.Generator | None = None,
    generator_config: GeneratorConfig | None = None,
    seed: int | None = None,
) -> Puzzle:
    """Generate a solvable Bridges puzzle for a difficulty tier.

    Never raises for generation trouble: failed attempts are retried with
    the same RNG stream (so each attempt sees fresh randomness) and the
    fallback square is returned once max_attempts is spent.

    Args:
        difficulty: Tier selecting grid size, node count range and degree cap.
        rng: numpy random Generator; built from seed when omitted.
        generator_config: Retry budget and edge probabilities.
        seed: Seed for a fresh RNG when rng is omitted (recorded on the puzzle).

    Returns:
        Puzzle whose nodes carry required degrees and zero current degrees.
    """
    difficulty = Difficulty(difficulty)
    settings = DIFFICULTY_SETTINGS[difficulty]
    gcfg = generator_config or GeneratorConfig()
    if rng is None:
        rng = make_rng(seed)

    for attempt in range(gcfg.max_attempts):
        try:
            nodes, solution = try_generate(settings, rng, gcfg)
        except PuzzleGenerationError as exc:
            log.debug("Puzzle generation attempt %d failed: %s", attempt, exc)
            continue

        log.info(
            "Puzzle generated on attempt %d (%s, grid=%d, nodes=%d, edges=%d)",
            attempt,
            difficulty.value,
            settings.grid_size,
            len(nodes),
            len(solution),
        )
        return Puzzle(
            nodes=tuple(nodes),
            solution_edges=tuple(solution),
            difficulty=difficulty,
            grid_size=settings.grid_size,
            max_degree=settings.max_degree,
            generation_seed=seed,
            attempt=attempt,
        )

    log.warning(
        "Puzzle generation failed after %d attempts; using fallback square",
        gcfg.max_attempts,
    )
    return create_fallback_puzzle(difficulty)


def generate_from_config(config: PuzzleConfig) -> Puzzle:
    """Generate the puzzle described by a full config, seeded by config.seed."""
    return generate_puzzle(
        config.difficulty,
        rng=make_rng(config.seed),
        generator_config=config.generator,
        seed=config.seed,
    )
