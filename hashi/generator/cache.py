"""Puzzle caching by config hash with plain JSON storage.

A cached puzzle is keyed by the tier/generator hash plus the seed, so the
same config and seed always map to the same file and regenerating it is
skipped.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from hashi.config.hashing import puzzle_config_hash
from hashi.config.puzzle import Difficulty, PuzzleConfig
from hashi.generator.builder import generate_from_config
from hashi.puzzle.types import Edge, Node, Point, Puzzle

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/puzzles")


def puzzle_cache_key(config: PuzzleConfig) -> str:
    """Compute cache key for a puzzle configuration.

    Key = puzzle_config_hash + seed. Description does not affect the key.

    Returns:
        Cache key string like "a1b2c3d4e5f6g7h8_s42".
    """
    return f"{puzzle_config_hash(config)}_s{config.seed}"


def _cache_file(config: PuzzleConfig, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    return Path(cache_dir) / f"{puzzle_cache_key(config)}.json"


def puzzle_to_dict(puzzle: Puzzle, include_solution: bool = True) -> dict[str, Any]:
    """Convert a puzzle to a JSON-ready dictionary.

    Args:
        puzzle: The puzzle to export.
        include_solution: False strips the solution edges (player-facing export).
    """
    d: dict[str, Any] = {
        "difficulty": puzzle.difficulty.value,
        "grid_size": puzzle.grid_size,
        "max_degree": puzzle.max_degree,
        "generation_seed": puzzle.generation_seed,
        "attempt": puzzle.attempt,
        "is_fallback": puzzle.is_fallback,
        "nodes": [
            {
                "id": n.id,
                "x": n.x,
                "y": n.y,
                "required_degree": n.required_degree,
            }
            for n in puzzle.nodes
        ],
    }
    if include_solution:
        d["solution_edges"] = [
            {"node_a": e.node_a, "node_b": e.node_b, "multiplicity": e.multiplicity}
            for e in puzzle.solution_edges
        ]
    return d


def puzzle_from_dict(d: dict[str, Any]) -> Puzzle:
    """Rebuild a puzzle from puzzle_to_dict output (current degrees start at 0)."""
    nodes = tuple(
        Node(
            id=n["id"],
            position=Point(int(n["x"]), int(n["y"])),
            required_degree=int(n["required_degree"]),
        )
        for n in d["nodes"]
    )
    edges = tuple(
        Edge(e["node_a"], e["node_b"], int(e["multiplicity"]))
        for e in d.get("solution_edges", [])
    )
    return Puzzle(
        nodes=nodes,
        solution_edges=edges,
        difficulty=Difficulty(d["difficulty"]),
        grid_size=int(d["grid_size"]),
        max_degree=int(d["max_degree"]),
        generation_seed=d.get("generation_seed"),
        attempt=int(d.get("attempt", 0)),
        is_fallback=bool(d.get("is_fallback", False)),
    )


def save_puzzle(
    puzzle: Puzzle,
    config: PuzzleConfig,
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Save a generated puzzle to the cache.

    Returns:
        Path of the written JSON file.
    """
    path = _cache_file(config, cache_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = puzzle_to_dict(puzzle)
    payload["config_hash"] = puzzle_config_hash(config)
    payload["seed"] = config.seed
    payload["timestamp"] = datetime.now(timezone.utc).isoformat()

    with open(path, "w") as f:
        json.dump(payload, f, indent=2)

    log.info("Puzzle cached at %s", path)
    return path


def load_puzzle(
    config: PuzzleConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> Puzzle | None:
    """Load a cached puzzle if it exists.

    Returns:
        Puzzle on cache hit, None on cache miss.
    """
    path = _cache_file(config, cache_dir)
    if not path.exists():
        return None

    with open(path) as f:
        payload = json.load(f)

    log.info("Puzzle loaded from cache: %s", path)
    return puzzle_from_dict(payload)


def generate_or_load_puzzle(
    config: PuzzleConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> Puzzle:
    """Generate a puzzle or load it from cache if available."""
    key = puzzle_cache_key(config)

    cached = load_puzzle(config, cache_dir)
    if cached is not None:
        log.info("Cache hit for %s", key)
        return cached

    log.info("Cache miss for %s, generating...", key)
    puzzle = generate_from_config(config)
    save_puzzle(puzzle, config, cache_dir)
    return puzzle
