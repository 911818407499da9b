"""Puzzle generation: placement, crossing-free spanning tree, validation, caching."""

from hashi.generator.builder import (
    CandidateEdge,
    PuzzleGenerationError,
    add_extra_edges,
    build_spanning_tree,
    create_fallback_puzzle,
    derive_degrees,
    enumerate_candidates,
    generate_from_config,
    generate_puzzle,
    place_nodes,
    try_generate,
)
from hashi.generator.cache import (
    generate_or_load_puzzle,
    load_puzzle,
    puzzle_cache_key,
    puzzle_from_dict,
    puzzle_to_dict,
    save_puzzle,
)
from hashi.generator.validation import solution_adjacency, validate_puzzle

__all__ = [
    "CandidateEdge",
    "PuzzleGenerationError",
    "add_extra_edges",
    "build_spanning_tree",
    "create_fallback_puzzle",
    "derive_degrees",
    "enumerate_candidates",
    "generate_from_config",
    "generate_or_load_puzzle",
    "generate_puzzle",
    "load_puzzle",
    "place_nodes",
    "puzzle_cache_key",
    "puzzle_from_dict",
    "puzzle_to_dict",
    "save_puzzle",
    "solution_adjacency",
    "try_generate",
    "validate_puzzle",
]
