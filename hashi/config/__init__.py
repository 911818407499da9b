"""Puzzle configuration system with frozen, hashable, serializable dataclasses."""

from hashi.config.defaults import DEFAULT_CONFIG, DIFFICULTY_SETTINGS
from hashi.config.hashing import config_hash, full_config_hash, puzzle_config_hash
from hashi.config.puzzle import (
    Difficulty,
    DifficultyConfig,
    GeneratorConfig,
    PuzzleConfig,
)
from hashi.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DIFFICULTY_SETTINGS",
    "Difficulty",
    "DifficultyConfig",
    "GeneratorConfig",
    "PuzzleConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "full_config_hash",
    "puzzle_config_hash",
]
