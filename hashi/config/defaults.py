"""Difficulty tier table: single source of truth for board parameters."""

from hashi.config.puzzle import Difficulty, DifficultyConfig, PuzzleConfig

DIFFICULTY_SETTINGS: dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        grid_size=5, min_nodes=6, max_nodes=9, max_degree=4, scale=1.0
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        grid_size=7, min_nodes=8, max_nodes=12, max_degree=6, scale=0.85
    ),
    Difficulty.HARD: DifficultyConfig(
        grid_size=10, min_nodes=12, max_nodes=18, max_degree=8, scale=0.7
    ),
}

# All-default puzzle config: easy tier, seed=42.
DEFAULT_CONFIG = PuzzleConfig()
