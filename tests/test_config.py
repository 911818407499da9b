"""Tests for the puzzle configuration system."""

from dataclasses import FrozenInstanceError, replace

import pytest
from dacite import UnexpectedDataError

from hashi.config import (
    DEFAULT_CONFIG,
    DIFFICULTY_SETTINGS,
    Difficulty,
    DifficultyConfig,
    GeneratorConfig,
    PuzzleConfig,
    config_from_dict,
    config_from_json,
    config_hash,
    config_to_dict,
    config_to_json,
    full_config_hash,
    puzzle_config_hash,
)


class TestDifficultyTable:
    """DIFFICULTY_SETTINGS holds the three locked tiers."""

    def test_easy(self):
        s = DIFFICULTY_SETTINGS[Difficulty.EASY]
        assert (s.grid_size, s.node_count_range, s.max_degree) == (5, (6, 9), 4)

    def test_medium(self):
        s = DIFFICULTY_SETTINGS[Difficulty.MEDIUM]
        assert (s.grid_size, s.node_count_range, s.max_degree) == (7, (8, 12), 6)

    def test_hard(self):
        s = DIFFICULTY_SETTINGS[Difficulty.HARD]
        assert (s.grid_size, s.node_count_range, s.max_degree) == (10, (12, 18), 8)

    def test_generator_defaults(self):
        g = GeneratorConfig()
        assert g.max_attempts == 100
        assert g.placement_tries == 50
        assert g.tree_double_probability == 0.3
        assert g.extra_edge_ratio == 0.3
        assert g.extra_double_probability == 0.4

    def test_settings_property(self):
        assert PuzzleConfig(difficulty=Difficulty.HARD).settings.grid_size == 10


class TestValidation:
    """__post_init__ rejects inconsistent tiers and knobs."""

    def test_inverted_node_range(self):
        with pytest.raises(ValueError, match="max_nodes"):
            DifficultyConfig(grid_size=5, min_nodes=6, max_nodes=4, max_degree=4)

    def test_too_many_nodes_for_grid(self):
        with pytest.raises(ValueError, match="capacity"):
            DifficultyConfig(grid_size=3, min_nodes=2, max_nodes=10, max_degree=4)

    def test_bad_probability(self):
        with pytest.raises(ValueError, match="tree_double_probability"):
            GeneratorConfig(tree_double_probability=1.5)

    def test_zero_attempts(self):
        with pytest.raises(ValueError):
            GeneratorConfig(max_attempts=0)


class TestImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.seed = 99  # type: ignore[misc]

    def test_generator_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.generator.max_attempts = 1  # type: ignore[misc]


class TestSerialization:
    """JSON round trip through dacite."""

    def test_round_trip(self):
        cfg = PuzzleConfig(
            difficulty=Difficulty.MEDIUM,
            seed=7,
            generator=GeneratorConfig(max_attempts=20),
            description="medium run",
        )
        restored = config_from_json(config_to_json(cfg))
        assert restored == cfg
        assert restored.difficulty is Difficulty.MEDIUM

    def test_difficulty_serialized_as_string(self):
        assert config_to_dict(DEFAULT_CONFIG)["difficulty"] == "easy"

    def test_strict_rejects_unknown_keys(self):
        d = config_to_dict(DEFAULT_CONFIG)
        d["grid"] = 12
        with pytest.raises(UnexpectedDataError):
            config_from_dict(d)

    def test_missing_fields_use_defaults(self):
        cfg = config_from_dict({"difficulty": "hard"})
        assert cfg.seed == 42
        assert cfg.generator == GeneratorConfig()


class TestHashing:
    """Config hashes are stable and ignore the right fields."""

    def test_hash_is_deterministic(self):
        assert config_hash(DEFAULT_CONFIG) == config_hash(PuzzleConfig())
        assert len(config_hash(DEFAULT_CONFIG)) == 16

    def test_puzzle_hash_ignores_seed_and_description(self):
        other = replace(DEFAULT_CONFIG, seed=99, description="x")
        assert puzzle_config_hash(DEFAULT_CONFIG) == puzzle_config_hash(other)

    def test_full_hash_includes_seed(self):
        other = replace(DEFAULT_CONFIG, seed=99)
        assert full_config_hash(DEFAULT_CONFIG) != full_config_hash(other)

    def test_puzzle_hash_tracks_tier(self):
        other = replace(DEFAULT_CONFIG, difficulty=Difficulty.HARD)
        assert puzzle_config_hash(DEFAULT_CONFIG) != puzzle_config_hash(other)

    def test_exclude_fields(self):
        a = config_hash(DEFAULT_CONFIG, exclude_fields=["seed"])
        b = config_hash(replace(DEFAULT_CONFIG, seed=5), exclude_fields=["seed"])
        assert a == b
