"""Puzzle configuration dataclasses, frozen and slotted."""

from dataclasses import dataclass, field
from enum import Enum


class Difficulty(str, Enum):
    """Difficulty tier selecting grid size, node count range, and degree cap."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class DifficultyConfig:
    """Board parameters for one difficulty tier.

    Cross-field validation runs in __post_init__ so an inconsistent tier
    is rejected before any generation attempt is made.
    """

    grid_size: int  # board is grid_size x grid_size
    min_nodes: int
    max_nodes: int
    max_degree: int  # cap on required connections per node
    scale: float = 1.0  # display scale hint for the rendering layer

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be >= 2, got {self.grid_size}")
        if self.min_nodes < 2:
            raise ValueError(f"min_nodes must be >= 2, got {self.min_nodes}")
        if self.max_nodes < self.min_nodes:
            raise ValueError(
                f"max_nodes ({self.max_nodes}) must be "
                f">= min_nodes ({self.min_nodes})"
            )
        if self.max_nodes > self.grid_size * self.grid_size:
            raise ValueError(
                f"max_nodes ({self.max_nodes}) exceeds the "
                f"{self.grid_size}x{self.grid_size} grid capacity"
            )
        if self.max_degree < 1:
            raise ValueError(f"max_degree must be >= 1, got {self.max_degree}")

    @property
    def node_count_range(self) -> tuple[int, int]:
        return (self.min_nodes, self.max_nodes)


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Knobs for the generate-and-test loop."""

    max_attempts: int = 100  # attempts before falling back to the fixed puzzle
    placement_tries: int = 50  # random cell draws per node
    tree_double_probability: float = 0.3  # P(multiplicity 2) for tree edges
    extra_edge_ratio: float = 0.3  # extra edges as a fraction of tree edges
    extra_double_probability: float = 0.4  # P(multiplicity 2) for extra edges

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )
        if self.placement_tries < 1:
            raise ValueError(
                f"placement_tries must be >= 1, got {self.placement_tries}"
            )
        for name in (
            "tree_double_probability",
            "extra_edge_ratio",
            "extra_double_probability",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True, slots=True)
class PuzzleConfig:
    """Top-level configuration for producing one puzzle."""

    difficulty: Difficulty = Difficulty.EASY
    seed: int = 42
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    description: str = ""

    @property
    def settings(self) -> DifficultyConfig:
        from hashi.config.defaults import DIFFICULTY_SETTINGS

        return DIFFICULTY_SETTINGS[self.difficulty]
