"""JSON serialization and deserialization for puzzle configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from hashi.config.puzzle import Difficulty, PuzzleConfig

_DACITE_CONFIG = DaciteConfig(
    cast=[Difficulty],
    check_types=True,
    strict=True,
)


def config_to_dict(config: PuzzleConfig) -> dict[str, Any]:
    """Convert a PuzzleConfig to a plain, JSON-ready dictionary."""
    d = asdict(config)
    d["difficulty"] = config.difficulty.value
    return d


def config_from_dict(d: dict[str, Any]) -> PuzzleConfig:
    """Reconstruct a PuzzleConfig from a plain dictionary.

    Uses dacite with strict=True to reject unknown keys and cast=[Difficulty]
    to turn the tier string back into the enum.
    """
    return from_dict(data_class=PuzzleConfig, data=d, config=_DACITE_CONFIG)


def config_to_json(config: PuzzleConfig) -> str:
    """Serialize a PuzzleConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(config_to_dict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> PuzzleConfig:
    """Deserialize a JSON string to a PuzzleConfig."""
    return config_from_dict(json.loads(json_str))
