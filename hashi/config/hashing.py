"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

from hashi.config.puzzle import PuzzleConfig


def _to_plain(value: Any) -> Any:
    """Replace enum members with their values so json.dumps accepts them."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_to_plain(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config), or a plain dict.
        exclude_fields: Optional list of top-level keys to exclude.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config) if is_dataclass(config) else dict(config)
    d = _to_plain(d)
    for name in exclude_fields or ():
        d.pop(name, None)
    serialized = json.dumps(
        d,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def puzzle_config_hash(config: PuzzleConfig) -> str:
    """Hash for puzzle caching: tier settings plus generator knobs.

    Seed and description are excluded: two configs differing only in seed
    share the same hash, and the seed is appended to the cache key instead.
    """
    return config_hash(
        {
            "difficulty": config.difficulty,
            "settings": asdict(config.settings),
            "generator": asdict(config.generator),
        }
    )


def full_config_hash(config: PuzzleConfig) -> str:
    """Hash for full puzzle identity, including the seed."""
    return config_hash(config)
