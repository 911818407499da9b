"""Centralized seed management for reproducible puzzle generation.

The generator never touches global RNG state: callers inject a numpy
Generator, usually built by make_rng. set_seed additionally seeds the
global sources for code that still relies on them.
"""

import random

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Build the numpy Generator injected into the puzzle generator.

    Args:
        seed: Master seed; None draws fresh OS entropy.
    """
    return np.random.default_rng(seed)


def set_seed(seed: int) -> None:
    """Seed Python's random module and NumPy's legacy global RNG."""
    random.seed(seed)
    np.random.seed(seed)


def verify_seed_determinism(seed: int) -> bool:
    """Verify that seeding produces identical sequences.

    Draws 10 values from each of random, numpy's global RNG and a Generator
    from make_rng, re-seeds, draws again, and compares.

    Args:
        seed: Seed value to test.

    Returns:
        True if every source repeats its sequence after re-seeding.
    """
    set_seed(seed)
    r1 = [random.random() for _ in range(10)]
    n1 = np.random.rand(10).tolist()
    g1 = make_rng(seed).random(10).tolist()

    set_seed(seed)
    r2 = [random.random() for _ in range(10)]
    n2 = np.random.rand(10).tolist()
    g2 = make_rng(seed).random(10).tolist()

    return r1 == r2 and n1 == n2 and g1 == g2
