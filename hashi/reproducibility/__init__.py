"""Reproducibility infrastructure: seeded random sources."""

from hashi.reproducibility.seed import make_rng, set_seed, verify_seed_determinism

__all__ = [
    "make_rng",
    "set_seed",
    "verify_seed_determinism",
]
