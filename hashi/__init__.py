"""Bridges (Hashiwokakero) puzzle generation, move validation, and win detection."""

__version__ = "0.1.0"
