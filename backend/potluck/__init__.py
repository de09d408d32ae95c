"""Potluck: recipe sharing for small groups."""

__version__ = "1.0.0"
