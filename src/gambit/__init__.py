"""Gambit: a chess rules engine with thin adapters for engines and openings."""

__version__ = "0.1.0"
