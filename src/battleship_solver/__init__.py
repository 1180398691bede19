"""Constraint propagation engine for Battleship solitaire deduction."""

__version__ = "0.1.0"
