"""Exception types raised by the solver."""

from __future__ import annotations


class SolverError(ValueError):
    """Base class for every error raised by the solver."""


class BoardPositionError(SolverError):
    """A board position or row/column pair lies outside the board."""


class PlacementIndexError(SolverError):
    """A placement index is outside the placement space of its ship type."""


class FleetConfigurationError(SolverError):
    """The board cannot hold a ship, or a ship type is not part of the fleet."""


class MalformedMoveError(SolverError):
    """A move log entry could not be decoded."""

    def __init__(self, message: str, line: str, line_number: int | None = None) -> None:
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{message} ({line!r})")
        self.line = line
        self.line_number = line_number
