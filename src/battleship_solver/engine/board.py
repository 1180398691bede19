"""Board geometry: row-major cell numbering and A1-style labels."""

from __future__ import annotations

import operator
import string
from dataclasses import dataclass

from battleship_solver.errors import BoardPositionError

from .ship import Coordinate

ROW_LABELS = string.ascii_uppercase


@dataclass(frozen=True)
class BoardGeometry:
    """Square board whose cells are numbered row-major from 0 to ``size**2 - 1``."""

    size: int = 10

    def __post_init__(self) -> None:
        if not 1 <= self.size <= len(ROW_LABELS):
            raise ValueError(f"Board size must be between 1 and {len(ROW_LABELS)}.")

    @property
    def num_cells(self) -> int:
        return self.size * self.size

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def pos_from_parts(self, row: int, col: int) -> int:
        """Construct a board position from its row and column parts."""
        if not self.is_valid_coordinate(Coordinate(row, col)):
            raise BoardPositionError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board.")
        return row * self.size + col

    def validate_pos(self, pos: int) -> int:
        try:
            pos = operator.index(pos)
        except TypeError as exc:
            raise BoardPositionError(f"Board position must be an integer, got {pos!r}.") from exc
        if not 0 <= pos < self.num_cells:
            raise BoardPositionError(f"Position {pos} is outside the {self.size}x{self.size} board.")
        return pos

    def coordinate(self, pos: int) -> Coordinate:
        row, col = divmod(self.validate_pos(pos), self.size)
        return Coordinate(row, col)

    def label(self, pos: int) -> str:
        """Return the A1-style label of a position (row letter, 1-based column)."""
        coord = self.coordinate(pos)
        return f"{ROW_LABELS[coord.row]}{coord.col + 1}"
