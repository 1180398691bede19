"""Placement enumeration: the bijection between placement indices and board cells.

Each ship type owns the index range ``[0, num_placements(type))``. The lower
half of that range enumerates horizontal placements (anchor row major, then
anchor column), the upper half vertical placements (anchor row, then
column). Callers rely on this split, so ``index < num_placements // 2``
always means horizontal.
"""

from __future__ import annotations

import logging
import operator
from typing import Iterable

import numpy as np
import numpy.typing as npt

from battleship_solver.errors import FleetConfigurationError, PlacementIndexError

from .board import BoardGeometry
from .ship import Coordinate, Orientation, ShipType, all_types

logger = logging.getLogger(__name__)

OccupancyMatrix = npt.NDArray[np.bool_]


class PlacementSpace:
    """Placement index space for every ship type of a fleet on one board."""

    def __init__(self, board: BoardGeometry, fleet: Iterable[ShipType] | None = None) -> None:
        self.board = board
        self.fleet: tuple[ShipType, ...] = tuple(fleet) if fleet is not None else all_types()
        self._occupancy: dict[ShipType, OccupancyMatrix] = {}
        for ship_type in self.fleet:
            # Fail at construction rather than on first use.
            self.reduced_count(ship_type)

    def reduced_count(self, ship_type: ShipType) -> int:
        """Number of anchor offsets along the ship's axis: ``size - length + 1``."""
        count = self.board.size - ship_type.size + 1
        if count < 1:
            raise FleetConfigurationError(
                f"{ship_type.name} (size {ship_type.size}) does not fit a "
                f"{self.board.size}x{self.board.size} board."
            )
        return count

    def num_placements(self, ship_type: ShipType) -> int:
        return 2 * self.reduced_count(ship_type) * self.board.size

    def check_index(self, ship_type: ShipType, index: int) -> int:
        try:
            index = operator.index(index)
        except TypeError as exc:
            raise PlacementIndexError(f"Placement index must be an integer, got {index!r}.") from exc
        total = self.num_placements(ship_type)
        if not 0 <= index < total:
            raise PlacementIndexError(
                f"Placement {index} is out of range for {ship_type.name} (0..{total - 1})."
            )
        return index

    def orientation(self, ship_type: ShipType, index: int) -> Orientation:
        index = self.check_index(ship_type, index)
        if index < self.num_placements(ship_type) // 2:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def anchor(self, ship_type: ShipType, index: int) -> Coordinate:
        """Return the top-left cell of a placement."""
        half = self.num_placements(ship_type) // 2
        if self.orientation(ship_type, index) is Orientation.HORIZONTAL:
            row, col = divmod(index, self.reduced_count(ship_type))
        else:
            row, col = divmod(index - half, self.board.size)
        return Coordinate(row, col)

    def occupied_cells(self, ship_type: ShipType, index: int) -> tuple[int, ...]:
        """Compute the cells covered by a placement, in order from its anchor."""
        anchor = self.anchor(ship_type, index)
        start = self.board.pos_from_parts(anchor.row, anchor.col)
        if self.orientation(ship_type, index) is Orientation.HORIZONTAL:
            step = 1
        else:
            step = self.board.size
        return tuple(start + step * offset for offset in range(ship_type.size))

    def index_of(self, ship_type: ShipType, orientation: Orientation, row: int, col: int) -> int:
        """Return the placement index anchored at ``(row, col)`` with ``orientation``."""
        reduced = self.reduced_count(ship_type)
        size = self.board.size
        if orientation is Orientation.HORIZONTAL:
            if not (0 <= row < size and 0 <= col < reduced):
                raise PlacementIndexError(
                    f"No horizontal {ship_type.name} placement anchored at ({row}, {col})."
                )
            return row * reduced + col
        if not (0 <= row < reduced and 0 <= col < size):
            raise PlacementIndexError(
                f"No vertical {ship_type.name} placement anchored at ({row}, {col})."
            )
        return self.num_placements(ship_type) // 2 + row * size + col

    def occupancy(self, ship_type: ShipType) -> OccupancyMatrix:
        """Boolean matrix ``(num_placements, num_cells)``; row ``i`` marks placement ``i``."""
        matrix = self._occupancy.get(ship_type)
        if matrix is None:
            matrix = np.zeros((self.num_placements(ship_type), self.board.num_cells), dtype=np.bool_)
            for index in range(matrix.shape[0]):
                matrix[index, list(self.occupied_cells(ship_type, index))] = True
            matrix.flags.writeable = False
            self._occupancy[ship_type] = matrix
            logger.debug(
                "occupancy_built",
                extra={"ship_type": ship_type.name, "placements": matrix.shape[0]},
            )
        return matrix

    def covers(self, ship_type: ShipType, index: int, pos: int) -> bool:
        """Return True if placement ``index`` of ``ship_type`` occupies ``pos``."""
        index = self.check_index(ship_type, index)
        return bool(self.occupancy(ship_type)[index, self.board.validate_pos(pos)])

    def has_overlap(self, ship1: ShipType, pos1: int, ship2: ShipType, pos2: int) -> bool:
        """Check directly whether two placements share a cell."""
        cells1 = self.occupied_cells(ship1, pos1)
        cells2 = self.occupied_cells(ship2, pos2)
        return any(cell in cells2 for cell in cells1)
