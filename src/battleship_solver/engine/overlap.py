"""Cached pairwise overlap between placements of every ordered pair of ship types."""

from __future__ import annotations

import logging
import time
from itertools import product

import numpy as np
import numpy.typing as npt

from battleship_solver.errors import FleetConfigurationError
from battleship_solver.telemetry import get_meter, get_tracer

from .placements import PlacementSpace
from .ship import ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("battleship_solver.engine.overlap")
meter = get_meter("battleship_solver.engine.overlap")

TABLE_BUILD_COUNTER = meter.create_counter(
    "battleship_solver_overlap_tables_built",
    unit="1",
    description="Number of overlap tables built",
)

OverlapMatrix = npt.NDArray[np.bool_]


class OverlapTable:
    """Read-only lookup ``(type1, p1, type2, p2) -> shares a cell``.

    One flat boolean matrix is kept per ordered pair of fleet types, shaped
    ``(num_placements(type1), num_placements(type2))``.
    """

    def __init__(self, space: PlacementSpace, matrices: dict[tuple[ShipType, ShipType], OverlapMatrix]) -> None:
        self.space = space
        self._matrices = matrices

    @classmethod
    def build(cls, space: PlacementSpace) -> OverlapTable:
        """Compute the matrix for every ordered type pair of ``space.fleet``."""
        with tracer.start_as_current_span("overlap_table.build") as span:
            span.set_attribute("board.size", space.board.size)
            span.set_attribute("fleet.size", len(space.fleet))
            started = time.perf_counter()
            # Integer counts of shared cells; a product over booleans would saturate.
            occupancy = {ship: space.occupancy(ship).astype(np.int32) for ship in space.fleet}
            matrices: dict[tuple[ShipType, ShipType], OverlapMatrix] = {}
            for first, second in product(space.fleet, repeat=2):
                matrix = (occupancy[first] @ occupancy[second].T) > 0
                matrix.flags.writeable = False
                matrices[(first, second)] = matrix
            elapsed_ms = (time.perf_counter() - started) * 1000
            entries = sum(matrix.size for matrix in matrices.values())
            span.set_attribute("table.entries", entries)
            TABLE_BUILD_COUNTER.add(1, attributes={"board_size": space.board.size})
            logger.info(
                "overlap_table_built",
                extra={"pairs": len(matrices), "entries": entries, "elapsed_ms": round(elapsed_ms, 3)},
            )
            return cls(space, matrices)

    def matrix(self, first: ShipType, second: ShipType) -> OverlapMatrix:
        try:
            return self._matrices[(first, second)]
        except KeyError as exc:
            raise FleetConfigurationError(
                f"No overlap table for {first.name}/{second.name}; not part of the fleet."
            ) from exc

    def overlaps(self, ship1: ShipType, pos1: int, ship2: ShipType, pos2: int) -> bool:
        """Return True if the two placements occupy a common cell."""
        matrix = self.matrix(ship1, ship2)
        pos1 = self.space.check_index(ship1, pos1)
        pos2 = self.space.check_index(ship2, pos2)
        return bool(matrix[pos1, pos2])

    def conflicts(self, ship1: ShipType, pos1: int, ship2: ShipType) -> list[int]:
        """Return the ``ship2`` placements that share a cell with placement ``pos1`` of ``ship1``."""
        matrix = self.matrix(ship1, ship2)
        pos1 = self.space.check_index(ship1, pos1)
        return [int(index) for index in np.flatnonzero(matrix[pos1])]
