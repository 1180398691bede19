"""Applies revealed hits and misses to the candidate placement sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from battleship_solver.errors import BoardPositionError, FleetConfigurationError
from battleship_solver.telemetry import get_meter, get_tracer

from .candidates import CandidateStore
from .placements import PlacementSpace
from .ship import ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("battleship_solver.engine.propagator")
meter = get_meter("battleship_solver.engine.propagator")

MOVE_COUNTER = meter.create_counter(
    "battleship_solver_moves_applied",
    unit="1",
    description="Revealed moves applied to the candidate sets",
)

ELIMINATION_COUNTER = meter.create_counter(
    "battleship_solver_placements_eliminated",
    unit="1",
    description="Candidate placements removed by move propagation",
)


@dataclass(frozen=True)
class Move:
    """A revealed cell: a hit on a known ship type, or a miss when ``ship_type`` is None."""

    pos: int
    ship_type: ShipType | None = None

    @property
    def is_hit(self) -> bool:
        return self.ship_type is not None


class ConstraintPropagator:
    """Prunes a CandidateStore one move at a time by direct cell containment."""

    def __init__(self, space: PlacementSpace, store: CandidateStore) -> None:
        self.space = space
        self.store = store

    def apply_move(self, move: Move) -> None:
        """Apply one revealed move; moves must be fed in log order."""
        with tracer.start_as_current_span("propagator.apply_move") as span:
            span.set_attribute("move.pos", move.pos)
            span.set_attribute("move.outcome", "hit" if move.is_hit else "miss")
            try:
                self.space.board.validate_pos(move.pos)
                if move.ship_type is not None and move.ship_type not in self.space.fleet:
                    raise FleetConfigurationError(f"{move.ship_type.name} is not part of the fleet.")
            except (BoardPositionError, FleetConfigurationError) as exc:
                span.record_exception(exc)
                span.set_attribute("error", True)
                logger.error("move_rejected", extra={"pos": move.pos, "reason": str(exc)})
                raise

            if move.ship_type is None:
                removed = {
                    ship_type: self._retain(ship_type, move.pos, covering=False)
                    for ship_type in self.space.fleet
                }
            else:
                removed = {move.ship_type: self._retain(move.ship_type, move.pos, covering=True)}

            total_removed = sum(removed.values())
            outcome = "hit" if move.is_hit else "miss"
            span.set_attribute("placements.removed", total_removed)
            MOVE_COUNTER.add(1, attributes={"outcome": outcome})
            ELIMINATION_COUNTER.add(total_removed, attributes={"outcome": outcome})
            logger.debug(
                "move_applied",
                extra={
                    "pos": move.pos,
                    "outcome": outcome,
                    "ship_type": move.ship_type.name if move.ship_type else None,
                    "removed": {ship.name: count for ship, count in removed.items()},
                },
            )
            for ship_type in removed:
                if self.store.count(ship_type) == 0:
                    logger.warning(
                        "candidates_exhausted",
                        extra={"ship_type": ship_type.name, "pos": move.pos},
                    )

    def _retain(self, ship_type: ShipType, pos: int, covering: bool) -> int:
        """Keep the placements of ``ship_type`` whose coverage of ``pos`` equals ``covering``."""
        occupancy = self.space.occupancy(ship_type)
        return self.store.retain_if(ship_type, lambda index: bool(occupancy[index, pos]) is covering)
