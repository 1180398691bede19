"""Solver session: owns the tables and candidate sets for one puzzle run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable

from battleship_solver.config import SolverConfig
from battleship_solver.telemetry import get_tracer, record_solver_metric

from .board import BoardGeometry
from .candidates import CandidateStore
from .overlap import OverlapTable
from .placements import PlacementSpace
from .propagator import ConstraintPropagator, Move
from .ship import ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("battleship_solver.engine.solver")


@dataclass(frozen=True)
class SolverState:
    """Immutable snapshot of a solving run."""

    board_size: int
    moves_applied: int
    candidates: dict[ShipType, tuple[int, ...]]

    @property
    def remaining(self) -> dict[ShipType, int]:
        return {ship_type: len(indices) for ship_type, indices in self.candidates.items()}


class PuzzleSolver:
    """Builds the placement space and overlap table once, then applies moves in order."""

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()
        self.board = BoardGeometry(self.config.board_size)
        self.space = PlacementSpace(self.board, self.config.fleet)
        self.overlaps = OverlapTable.build(self.space)
        self.store = CandidateStore(self.space)
        self.propagator = ConstraintPropagator(self.space, self.store)
        self.moves_applied = 0

    def apply(self, move: Move) -> None:
        self.propagator.apply_move(move)
        self.moves_applied += 1

    def apply_all(self, moves: Iterable[Move]) -> SolverState:
        """Apply every move in log order and return the resulting state."""
        with tracer.start_as_current_span("solver.apply_all") as span:
            started = time.perf_counter()
            before = self.moves_applied
            for move in moves:
                self.apply(move)
            applied = self.moves_applied - before
            duration = time.perf_counter() - started
            state = self.get_state()

            span.set_attribute("moves", applied)
            span.set_attribute("duration_ms", duration * 1000)
            record_solver_metric("battleship_solver_runs_total", 1, {"board_size": self.board.size})
            record_solver_metric(
                "battleship_solver_run_duration_seconds", duration, {"board_size": self.board.size}
            )
            logger.info(
                "solver_run_complete",
                extra={
                    "moves": applied,
                    "remaining": {ship.name: count for ship, count in state.remaining.items()},
                    "duration_ms": round(duration * 1000, 3),
                },
            )
            return state

    def candidates(self) -> dict[ShipType, tuple[int, ...]]:
        return self.store.snapshot()

    def candidate_cells(self) -> dict[ShipType, list[tuple[int, ...]]]:
        """Translate every remaining candidate back to the cells it occupies."""
        return {
            ship_type: [self.space.occupied_cells(ship_type, index) for index in indices]
            for ship_type, indices in self.store.snapshot().items()
        }

    def get_state(self) -> SolverState:
        return SolverState(
            board_size=self.board.size,
            moves_applied=self.moves_applied,
            candidates=self.store.snapshot(),
        )
