"""Per-ship-type sets of placements still consistent with the revealed moves."""

from __future__ import annotations

from typing import Callable

from battleship_solver.errors import FleetConfigurationError

from .placements import PlacementSpace
from .ship import ShipType


class CandidateStore:
    """Holds the candidate placement indices of every fleet type.

    Sets only ever shrink: ``retain_if`` is the single mutation primitive.
    """

    def __init__(self, space: PlacementSpace) -> None:
        self.space = space
        self._candidates: dict[ShipType, list[int]] = {}
        self.initialize()

    def initialize(self) -> None:
        """Reset every fleet type to its full placement range."""
        self._candidates = {
            ship_type: list(range(self.space.num_placements(ship_type))) for ship_type in self.space.fleet
        }

    def _current(self, ship_type: ShipType) -> list[int]:
        try:
            return self._candidates[ship_type]
        except KeyError as exc:
            raise FleetConfigurationError(f"{ship_type.name} is not part of the fleet.") from exc

    def retain_if(self, ship_type: ShipType, predicate: Callable[[int], bool]) -> int:
        """Drop every candidate of ``ship_type`` failing ``predicate``; return how many were dropped."""
        current = self._current(ship_type)
        kept = [index for index in current if predicate(index)]
        self._candidates[ship_type] = kept
        return len(current) - len(kept)

    def candidates(self, ship_type: ShipType) -> tuple[int, ...]:
        return tuple(self._current(ship_type))

    def count(self, ship_type: ShipType) -> int:
        return len(self._current(ship_type))

    def snapshot(self) -> dict[ShipType, tuple[int, ...]]:
        return {ship_type: tuple(indices) for ship_type, indices in self._candidates.items()}
