"""Ship catalog for the Battleship solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ShipType(Enum):
    """All supported ship classes, keyed by their move log code."""

    PATROL = "P"
    DESTROYER = "D"
    SUBMARINE = "S"
    BATTLESHIP = "B"
    CARRIER = "C"

    @property
    def code(self) -> str:
        """Return the single-letter code used in move logs."""
        return self.value

    @property
    def size(self) -> int:
        """Return the number of contiguous cells the ship occupies."""
        return SHIP_SIZES[self]

    @classmethod
    def from_code(cls, code: str) -> ShipType:
        """Decode a ship type from its move log letter."""
        try:
            return cls(code.upper())
        except ValueError as exc:
            raise ValueError(f"Unknown ship type code {code!r}.") from exc


SHIP_SIZES: dict[ShipType, int] = {
    ShipType.PATROL: 2,
    ShipType.DESTROYER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.BATTLESHIP: 4,
    ShipType.CARRIER: 5,
}


def all_types() -> tuple[ShipType, ...]:
    """Return every ship type in catalog order."""
    return tuple(ShipType)
