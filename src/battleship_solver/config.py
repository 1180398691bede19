"""Solver configuration: board size and fleet composition."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battleship_solver.engine.ship import ShipType, all_types

DEFAULT_BOARD_SIZE = 10


class SolverConfig(BaseModel):
    """Startup constants for one solving run."""

    model_config = ConfigDict(frozen=True)

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=1, le=26)
    fleet: tuple[ShipType, ...] = Field(default_factory=all_types)

    @field_validator("fleet", mode="before")
    @classmethod
    def _decode_fleet(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return tuple(
                ShipType.from_code(item.strip()) if isinstance(item, str) else item for item in value
            )
        return value

    @field_validator("fleet")
    @classmethod
    def _unique_fleet(cls, value: tuple[ShipType, ...]) -> tuple[ShipType, ...]:
        if not value:
            raise ValueError("Fleet must contain at least one ship type.")
        if len(set(value)) != len(value):
            raise ValueError("Fleet lists a ship type more than once.")
        # Catalog order is the implicit index used by every table.
        return tuple(ship for ship in all_types() if ship in value)

    @model_validator(mode="after")
    def _board_fits_fleet(self) -> SolverConfig:
        largest = max(ship.size for ship in self.fleet)
        if largest > self.board_size:
            raise ValueError(
                f"Board size {self.board_size} cannot hold a ship of size {largest}."
            )
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> SolverConfig:
        """Construct config from `BATTLESHIP_SOLVER_BOARD_SIZE` and `BATTLESHIP_SOLVER_FLEET`."""
        data: Dict[str, Any] = {}
        board_size = os.getenv("BATTLESHIP_SOLVER_BOARD_SIZE")
        if board_size:
            data["board_size"] = board_size
        fleet = os.getenv("BATTLESHIP_SOLVER_FLEET")
        if fleet:
            data["fleet"] = fleet
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
