"""Move log decoding.

Each line holds one revealed cell: a row letter, a 1-based column number and
an optional ship code, e.g. ``A1`` (miss), ``B7P`` (hit on the patrol boat)
or ``J10C`` (hit on the carrier).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from battleship_solver.engine.board import ROW_LABELS, BoardGeometry
from battleship_solver.engine.propagator import Move
from battleship_solver.engine.ship import ShipType
from battleship_solver.errors import BoardPositionError, MalformedMoveError

logger = logging.getLogger(__name__)

MOVE_PATTERN = re.compile(r"^(?P<row>[A-Z])(?P<col>[0-9]{1,2})(?P<ship>[A-Z])?$")


def parse_move(text: str, board: BoardGeometry, line_number: int | None = None) -> Move:
    """Decode one move token into a Move."""
    cleaned = text.strip().upper()
    match = MOVE_PATTERN.match(cleaned)
    if match is None:
        raise MalformedMoveError("Expected <row letter><column number>[ship code]", text, line_number)

    row = ROW_LABELS.index(match["row"])
    col = int(match["col"]) - 1
    try:
        pos = board.pos_from_parts(row, col)
    except BoardPositionError as exc:
        raise MalformedMoveError(str(exc), text, line_number) from exc

    ship_type: ShipType | None = None
    if match["ship"]:
        try:
            ship_type = ShipType.from_code(match["ship"])
        except ValueError as exc:
            raise MalformedMoveError(str(exc), text, line_number) from exc
    return Move(pos, ship_type)


def parse_moves(lines: Iterable[str], board: BoardGeometry) -> list[Move]:
    """Decode every non-blank line, preserving order."""
    moves: list[Move] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        moves.append(parse_move(line, board, line_number))
    return moves


def read_moves(path: str | Path, board: BoardGeometry) -> list[Move]:
    """Read the move log at ``path``."""
    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        try:
            moves = parse_moves(handle, board)
        except UnicodeDecodeError as exc:
            raise MalformedMoveError("Move log is not valid UTF-8", str(path)) from exc
    logger.info("moves_loaded", extra={"path": str(path), "count": len(moves)})
    return moves
