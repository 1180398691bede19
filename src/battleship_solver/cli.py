"""Command-line driver: prune the fleet's placements from a move log."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pydantic import ValidationError

from battleship_solver.config import SolverConfig
from battleship_solver.engine.board import BoardGeometry
from battleship_solver.engine.placements import PlacementSpace
from battleship_solver.engine.ship import ShipType
from battleship_solver.engine.solver import PuzzleSolver
from battleship_solver.errors import SolverError
from battleship_solver.io.moves import read_moves
from battleship_solver.telemetry import configure_console_logging, init_telemetry


def _ship_type_from_input(text: str) -> ShipType:
    cleaned = text.strip().upper()
    if cleaned in ShipType.__members__:
        return ShipType[cleaned]
    try:
        return ShipType.from_code(cleaned)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _describe_placement(board: BoardGeometry, cells: Sequence[int]) -> str:
    return f"{board.label(cells[0])}-{board.label(cells[-1])}"


def format_candidates(solver: PuzzleSolver) -> str:
    """Render every ship type's remaining placements, one type per line."""
    lines = []
    for ship_type, placements in solver.candidate_cells().items():
        described = " ".join(_describe_placement(solver.board, cells) for cells in placements)
        lines.append(f"{ship_type.name.title():<10} ({len(placements):>3}): {described or '-'}")
    return "\n".join(lines)


def run_solve(moves_file: str, config: SolverConfig) -> str:
    solver = PuzzleSolver(config)
    moves = read_moves(moves_file, solver.board)
    solver.apply_all(moves)
    return format_candidates(solver)


def run_overlap(ship1: ShipType, pos1: int, ship2: ShipType, pos2: int, config: SolverConfig) -> str:
    space = PlacementSpace(BoardGeometry(config.board_size), config.fleet)
    result = space.has_overlap(ship1, pos1, ship2, pos2)
    return str(result).lower()


def build_parser() -> argparse.ArgumentParser:
    board_options = argparse.ArgumentParser(add_help=False)
    board_options.add_argument(
        "--board-size", type=int, default=None, help="Board width and height (default 10)."
    )

    parser = argparse.ArgumentParser(description="Narrow down Battleship fleet placements from revealed cells.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser(
        "solve", parents=[board_options], help="Apply a move log and list remaining placements."
    )
    solve.add_argument(
        "moves_file", nargs="?", default="moves.txt", help="Move log, one move per line (default moves.txt)."
    )

    overlap = subparsers.add_parser(
        "overlap", parents=[board_options], help="Check whether two placements share a cell."
    )
    overlap.add_argument("ship1", type=_ship_type_from_input)
    overlap.add_argument("pos1", type=int)
    overlap.add_argument("ship2", type=_ship_type_from_input)
    overlap.add_argument("pos2", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_console_logging()
    init_telemetry()

    try:
        config = SolverConfig.from_env(board_size=args.board_size)
        if args.command == "solve":
            output = run_solve(args.moves_file, config)
        else:
            output = run_overlap(args.ship1, args.pos1, args.ship2, args.pos2, config)
    except (SolverError, ValidationError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
