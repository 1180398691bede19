"""Tests for board geometry."""

import pytest
from battleship_solver.engine.board import BoardGeometry
from battleship_solver.engine.ship import Coordinate
from battleship_solver.errors import BoardPositionError


def test_positions_are_row_major() -> None:
    board = BoardGeometry(10)
    assert board.pos_from_parts(0, 0) == 0
    assert board.pos_from_parts(0, 9) == 9
    assert board.pos_from_parts(9, 9) == 99
    assert board.coordinate(37) == Coordinate(3, 7)


def test_labels_use_letters_and_one_based_columns() -> None:
    board = BoardGeometry(10)
    assert board.label(0) == "A1"
    assert board.label(9) == "A10"
    assert board.label(99) == "J10"


def test_out_of_range_positions_fail_fast() -> None:
    board = BoardGeometry(5)
    with pytest.raises(BoardPositionError):
        board.pos_from_parts(5, 0)
    with pytest.raises(BoardPositionError):
        board.pos_from_parts(0, -1)
    with pytest.raises(BoardPositionError):
        board.validate_pos(25)
    with pytest.raises(BoardPositionError):
        board.coordinate(-1)


def test_board_size_bounds() -> None:
    with pytest.raises(ValueError):
        BoardGeometry(0)
    with pytest.raises(ValueError):
        BoardGeometry(27)


def test_non_integer_positions_are_rejected() -> None:
    board = BoardGeometry(5)
    with pytest.raises(BoardPositionError):
        board.validate_pos(2.0)
    with pytest.raises(BoardPositionError):
        board.label("A1")
