"""Tests for the placement index bijection."""

import numpy as np
import pytest
from battleship_solver.engine.board import BoardGeometry
from battleship_solver.engine.placements import PlacementSpace
from battleship_solver.engine.ship import Orientation, ShipType, all_types
from battleship_solver.errors import FleetConfigurationError, PlacementIndexError


@pytest.fixture(params=[5, 7, 10])
def space(request: pytest.FixtureRequest) -> PlacementSpace:
    return PlacementSpace(BoardGeometry(request.param))


def test_placement_counts_on_small_board() -> None:
    space = PlacementSpace(BoardGeometry(5))
    assert space.reduced_count(ShipType.PATROL) == 4
    assert space.num_placements(ShipType.PATROL) == 40
    assert space.num_placements(ShipType.CARRIER) == 10


def test_every_index_maps_to_distinct_in_bounds_cells(space: PlacementSpace) -> None:
    for ship_type in all_types():
        total = space.num_placements(ship_type)
        seen = set()
        for index in range(total):
            cells = space.occupied_cells(ship_type, index)
            assert len(cells) == ship_type.size
            assert all(0 <= cell < space.board.num_cells for cell in cells)
            seen.add(frozenset(cells))
        assert len(seen) == total


def test_lower_half_horizontal_upper_half_vertical(space: PlacementSpace) -> None:
    for ship_type in all_types():
        half = space.num_placements(ship_type) // 2
        for index in range(space.num_placements(ship_type)):
            coords = [space.board.coordinate(cell) for cell in space.occupied_cells(ship_type, index)]
            rows = {coord.row for coord in coords}
            cols = {coord.col for coord in coords}
            if index < half:
                assert len(rows) == 1 and len(cols) == ship_type.size
                assert space.orientation(ship_type, index) is Orientation.HORIZONTAL
            else:
                assert len(cols) == 1 and len(rows) == ship_type.size
                assert space.orientation(ship_type, index) is Orientation.VERTICAL


def test_index_round_trips_through_geometry(space: PlacementSpace) -> None:
    for ship_type in all_types():
        for index in range(space.num_placements(ship_type)):
            anchor = space.anchor(ship_type, index)
            orientation = space.orientation(ship_type, index)
            assert space.index_of(ship_type, orientation, anchor.row, anchor.col) == index


def test_known_placements_on_standard_board() -> None:
    space = PlacementSpace(BoardGeometry(10))
    assert space.occupied_cells(ShipType.PATROL, 9) == (10, 11)
    assert space.occupied_cells(ShipType.CARRIER, 71) == (11, 21, 31, 41, 51)


def test_out_of_range_index_is_rejected() -> None:
    space = PlacementSpace(BoardGeometry(5))
    with pytest.raises(PlacementIndexError):
        space.occupied_cells(ShipType.PATROL, 40)
    with pytest.raises(PlacementIndexError):
        space.occupied_cells(ShipType.PATROL, -1)
    with pytest.raises(PlacementIndexError):
        space.index_of(ShipType.PATROL, Orientation.HORIZONTAL, 0, 4)


def test_board_too_small_for_fleet() -> None:
    with pytest.raises(FleetConfigurationError):
        PlacementSpace(BoardGeometry(4))
    space = PlacementSpace(BoardGeometry(4), fleet=[ShipType.PATROL, ShipType.BATTLESHIP])
    assert space.num_placements(ShipType.BATTLESHIP) == 8


def test_occupancy_matrix_matches_cells() -> None:
    space = PlacementSpace(BoardGeometry(5))
    matrix = space.occupancy(ShipType.DESTROYER)
    assert matrix.shape == (space.num_placements(ShipType.DESTROYER), 25)
    assert not matrix.flags.writeable
    for index in range(matrix.shape[0]):
        assert set(matrix[index].nonzero()[0].tolist()) == set(space.occupied_cells(ShipType.DESTROYER, index))
    assert space.covers(ShipType.DESTROYER, 0, 2)
    assert not space.covers(ShipType.DESTROYER, 0, 3)


def test_non_integer_index_is_rejected() -> None:
    space = PlacementSpace(BoardGeometry(5))
    with pytest.raises(PlacementIndexError):
        space.occupied_cells(ShipType.PATROL, 1.5)
    with pytest.raises(PlacementIndexError):
        space.covers(ShipType.PATROL, "3", 0)


def test_numpy_integer_index_is_accepted() -> None:
    space = PlacementSpace(BoardGeometry(5))
    assert space.occupied_cells(ShipType.PATROL, np.int64(20)) == (0, 5)
