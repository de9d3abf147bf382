import pytest

from samegame.components.board import Board
from samegame.constants import NO_CELL
from samegame.systems.board_ops import (
    cell_center,
    cell_index,
    cell_index_of,
    cell_min_point,
    format_board,
    get_tile,
    index_to_cell,
    neighbors4,
    occupied_indices,
    set_tile,
    tile_type_at,
    tile_type_counts,
)
from tests.helpers import RecordingPresenter, build_level


def test_row_major_index_with_bottom_left_origin():
    board = Board(cols=4, rows=3)
    assert cell_index(board, 0, 0) == 0
    assert cell_index(board, 3, 0) == 3
    assert cell_index(board, 0, 1) == 4
    assert cell_index(board, 3, 2) == 11
    assert index_to_cell(board, 6) == (2, 1)


def test_cell_index_outside_field_is_no_cell():
    board = Board(cols=4, rows=3)
    assert cell_index(board, -1, 0) == NO_CELL
    assert cell_index(board, 4, 0) == NO_CELL
    assert cell_index(board, 0, 3) == NO_CELL


def test_point_to_index_uses_origin_and_cell_size():
    board = Board(cols=3, rows=2, origin=(-1.8, -1.2), cell_size=(1.2, 1.2))
    assert cell_index_of(board, -1.7, -1.1) == 0
    assert cell_index_of(board, 0.1, 0.1) == 4
    assert cell_index_of(board, 1.7, 1.1) == 5


def test_point_outside_field_does_not_wrap():
    board = Board(cols=3, rows=2)
    # Past the right edge of row 0 would wrap into row 1 with a plain row*cols+col.
    assert cell_index_of(board, 3.5, 0.5) == NO_CELL
    assert cell_index_of(board, -0.5, 0.5) == NO_CELL
    assert cell_index_of(board, 0.5, 2.5) == NO_CELL
    assert cell_index_of(board, 0.5, -0.01) == NO_CELL


def test_cell_geometry_points():
    board = Board(cols=3, rows=2, origin=(10.0, 20.0), cell_size=(2.0, 4.0))
    assert cell_min_point(board, 4) == (12.0, 24.0)
    assert cell_center(board, 4) == (13.0, 26.0)


def test_neighbors_order_and_occupancy():
    _, world, _, board = build_level(["AB.", "CDE", "ABC"])
    # Middle cell (col 1, row 1): left, right, down, up.
    assert neighbors4(board, 4) == [3, 5, 1, 7]
    # The cell above (col 2, row 1) is empty.
    assert neighbors4(board, 5) == [4, 2]
    assert neighbors4(board, 0) == [1, 3]
    assert neighbors4(board, 99) == []


def test_get_tile_and_set_tile_reject_invalid_index(caplog):
    _, world, _, board = build_level(["AB"])
    assert get_tile(board, -1) is None
    assert get_tile(board, 2) is None
    assert set_tile(world, board, 2, board.slots[0]) is False
    assert board.slots[0] is not None
    assert "out of range" in caplog.text


def test_set_tile_repositions_visual():
    presenter = RecordingPresenter()
    _, world, _, board = build_level(["AB."], presenter=presenter)
    entity = get_tile(board, 0)
    assert set_tile(world, board, 2, entity)
    handle, center = presenter.moved[-1]
    assert handle == presenter.spawned[0][0]
    assert center == cell_center(board, 2)
    assert tile_type_at(world, board, 2) == 0


def test_board_snapshots():
    _, world, _, board = build_level(["A.", "AB"])
    assert occupied_indices(board) == [0, 1, 2]
    assert tile_type_counts(world, board) == {0: 2, 1: 1}
    assert format_board(world, board) == "0 .\n0 1"


def test_board_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        Board(cols=0, rows=3)
    with pytest.raises(ValueError):
        Board(cols=2, rows=2, cell_size=(0.0, 1.0))
    with pytest.raises(ValueError):
        Board(cols=2, rows=2, slots=[None])
