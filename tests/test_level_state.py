from samegame.components.level_state import LevelState, LevelStatus
from samegame.systems.level_state import evaluate_level_state, has_legal_move
from tests.helpers import build_level, type_grid


def test_checkerboard_is_stuck():
    _, world, _, board = build_level(["ABA", "BAB", "ABA"])
    assert not has_legal_move(world, board)
    assert evaluate_level_state(world, board) is LevelState.STUCK


def test_uniform_board_is_playable():
    _, world, _, board = build_level(["AA", "AA"])
    assert has_legal_move(world, board)
    assert evaluate_level_state(world, board) is LevelState.PLAYABLE


def test_vertical_pair_is_a_legal_move():
    _, world, _, board = build_level(["AB", "AC"], type_count=3)
    assert evaluate_level_state(world, board) is LevelState.PLAYABLE


def test_empty_board_is_cleared():
    _, world, _, board = build_level(["..", ".."])
    assert evaluate_level_state(world, board) is LevelState.CLEARED


def test_evaluation_is_idempotent_and_read_only():
    _, world, _, board = build_level(["AB.", "BAB"])
    before = list(board.slots)
    first = evaluate_level_state(world, board)
    second = evaluate_level_state(world, board)
    assert first is second is LevelState.STUCK
    assert board.slots == before
    assert type_grid(world, board) == ["AB.", "BAB"]


def test_larger_minimum_group_size():
    _, world, _, board = build_level(["AAB", "CBB"])
    assert evaluate_level_state(world, board, min_group_size=2) is LevelState.PLAYABLE
    assert evaluate_level_state(world, board, min_group_size=3) is LevelState.PLAYABLE
    assert evaluate_level_state(world, board, min_group_size=4) is LevelState.STUCK


def test_status_accepts_input_only_while_playable():
    status = LevelStatus()
    assert status.accepts_input
    status.state = LevelState.CLEARED
    assert not status.accepts_input
    assert LevelState.STUCK.is_terminal
    assert not LevelState.PLAYABLE.is_terminal
