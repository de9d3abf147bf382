from __future__ import annotations

from esper import World

from samegame.components.board import Board
from samegame.components.level_state import LevelState
from samegame.constants import MIN_GROUP_SIZE
from samegame.systems.board_ops import occupied_indices, tile_types_by_index
from samegame.systems.connectivity import select_group


def has_legal_move(world: World, board: Board, *, min_group_size: int = MIN_GROUP_SIZE) -> bool:
    """Return True if some group of at least ``min_group_size`` tiles exists."""
    if min_group_size > 2:
        return _has_large_group(world, board, min_group_size)
    types = tile_types_by_index(world, board)
    cols = board.cols
    for index, type_id in enumerate(types):
        if type_id is None:
            continue
        col, row = index % cols, index // cols
        # Checking right and up covers every adjacent pair exactly once.
        if col + 1 < cols and types[index + 1] == type_id:
            return True
        if row + 1 < board.rows and types[index + cols] == type_id:
            return True
    return False


def _has_large_group(world: World, board: Board, min_group_size: int) -> bool:
    seen: set[int] = set()
    for index in occupied_indices(board):
        if index in seen:
            continue
        group = select_group(world, board, index)
        if len(group) >= min_group_size:
            return True
        seen |= group
    return False


def evaluate_level_state(world: World, board: Board, *, min_group_size: int = MIN_GROUP_SIZE) -> LevelState:
    """Rescan the whole field: cleared, stuck, or still playable."""
    if all(entity is None for entity in board.slots):
        return LevelState.CLEARED
    if has_legal_move(world, board, min_group_size=min_group_size):
        return LevelState.PLAYABLE
    return LevelState.STUCK
