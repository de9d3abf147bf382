from __future__ import annotations

from collections import deque
from typing import Set

from esper import World

from samegame.components.board import Board
from samegame.systems.board_ops import is_valid_index, neighbors4, tile_type_at


def select_group(world: World, board: Board, start_index: int) -> Set[int]:
    """Return the 4-connected group of same-typed tiles containing ``start_index``.

    An out-of-range or empty start cell yields an empty set.
    """
    if not is_valid_index(board, start_index):
        return set()
    start_type = tile_type_at(world, board, start_index)
    if start_type is None:
        return set()
    group = {start_index}
    visited = {start_index}
    queue = deque([start_index])
    while queue:
        current = queue.popleft()
        for neighbor in neighbors4(board, current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            if tile_type_at(world, board, neighbor) == start_type:
                group.add(neighbor)
                queue.append(neighbor)
    return group
