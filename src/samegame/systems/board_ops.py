from __future__ import annotations

import logging
import math
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence, Tuple

from esper import World

from samegame.components.board import Board
from samegame.components.tile import TileType, TileVisual
from samegame.config import LevelConfig
from samegame.constants import NO_CELL
from samegame.presentation import TilePresenter

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Cell = Tuple[int, int]  # (col, row)
Move = Tuple[int, int]  # (source index, target index)


class GridInvariantError(RuntimeError):
    """A tile sits above an empty cell, or an empty column precedes an occupied one."""


@dataclass(slots=True)
class CompactionResult:
    removed: List[int] = field(default_factory=list)
    columns: List[int] = field(default_factory=list)
    moves: List[Move] = field(default_factory=list)


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def board_entity(world: World) -> int | None:
    for entity, _ in world.get_component(Board):
        return entity
    return None


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def cell_index(board: Board, col: int, row: int) -> int:
    """Return the slot index for (col, row), or NO_CELL when outside the field."""
    if col < 0 or row < 0 or col >= board.cols or row >= board.rows:
        return NO_CELL
    return row * board.cols + col


def index_to_cell(board: Board, index: int) -> Cell:
    return index % board.cols, index // board.cols


def is_valid_index(board: Board, index: int) -> bool:
    return 0 <= index < board.cell_count


def cell_index_of(board: Board, x: float, y: float) -> int:
    """Map a world-space point to the enclosing cell.

    Points outside the field yield NO_CELL; callers still validate the result
    with ``is_valid_index`` before looking anything up.
    """
    col = math.floor((x - board.origin[0]) / board.cell_size[0])
    row = math.floor((y - board.origin[1]) / board.cell_size[1])
    return cell_index(board, col, row)


def cell_min_point(board: Board, index: int) -> Point:
    col, row = index_to_cell(board, index)
    return (
        board.origin[0] + col * board.cell_size[0],
        board.origin[1] + row * board.cell_size[1],
    )


def cell_center(board: Board, index: int) -> Point:
    min_x, min_y = cell_min_point(board, index)
    return min_x + board.cell_size[0] * 0.5, min_y + board.cell_size[1] * 0.5


# ---------------------------------------------------------------------------
# Cell access
# ---------------------------------------------------------------------------

def get_tile(board: Board, index: int) -> int | None:
    """Return the tile entity at ``index``; None for an empty or invalid cell."""
    if not is_valid_index(board, index):
        logger.error("get_tile: index %s out of range [0, %s)", index, board.cell_count)
        return None
    return board.slots[index]


def set_tile(world: World, board: Board, index: int, entity: int | None) -> bool:
    """Place ``entity`` at ``index`` and move its visual to the cell center."""
    if not is_valid_index(board, index):
        logger.error("set_tile: index %s out of range [0, %s)", index, board.cell_count)
        return False
    board.slots[index] = entity
    if entity is not None:
        _reposition_visual(world, board, entity, index)
    return True


def tile_type_at(world: World, board: Board, index: int) -> int | None:
    entity = get_tile(board, index)
    if entity is None:
        return None
    return world.component_for_entity(entity, TileType).type_id


def neighbors4(board: Board, index: int) -> List[int]:
    """Occupied neighbours of ``index`` in the order left, right, down, up."""
    if not is_valid_index(board, index):
        return []
    col, row = index_to_cell(board, index)
    candidates: List[int] = []
    if col > 0:
        candidates.append(index - 1)
    if col < board.cols - 1:
        candidates.append(index + 1)
    if row > 0:
        candidates.append(index - board.cols)
    if row < board.rows - 1:
        candidates.append(index + board.cols)
    return [neighbor for neighbor in candidates if board.slots[neighbor] is not None]


def occupied_indices(board: Board) -> List[int]:
    return [index for index, entity in enumerate(board.slots) if entity is not None]


def tile_types_by_index(world: World, board: Board) -> List[int | None]:
    """Row-major snapshot of tile type ids (None for empty cells)."""
    types: List[int | None] = []
    for entity in board.slots:
        if entity is None:
            types.append(None)
        else:
            types.append(world.component_for_entity(entity, TileType).type_id)
    return types


def tile_type_counts(world: World, board: Board) -> Counter:
    return Counter(type_id for type_id in tile_types_by_index(world, board) if type_id is not None)


def format_board(world: World, board: Board) -> str:
    """Render the field as text, top row first; '.' marks an empty cell."""
    types = tile_types_by_index(world, board)
    lines: List[str] = []
    for row in reversed(range(board.rows)):
        cells = types[row * board.cols:(row + 1) * board.cols]
        lines.append(" ".join("." if type_id is None else str(type_id) for type_id in cells))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Presenter notifications
# ---------------------------------------------------------------------------

def _visual_handle(world: World, entity: int) -> Any:
    try:
        return world.component_for_entity(entity, TileVisual).handle
    except KeyError:
        return None


def _reposition_visual(world: World, board: Board, entity: int, index: int) -> None:
    presenter = board.presenter
    if presenter is None:
        return
    handle = _visual_handle(world, entity)
    try:
        presenter.move(handle, cell_center(board, index))
    except Exception:
        logger.warning("Presenter failed to move tile %s to slot %s", entity, index, exc_info=True)


def _release_visual(world: World, board: Board, entity: int) -> None:
    presenter = board.presenter
    if presenter is None:
        return
    handle = _visual_handle(world, entity)
    try:
        presenter.release(handle)
    except Exception:
        logger.warning("Presenter failed to release tile %s", entity, exc_info=True)


def _spawn_visual(board: Board, type_id: int, index: int) -> Any:
    presenter = board.presenter
    if presenter is None:
        return None
    try:
        return presenter.spawn(type_id, cell_center(board, index))
    except Exception:
        logger.warning("Presenter failed to spawn a visual for slot %s", index, exc_info=True)
        return None


# ---------------------------------------------------------------------------
# Construction and teardown
# ---------------------------------------------------------------------------

def spawn_tile(world: World, board: Board, index: int, type_id: int) -> int | None:
    """Create a tile entity of ``type_id`` in the (empty or overwritten) slot."""
    if not 0 <= type_id < board.type_count:
        raise ValueError(f"Tile type {type_id} outside [0, {board.type_count})")
    if not is_valid_index(board, index):
        logger.error("spawn_tile: index %s out of range [0, %s)", index, board.cell_count)
        return None
    handle = _spawn_visual(board, type_id, index)
    entity = world.create_entity(TileType(type_id=type_id), TileVisual(handle=handle))
    board.slots[index] = entity
    return entity


def populate_board(world: World, board: Board, rng: random.Random) -> List[int]:
    """Fill every slot with a uniformly random tile type."""
    filled: List[int] = []
    for index in range(board.cell_count):
        if spawn_tile(world, board, index, rng.randrange(board.type_count)) is not None:
            filled.append(index)
    return filled


def populate_board_from_types(world: World, board: Board, types: Sequence[int | None]) -> List[int]:
    """Fill slots from a row-major list of type ids; None leaves a cell empty."""
    if len(types) != board.cell_count:
        raise ValueError(f"Expected {board.cell_count} tile types, got {len(types)}")
    filled: List[int] = []
    for index, type_id in enumerate(types):
        if type_id is None:
            continue
        if spawn_tile(world, board, index, type_id) is not None:
            filled.append(index)
    return filled


def spawn_board(
    world: World,
    config: LevelConfig,
    *,
    presenter: TilePresenter | None = None,
    types: Sequence[int | None] | None = None,
    rng: random.Random | None = None,
) -> Board:
    """Create the board entity and fill it, randomly (seeded) or from ``types``."""
    board = Board(
        cols=config.cols,
        rows=config.rows,
        origin=config.board_origin,
        cell_size=config.cell_size,
        type_count=config.type_count,
        presenter=presenter,
    )
    world.create_entity(board)
    if types is not None:
        populate_board_from_types(world, board, types)
    else:
        if rng is None:
            rng = random.Random(config.seed)
        populate_board(world, board, rng)
    return board


def destroy_board(world: World, board: Board) -> int:
    """Release every visual, delete every tile entity and empty all slots."""
    released = 0
    for index, entity in enumerate(board.slots):
        if entity is None:
            continue
        _release_visual(world, board, entity)
        world.delete_entity(entity, immediate=True)
        board.slots[index] = None
        released += 1
    return released


# ---------------------------------------------------------------------------
# Removal and compaction
# ---------------------------------------------------------------------------

def _move_tile(world: World, board: Board, source: int, target: int) -> bool:
    if not is_valid_index(board, source):
        logger.error("move_tile: source index %s out of range", source)
        return False
    if not is_valid_index(board, target):
        logger.error("move_tile: target index %s out of range", target)
        return False
    entity = board.slots[source]
    if entity is None:
        return False
    board.slots[target] = entity
    board.slots[source] = None
    _reposition_visual(world, board, entity, target)
    return True


def _move_column(world: World, board: Board, source_col: int, target_col: int) -> List[Move]:
    if not 0 <= source_col < board.cols:
        logger.error("move_column: source column %s out of range", source_col)
        return []
    if not 0 <= target_col < board.cols:
        logger.error("move_column: target column %s out of range", target_col)
        return []
    moves: List[Move] = []
    for row in range(board.rows):
        source = cell_index(board, source_col, row)
        target = cell_index(board, target_col, row)
        if _move_tile(world, board, source, target):
            moves.append((source, target))
    return moves


def remove_and_compact(world: World, board: Board, indices: Iterable[int]) -> CompactionResult:
    """Remove the tiles at ``indices``, then let tiles fall and close empty columns.

    Tiles move slot to slot (the entity travels, its visual is repositioned);
    the relative order of the remaining tiles in each column and row is kept.
    """
    result = CompactionResult()
    columns: set[int] = set()
    for index in sorted(set(indices)):
        if not is_valid_index(board, index):
            logger.error("remove_and_compact: index %s out of range [0, %s)", index, board.cell_count)
            continue
        entity = board.slots[index]
        if entity is None:
            continue
        _release_visual(world, board, entity)
        world.delete_entity(entity, immediate=True)
        board.slots[index] = None
        result.removed.append(index)
        columns.add(index % board.cols)
    result.columns = sorted(columns)

    # Gravity: one bottom-up pass per touched column.
    for col in result.columns:
        gap = 0
        for row in range(board.rows):
            source = cell_index(board, col, row)
            if board.slots[source] is None:
                gap += 1
            elif gap:
                target = cell_index(board, col, row - gap)
                if _move_tile(world, board, source, target):
                    result.moves.append((source, target))

    # Packing: after gravity a column is empty iff its bottom cell is.
    gap = 0
    for col in range(board.cols):
        if board.slots[col] is None:
            gap += 1
        elif gap:
            result.moves.extend(_move_column(world, board, col, col - gap))
    return result


def assert_grid_invariants(world: World, board: Board) -> None:
    """Raise GridInvariantError unless the gravity and packing rules hold."""
    if len(board.slots) != board.cols * board.rows:
        raise GridInvariantError(f"Board holds {len(board.slots)} slots, expected {board.cols * board.rows}")
    occupied = [entity for entity in board.slots if entity is not None]
    if len(occupied) != len(set(occupied)):
        raise GridInvariantError("A tile entity occupies more than one slot")
    for entity in occupied:
        if not world.entity_exists(entity):
            raise GridInvariantError(f"Slot references deleted tile entity {entity}")
    column_empty: List[bool] = []
    for col in range(board.cols):
        seen_gap = False
        for row in range(board.rows):
            if board.slots[cell_index(board, col, row)] is None:
                seen_gap = True
            elif seen_gap:
                raise GridInvariantError(f"Tile at column {col}, row {row} sits above an empty cell")
        column_empty.append(board.slots[col] is None)
    seen_empty = False
    for col, empty in enumerate(column_empty):
        if empty:
            seen_empty = True
        elif seen_empty:
            raise GridInvariantError(f"Column {col} is occupied but an empty column lies to its left")
