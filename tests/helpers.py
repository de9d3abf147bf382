from __future__ import annotations

from typing import List, Sequence

from esper import World

from samegame.components.board import Board
from samegame.config import LevelConfig
from samegame.events.bus import EventBus
from samegame.systems.board_ops import spawn_board, tile_types_by_index
from samegame.systems.level import LevelSystem
from samegame.systems.scoring import ScoringRules
from samegame.world import create_world

LETTERS = "ABCDEFGH"


class RecordingPresenter:
    """Presenter that records every call; ``fail_on`` names calls that raise."""

    def __init__(self, fail_on: Sequence[str] = ()):
        self.fail_on = set(fail_on)
        self.spawned: List[tuple] = []
        self.moved: List[tuple] = []
        self.released: List[object] = []
        self._next = 100

    def spawn(self, type_id, center):
        if "spawn" in self.fail_on:
            raise RuntimeError("spawn failed")
        handle = self._next
        self._next += 1
        self.spawned.append((handle, type_id, center))
        return handle

    def move(self, handle, center):
        if "move" in self.fail_on:
            raise RuntimeError("move failed")
        self.moved.append((handle, center))

    def release(self, handle):
        if "release" in self.fail_on:
            raise RuntimeError("release failed")
        self.released.append(handle)


def types_from_rows(rows_top_down: Sequence[str]) -> List[int | None]:
    """Convert picture rows (top row first, '.' for empty) to a row-major type list."""
    types: List[int | None] = []
    for line in reversed(rows_top_down):
        for ch in line:
            types.append(None if ch == "." else LETTERS.index(ch))
    return types


def config_for_rows(rows_top_down: Sequence[str], type_count: int | None = None) -> LevelConfig:
    types = [t for t in types_from_rows(rows_top_down) if t is not None]
    if type_count is None:
        type_count = max(types) + 1 if types else 1
    return LevelConfig(
        cols=len(rows_top_down[0]),
        rows=len(rows_top_down),
        cell_size=(1.0, 1.0),
        origin=(0.0, 0.0),
        type_count=type_count,
    )


def build_level(
    rows_top_down: Sequence[str],
    *,
    rules: ScoringRules | None = None,
    presenter=None,
    type_count: int | None = None,
):
    """Build a world with a board laid out from ``rows_top_down``.

    Returns ``(bus, world, level_system, board)``; the board's origin is (0, 0)
    and every cell is one world unit wide.
    """
    config = config_for_rows(rows_top_down, type_count)
    bus = EventBus()
    world = create_world(config)
    level = LevelSystem(world, bus, rules)
    board = spawn_board(world, config, presenter=presenter, types=types_from_rows(rows_top_down))
    return bus, world, level, board


def type_grid(world: World, board: Board) -> List[str]:
    """Picture rows (top row first) of the board's current contents."""
    types = tile_types_by_index(world, board)
    rows: List[str] = []
    for row in reversed(range(board.rows)):
        cells = types[row * board.cols:(row + 1) * board.cols]
        rows.append("".join("." if t is None else LETTERS[t] for t in cells))
    return rows


def record(bus: EventBus, name: str) -> List[dict]:
    received: List[dict] = []

    def handler(sender, **kwargs):
        received.append(kwargs)

    bus.subscribe(name, handler)
    return received
