from __future__ import annotations

import logging

from esper import World

from samegame.components.board import Board
from samegame.config import LevelConfig
from samegame.events.bus import EventBus, EVENT_LEVEL_STARTED, EVENT_NEW_GAME_REQUEST
from samegame.presentation import NullPresenter, TilePresenter
from samegame.systems.board_ops import get_board, spawn_board
from samegame.systems.level import LevelSystem

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Starts levels: tears down the previous board and spawns a fresh one."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        level_system: LevelSystem,
        config: LevelConfig | None = None,
        *,
        presenter: TilePresenter | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.level_system = level_system
        self.config = config or LevelConfig()
        self.presenter = presenter if presenter is not None else NullPresenter()
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)

    def _on_new_game_request(self, sender, **payload) -> None:
        seed = payload.get("seed")
        if seed is not None:
            try:
                seed = int(seed)
            except (TypeError, ValueError):
                seed = None
        self.start_new_game(seed=seed)

    def start_new_game(self, *, seed: int | None = None, types=None) -> Board:
        """Replace the current level with a new one.

        Without ``seed`` the configured seed is reused, so the same board comes
        back. ``types`` fills the board from an explicit row-major list instead.
        """
        if seed is not None:
            self.config = self.config.with_seed(seed)
        if get_board(self.world) is not None:
            self.level_system.destroy_level(reason="new_game")
        self.level_system.reset()
        board = spawn_board(self.world, self.config, presenter=self.presenter, types=types)
        logger.info(
            "Started %sx%s level with %s tile types (seed=%s)",
            board.cols,
            board.rows,
            board.type_count,
            self.config.seed,
        )
        self.event_bus.emit(
            EVENT_LEVEL_STARTED,
            tolerant=True,
            cols=board.cols,
            rows=board.rows,
            type_count=board.type_count,
            seed=self.config.seed,
        )
        self.level_system.check_level_state()
        return board
