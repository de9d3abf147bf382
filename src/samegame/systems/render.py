from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from esper import World

from samegame.constants import TILE_PADDING, TOP_PANEL_HEIGHT
from samegame.events.bus import (
    EventBus,
    EVENT_LEVEL_CLEARED,
    EVENT_LEVEL_DESTROYED,
    EVENT_LEVEL_STARTED,
    EVENT_LEVEL_STUCK,
)
from samegame.rendering.board_renderer import BoardRenderer
from samegame.systems.board_ops import get_board
from samegame.systems.level_state_utils import get_or_create_hover, get_or_create_score
from samegame.ui.layout import compute_view
from samegame.world import get_tile_registry

Point = Tuple[float, float]


@dataclass(slots=True)
class TileSprite:
    """Drawable record for one tile; position is the cell center in world units."""
    handle: int
    type_id: int
    x: float
    y: float


class RenderSystem:
    """Owns the tile visuals and draws the level.

    Acts as the board's presenter: the engine asks it to spawn, move and release
    visuals, and only ever holds the integer handles it returns.
    """
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.message: str | None = None
        self._sprites: Dict[int, TileSprite] = {}
        self._next_handle = 1
        self._board_renderer = BoardRenderer(padding=TILE_PADDING)
        self.event_bus.subscribe(EVENT_LEVEL_CLEARED, self.on_level_over)
        self.event_bus.subscribe(EVENT_LEVEL_STUCK, self.on_level_over)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)
        self.event_bus.subscribe(EVENT_LEVEL_DESTROYED, self.on_level_destroyed)

    # ------------------------------------------------------------------
    # Presenter
    # ------------------------------------------------------------------
    def spawn(self, type_id: int, center: Point) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._sprites[handle] = TileSprite(handle=handle, type_id=type_id, x=center[0], y=center[1])
        return handle

    def move(self, handle: Any, center: Point) -> None:
        sprite = self._sprites.get(handle)
        if sprite is None:
            raise KeyError(f"Unknown tile handle {handle!r}")
        sprite.x, sprite.y = center

    def release(self, handle: Any) -> None:
        if self._sprites.pop(handle, None) is None:
            raise KeyError(f"Unknown tile handle {handle!r}")

    def sprite_for(self, handle: Any) -> TileSprite | None:
        return self._sprites.get(handle)

    @property
    def sprite_count(self) -> int:
        return len(self._sprites)

    # ------------------------------------------------------------------
    # Bus handlers
    # ------------------------------------------------------------------
    def on_level_over(self, sender, **kwargs):
        self.message = kwargs.get('message')

    def on_level_started(self, sender, **kwargs):
        self.message = None

    def on_level_destroyed(self, sender, **kwargs):
        # Visuals are released one by one during teardown; drop any leftovers.
        self._sprites.clear()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade

        try:
            arcade.get_window()
        except Exception:
            return
        board = get_board(self.world)
        view = compute_view(self.window.width, self.window.height, board)
        registry = get_tile_registry(self.world)
        hover = get_or_create_hover(self.world)
        self._board_renderer.render(arcade, view, board, registry, self._sprites.values(), hover)
        self._render_panel(arcade)
        if self.message:
            self._render_message(arcade)

    def _render_panel(self, arcade) -> None:
        score = get_or_create_score(self.world)
        top = self.window.height
        arcade.draw_text(f"Points: {score.points}", 12, top - TOP_PANEL_HEIGHT / 2, arcade.color.WHITE, 16)
        arcade.draw_text("N: new game", self.window.width - 140, top - TOP_PANEL_HEIGHT / 2, arcade.color.LIGHT_GRAY, 12)

    def _render_message(self, arcade) -> None:
        width, height = 280.0, 100.0
        left = (self.window.width - width) / 2
        bottom = (self.window.height - height) / 2
        arcade.draw_lrbt_rectangle_filled(left, left + width, bottom, bottom + height, (10, 10, 10, 220))
        arcade.draw_lrbt_rectangle_outline(left, left + width, bottom, bottom + height, arcade.color.WHITE, 2)
        center_x = self.window.width / 2
        arcade.draw_text(self.message, center_x, bottom + 62, arcade.color.WHITE, 14, anchor_x="center")
        score = get_or_create_score(self.world)
        arcade.draw_text(f"Your Score: {score.points}", center_x, bottom + 28, arcade.color.WHITE, 14, anchor_x="center")
