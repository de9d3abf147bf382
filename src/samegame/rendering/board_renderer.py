from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from samegame.constants import HOVER_OUTLINE_COLOR
from samegame.systems.board_ops import cell_center

if TYPE_CHECKING:
    from samegame.components.board import Board
    from samegame.components.hover_state import HoverState
    from samegame.components.tile_types import TileTypes
    from samegame.systems.render import TileSprite
    from samegame.ui.layout import View

FRAME_COLOR = (20, 40, 70)


class BoardRenderer:
    def __init__(self, padding: int = 2):
        self._padding = padding

    def render(
        self,
        arcade,
        view: View,
        board: Board | None,
        registry: TileTypes,
        sprites: Iterable[TileSprite],
        hover: HoverState,
    ) -> None:
        if board is not None:
            left, bottom = view.to_screen(*board.origin)
            right, top = view.to_screen(
                board.origin[0] + board.cols * board.cell_size[0],
                board.origin[1] + board.rows * board.cell_size[1],
            )
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, FRAME_COLOR)
            half_w = board.cell_size[0] * view.scale / 2
            half_h = board.cell_size[1] * view.scale / 2
        else:
            half_w = half_h = view.scale / 2

        inset_w = max(1.0, half_w - self._padding)
        inset_h = max(1.0, half_h - self._padding)
        for sprite in sprites:
            x, y = view.to_screen(sprite.x, sprite.y)
            arcade.draw_lrbt_rectangle_filled(
                x - inset_w, x + inset_w, y - inset_h, y + inset_h, registry.color_for(sprite.type_id)
            )

        if board is None or not hover.group:
            return
        for index in hover.group:
            x, y = view.to_screen(*cell_center(board, index))
            arcade.draw_lrbt_rectangle_outline(
                x - half_w, x + half_w, y - half_h, y + half_h, HOVER_OUTLINE_COLOR, 2
            )
