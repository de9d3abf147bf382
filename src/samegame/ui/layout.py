from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from samegame.components.board import Board
from samegame.constants import (
    BOTTOM_MARGIN,
    PIXELS_PER_UNIT,
    TOP_PANEL_HEIGHT,
)

# Board maximum footprint relative to the area below the top panel.
BOARD_MAX_WIDTH_PCT = 0.95
BOARD_MAX_HEIGHT_PCT = 0.95


@dataclass(slots=True)
class View:
    """Maps world units to window pixels: ``screen = center + world * scale``."""
    scale: float
    center_x: float
    center_y: float

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.center_x + x * self.scale, self.center_y + y * self.scale

    def to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.center_x) / self.scale, (sy - self.center_y) / self.scale


def compute_view(window_width: int, window_height: int, board: Board | None = None) -> View:
    """Return the world-to-screen view that fits ``board`` inside the window.

    Without a board the default PIXELS_PER_UNIT scale is used. The world origin
    sits at the center of the area below the top panel.
    """
    area_height = window_height - TOP_PANEL_HEIGHT - BOTTOM_MARGIN
    center_x = window_width / 2
    center_y = BOTTOM_MARGIN + area_height / 2
    scale = float(PIXELS_PER_UNIT)
    if board is not None:
        left = board.origin[0]
        bottom = board.origin[1]
        right = left + board.cols * board.cell_size[0]
        top = bottom + board.rows * board.cell_size[1]
        # Fit the farther edge on each axis so the world origin stays centered.
        half_w = max(abs(left), abs(right))
        half_h = max(abs(bottom), abs(top))
        if half_w > 0 and half_h > 0:
            scale_by_w = (window_width * BOARD_MAX_WIDTH_PCT) / (2 * half_w)
            scale_by_h = (area_height * BOARD_MAX_HEIGHT_PCT) / (2 * half_h)
            scale = min(scale_by_w, scale_by_h)
    return View(scale=max(scale, 1.0), center_x=center_x, center_y=center_y)
