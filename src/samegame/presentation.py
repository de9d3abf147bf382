"""Boundary between the rules engine and whatever draws the tiles.

The engine needs exactly three calls from its environment: create a visual for
a freshly placed tile, move a visual to a cell center, and release a visual
when its tile is removed. Handles are opaque to the engine.
"""
from __future__ import annotations

from typing import Any, Protocol, Tuple

Point = Tuple[float, float]


class TilePresenter(Protocol):
    def spawn(self, type_id: int, center: Point) -> Any:
        ...

    def move(self, handle: Any, center: Point) -> None:
        ...

    def release(self, handle: Any) -> None:
        ...


class NullPresenter:
    """Headless presenter: hands out no handles and ignores every update."""

    def spawn(self, type_id: int, center: Point) -> Any:
        return None

    def move(self, handle: Any, center: Point) -> None:
        return None

    def release(self, handle: Any) -> None:
        return None
