from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class TileType:
    """Per-tile type assignment.

    ``type_id`` lies in ``[0, Board.type_count)``. Colors are looked up through the
    TileTypes singleton, never stored on the tile.
    """
    type_id: int


@dataclass(slots=True)
class TileVisual:
    """Opaque handle returned by the presenter when the tile was spawned."""
    handle: Any = None
