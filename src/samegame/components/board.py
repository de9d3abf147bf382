from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from samegame.presentation import TilePresenter


@dataclass(slots=True)
class Board:
    """Fixed-size playing field.

    ``slots`` is a row-major list (``row * cols + col``) holding the tile entity
    that occupies each cell, or ``None`` for an empty cell. Row 0 is the bottom
    row and column 0 the leftmost one; ``origin`` is the bottom-left corner of
    the field in world units.
    """
    cols: int
    rows: int
    origin: Tuple[float, float] = (0.0, 0.0)
    cell_size: Tuple[float, float] = (1.0, 1.0)
    type_count: int = 1
    slots: List[int | None] = field(default_factory=list)
    presenter: TilePresenter | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Board needs at least one row and column, got {self.cols}x{self.rows}")
        if self.cell_size[0] <= 0 or self.cell_size[1] <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")
        if self.type_count < 1:
            raise ValueError(f"Board needs at least one tile type, got {self.type_count}")
        if not self.slots:
            self.slots = [None] * (self.cols * self.rows)
        elif len(self.slots) != self.cols * self.rows:
            raise ValueError(f"Expected {self.cols * self.rows} slots, got {len(self.slots)}")

    @property
    def cell_count(self) -> int:
        return len(self.slots)
