from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from samegame.constants import CELL_SIZE, GRID_COLS, GRID_ROWS, RANDOM_SEED, TILE_TYPE_COUNT


@dataclass(frozen=True)
class LevelConfig:
    """Everything that shapes a level: field size, geometry, tile types and seed.

    When ``origin`` is omitted the field is centered on the world origin.
    """
    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    cell_size: Tuple[float, float] = (CELL_SIZE, CELL_SIZE)
    origin: Optional[Tuple[float, float]] = None
    type_count: int = TILE_TYPE_COUNT
    seed: Optional[int] = RANDOM_SEED

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Level needs at least one row and column, got {self.cols}x{self.rows}")
        if self.cell_size[0] <= 0 or self.cell_size[1] <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")
        if self.type_count < 1:
            raise ValueError(f"Level needs at least one tile type, got {self.type_count}")

    @property
    def board_origin(self) -> Tuple[float, float]:
        if self.origin is not None:
            return self.origin
        return (
            -(self.cell_size[0] * self.cols * 0.5),
            -(self.cell_size[1] * self.rows * 0.5),
        )

    def with_seed(self, seed: Optional[int]) -> "LevelConfig":
        return replace(self, seed=seed)
