from dataclasses import dataclass, field
from typing import List, Tuple

from samegame.constants import TILE_PALETTE

Color = Tuple[int, int, int]


@dataclass(slots=True)
class TileTypes:
    """Canonical tile type definitions stored on a single entity.

    Type ids are dense: ``0 .. count - 1``. The palette is reused cyclically when a
    level asks for more types than it defines.
    """
    count: int
    palette: List[Color] = field(default_factory=lambda: list(TILE_PALETTE))

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"At least one tile type is required, got {self.count}")
        if not self.palette:
            self.palette = list(TILE_PALETTE)

    def color_for(self, type_id: int) -> Color:
        return self.palette[type_id % len(self.palette)]

    def all_types(self) -> List[int]:
        return list(range(self.count))

    def is_known(self, type_id: int) -> bool:
        return 0 <= type_id < self.count
