from dataclasses import dataclass
from typing import Tuple

from samegame.constants import NO_CELL


@dataclass(slots=True)
class HoverState:
    """Cell under the pointer and the group a click there would remove."""

    index: int = NO_CELL
    group: Tuple[int, ...] = ()
    x: float = 0.0
    y: float = 0.0
