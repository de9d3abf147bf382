"""Level state resource describing whether further moves are possible."""
from dataclasses import dataclass
from enum import Enum, auto


class LevelState(Enum):
    """Coarse level outcome derived from the board after every removal."""
    CLEARED = auto()
    STUCK = auto()
    PLAYABLE = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not LevelState.PLAYABLE


@dataclass
class LevelStatus:
    """Singleton component storing the current level state and move counter."""
    state: LevelState = LevelState.PLAYABLE
    moves: int = 0
    destroyed: bool = False

    @property
    def accepts_input(self) -> bool:
        return not self.destroyed and not self.state.is_terminal
