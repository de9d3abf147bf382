from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from samegame.constants import CLEAR_BONUS, MIN_GROUP_SIZE


def remaining_count_penalty(remaining: int) -> int:
    """Default loss policy: lose one point per tile left on the board."""
    return remaining


def squared_remaining_penalty(remaining: int) -> int:
    """Harsher loss policy mirroring the move formula."""
    return remaining * remaining


@dataclass
class ScoringRules:
    """Classic SameGame scoring.

    A move of ``n`` tiles scores ``(n - 2) ** 2``. Reaching a stuck board costs
    ``loss_penalty(remaining)`` points; clearing the board earns ``clear_bonus``.
    """
    min_group_size: int = MIN_GROUP_SIZE
    clear_bonus: int = CLEAR_BONUS
    loss_penalty: Optional[Callable[[int], int]] = None

    def __post_init__(self) -> None:
        if self.min_group_size < 2:
            raise ValueError(f"Minimum group size must be at least 2, got {self.min_group_size}")
        if self.clear_bonus < 0:
            raise ValueError(f"Clear bonus must be nonnegative, got {self.clear_bonus}")

    def points_for_move(self, size: int) -> int:
        if size < self.min_group_size:
            raise ValueError(f"A group of {size} tile(s) is not a legal move")
        return (size - 2) ** 2

    def penalty_for_loss(self, remaining: int) -> int:
        if remaining < 0:
            raise ValueError(f"Remaining tile count cannot be negative, got {remaining}")
        policy = self.loss_penalty or remaining_count_penalty
        penalty = int(policy(remaining))
        if penalty < 0:
            raise ValueError(f"Loss penalty must be nonnegative, got {penalty} for {remaining} tile(s)")
        return penalty
