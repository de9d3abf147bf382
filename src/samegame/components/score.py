from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    """Running player score; goes negative when the loss penalty exceeds it."""
    points: int = 0
