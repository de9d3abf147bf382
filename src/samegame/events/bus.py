import logging
from typing import Dict

from blinker import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored in a variable alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, *, tolerant: bool = False, **payload):
        """Send ``payload`` to every receiver of ``name``.

        With ``tolerant=True`` a failing receiver is logged and skipped so the
        remaining receivers still run and the caller never sees the exception.
        """
        sig = self._signals.get(name)
        if not sig:
            return
        if not tolerant:
            sig.send(self, **payload)
            return
        for receiver in list(sig.receivers_for(self)):
            try:
                receiver(self, **payload)
            except Exception:
                logger.warning("Receiver %r failed while handling %s", receiver, name, exc_info=True)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS_RAW = "mouse_press_raw"  # payload: x, y, button, modifiers (window pixels)
EVENT_MOUSE_MOTION_RAW = "mouse_motion_raw"  # payload: x, y (window pixels)
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button (world units)
EVENT_MOUSE_MOVE = "mouse_move"            # payload: x, y (world units)
EVENT_HOVER_CHANGED = "hover_changed"      # payload: index=int, group=list[int]


# ============================================================================
# SELECTION & BOARD MECHANICS
# ============================================================================
EVENT_GROUP_SELECTED = "group_selected"            # payload: index=int, indices=list[int], type_id=int
EVENT_SELECTION_REJECTED = "selection_rejected"    # payload: index=int, reason=str, size=int
EVENT_GROUP_REMOVED = "group_removed"              # payload: indices=list[int], type_id=int, size=int
EVENT_TILES_MOVED = "tiles_moved"                  # payload: moves=list[(source, target)]


# ============================================================================
# SCORE & LEVEL STATE
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: points=int, delta=int, reason=str
EVENT_LEVEL_STATE_CHANGED = "level_state_changed"  # payload: previous=LevelState, new_state=LevelState
EVENT_LEVEL_CLEARED = "level_cleared"              # payload: points=int, message=str
EVENT_LEVEL_STUCK = "level_stuck"                  # payload: points=int, remaining=int, penalty=int, message=str


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: seed=int|None
EVENT_LEVEL_STARTED = "level_started"              # payload: cols=int, rows=int, type_count=int, seed=int|None
EVENT_LEVEL_DESTROYED = "level_destroyed"          # payload: reason=str
