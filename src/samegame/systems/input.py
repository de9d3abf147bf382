from samegame.constants import MOUSE_BUTTON_LEFT
from samegame.events.bus import (
    EventBus,
    EVENT_MOUSE_MOTION_RAW,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_PRESS_RAW,
)
from samegame.systems.board_ops import get_board
from samegame.ui.layout import compute_view


class InputSystem:
    """Converts raw window mouse input (pixels) into world-space events.

    This is the one input-dispatch context of the game: the level only ever
    sees world coordinates on EVENT_MOUSE_PRESS / EVENT_MOUSE_MOVE.
    """
    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world  # optional; lets the view fit the current board
        self.event_bus.subscribe(EVENT_MOUSE_PRESS_RAW, self.on_mouse_press_raw)
        self.event_bus.subscribe(EVENT_MOUSE_MOTION_RAW, self.on_mouse_motion_raw)

    def on_mouse_press_raw(self, sender, **kwargs):
        point = self._to_world(kwargs.get('x'), kwargs.get('y'))
        if point is None:
            return
        try:
            button = int(kwargs.get('button', MOUSE_BUTTON_LEFT))
        except (TypeError, ValueError):
            return
        # Only the left button makes moves; other buttons are left to other listeners.
        if button != MOUSE_BUTTON_LEFT:
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=point[0], y=point[1], button=button)

    def on_mouse_motion_raw(self, sender, **kwargs):
        point = self._to_world(kwargs.get('x'), kwargs.get('y'))
        if point is None:
            return
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=point[0], y=point[1])

    def _to_world(self, x, y):
        if x is None or y is None:
            return None
        try:
            sx = float(x)
            sy = float(y)
        except (TypeError, ValueError):
            return None
        board = get_board(self.world) if self.world is not None else None
        view = compute_view(self.window.width, self.window.height, board)
        return view.to_world(sx, sy)
