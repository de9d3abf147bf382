"""Entry point for the SameGame prototype.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, key, run, set_background_color

from samegame.config import LevelConfig
from samegame.constants import BACKGROUND_COLOR, WINDOW_HEIGHT, WINDOW_WIDTH
from samegame.events.bus import (
    EventBus,
    EVENT_MOUSE_MOTION_RAW,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_NEW_GAME_REQUEST,
)
from samegame.systems.game_flow_system import GameFlowSystem
from samegame.systems.input import InputSystem
from samegame.systems.level import LevelSystem
from samegame.systems.render import RenderSystem
from samegame.systems.scoring import ScoringRules
from samegame.world import create_world


class SameGameWindow(Window):
    def __init__(self, config: LevelConfig | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "SameGame")
        self.config = config or LevelConfig()
        self.event_bus = EventBus()
        self.world = create_world(self.config)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        # Rules
        self.level_system = LevelSystem(self.world, self.event_bus, ScoringRules())
        self.game_flow_system = GameFlowSystem(
            self.world,
            self.event_bus,
            self.level_system,
            self.config,
            presenter=self.render_system,
        )
        self.game_flow_system.start_new_game()

        set_background_color(BACKGROUND_COLOR)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        # A move is made when the button comes back up.
        self.event_bus.emit(
            EVENT_MOUSE_PRESS_RAW,
            x=x,
            y=y,
            button=button,
            modifiers=modifiers,
        )

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOTION_RAW, x=x, y=y)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.N:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    SameGameWindow()
    run()


if __name__ == "__main__":
    main()
