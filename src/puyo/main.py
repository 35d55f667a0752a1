"""Entry point for the Puyo Cascade falling-block puzzle.

Sets up the game session, input and render systems, and the Arcade window.
"""
import logging

import arcade
from arcade import Window, run, set_background_color, color

from puyo.components.game_state import GameMode
from puyo.constants import DIFFICULTY_ORDER
from puyo.events.bus import EVENT_KEY_PRESS, EVENT_KEY_RELEASE, EVENT_QUIT_REQUEST, EVENT_TICK
from puyo.session import GameSession
from puyo.systems.input import (
    ACTION_HARD_DROP,
    ACTION_LEFT,
    ACTION_QUIT,
    ACTION_RIGHT,
    ACTION_ROTATE_CCW,
    ACTION_ROTATE_CW,
    ACTION_SOFT_DROP,
    KeyboardInputSystem,
)
from puyo.systems.render import RenderSystem

KEY_MAP = {
    arcade.key.LEFT: ACTION_LEFT,
    arcade.key.RIGHT: ACTION_RIGHT,
    arcade.key.Z: ACTION_ROTATE_CCW,
    arcade.key.X: ACTION_ROTATE_CW,
    arcade.key.UP: ACTION_HARD_DROP,
    arcade.key.DOWN: ACTION_SOFT_DROP,
    arcade.key.Q: ACTION_QUIT,
}
MENU_KEYS = dict(zip((arcade.key.KEY_1, arcade.key.KEY_2, arcade.key.KEY_3, arcade.key.KEY_4), DIFFICULTY_ORDER))


class PuyoWindow(Window):
    def __init__(self):
        super().__init__(640, 680, "Puyo Cascade")
        self.set_update_rate(1/60)
        self.session = GameSession()
        self.event_bus = self.session.event_bus
        self.world = self.session.world
        self.input_system = KeyboardInputSystem(self.world, self.event_bus, KEY_MAP, MENU_KEYS)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.event_bus.subscribe(EVENT_QUIT_REQUEST, self.on_quit_request)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        if self.session.mode != GameMode.MENU:
            self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def on_key_release(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_RELEASE, symbol=symbol, modifiers=modifiers)

    def on_quit_request(self, sender, **kwargs):
        self.close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    PuyoWindow()
    run()

if __name__ == "__main__":
    main()
