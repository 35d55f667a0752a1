from typing import Dict, Mapping

from esper import World

from puyo.components.game_state import GameMode
from puyo.events.bus import (
    EventBus,
    EVENT_HARD_DROP_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_KEY_RELEASE,
    EVENT_MENU_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PIECE_MOVE_REQUEST,
    EVENT_PIECE_ROTATE_REQUEST,
    EVENT_QUIT_REQUEST,
    EVENT_SOFT_DROP_HELD,
)
from puyo.systems.rotation import ROTATE_CCW, ROTATE_CW
from puyo.utils.game_state import get_game_state

ACTION_LEFT = "left"
ACTION_RIGHT = "right"
ACTION_ROTATE_CW = "rotate_cw"
ACTION_ROTATE_CCW = "rotate_ccw"
ACTION_HARD_DROP = "hard_drop"
ACTION_SOFT_DROP = "soft_drop"
ACTION_QUIT = "quit"


class KeyboardInputSystem:
    """Translates raw key events into piece commands, menu picks and mode changes.

    Key codes are injected by the window so this module never imports arcade.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        key_map: Mapping[int, str],
        menu_keys: Mapping[int, str] | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.key_map: Dict[int, str] = dict(key_map)
        self.menu_keys: Dict[int, str] = dict(menu_keys or {})
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_KEY_RELEASE, self.on_key_release)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        mode = get_game_state(self.world).mode
        action = self.key_map.get(symbol)
        if action == ACTION_QUIT:
            self.event_bus.emit(EVENT_QUIT_REQUEST)
            return
        if mode == GameMode.MENU:
            difficulty = self.menu_keys.get(symbol)
            if difficulty is not None:
                self.event_bus.emit(EVENT_NEW_GAME_REQUEST, difficulty=difficulty)
            return
        if mode == GameMode.GAME_OVER:
            self.event_bus.emit(EVENT_MENU_REQUEST)
            return
        if action == ACTION_LEFT:
            self.event_bus.emit(EVENT_PIECE_MOVE_REQUEST, dx=-1)
        elif action == ACTION_RIGHT:
            self.event_bus.emit(EVENT_PIECE_MOVE_REQUEST, dx=1)
        elif action == ACTION_ROTATE_CW:
            self.event_bus.emit(EVENT_PIECE_ROTATE_REQUEST, direction=ROTATE_CW)
        elif action == ACTION_ROTATE_CCW:
            self.event_bus.emit(EVENT_PIECE_ROTATE_REQUEST, direction=ROTATE_CCW)
        elif action == ACTION_HARD_DROP:
            self.event_bus.emit(EVENT_HARD_DROP_REQUEST)
        elif action == ACTION_SOFT_DROP:
            self.event_bus.emit(EVENT_SOFT_DROP_HELD, held=True)

    def on_key_release(self, sender, **kwargs):
        if self.key_map.get(kwargs.get('symbol')) == ACTION_SOFT_DROP:
            self.event_bus.emit(EVENT_SOFT_DROP_HELD, held=False)
