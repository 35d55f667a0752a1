from esper import World

from puyo.components.game_state import GameMode
from puyo.constants import FADE_DECAY_PER_SECOND
from puyo.events.bus import (
    EventBus,
    EVENT_NEW_GAME_STARTED,
    EVENT_SOFT_DROP_HELD,
    EVENT_TICK,
)
from puyo.systems.piece_control import PieceControlSystem
from puyo.utils.fall_clock import FallClock
from puyo.utils.game_state import get_chain_state, get_game_state, get_score_state, get_session_config


class GravityTickSystem:
    """Turns frame ticks into automatic piece advances and decays the chain text timer."""

    def __init__(self, world: World, event_bus: EventBus, piece_control: PieceControlSystem):
        self.world = world
        self.event_bus = event_bus
        self.piece_control = piece_control
        self.clock = FallClock(base_interval=get_session_config(world).base_fall_interval)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_SOFT_DROP_HELD, self.on_soft_drop_held)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)

    def on_new_game_started(self, sender, **kwargs):
        self.clock.reset(get_session_config(self.world).base_fall_interval)

    def on_soft_drop_held(self, sender, **kwargs):
        self.clock.soft_drop = bool(kwargs.get('held', False))

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            dt = 1/60
        state = get_game_state(self.world)
        if state.mode == GameMode.MENU:
            return
        self._decay_fade(dt)
        if state.mode != GameMode.PLAYING or state.input_locked:
            return
        level = get_score_state(self.world).level
        if self.clock.advance(dt, level):
            self.piece_control.attempt_advance_or_lock()

    def _decay_fade(self, dt: float) -> None:
        chain_state = get_chain_state(self.world)
        if chain_state.fade_timer > 0.0:
            chain_state.fade_timer = max(0.0, chain_state.fade_timer - FADE_DECAY_PER_SECOND * dt)
