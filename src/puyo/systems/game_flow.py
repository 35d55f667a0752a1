"""High-level coordinator for starting games and mode transitions."""
from __future__ import annotations

import logging
import random
from dataclasses import replace

from esper import World

from puyo.components.board import Board
from puyo.components.chain_state import ChainState
from puyo.components.game_state import GameMode
from puyo.components.score_state import ScoreState
from puyo.components.session_config import SessionConfig
from puyo.constants import DEFAULT_DIFFICULTY, get_difficulty
from puyo.events.bus import EVENT_MENU_REQUEST, EVENT_NEW_GAME_REQUEST, EVENT_NEW_GAME_STARTED, EventBus
from puyo.systems.spawn_ops import deal_initial_pieces
from puyo.utils.game_state import get_game_state, get_session_config, set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Resets the session for a new game and moves between menu, play and game over."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_MENU_REQUEST, self._on_menu_request)

    def _on_new_game_request(self, sender, **payload) -> None:
        self.start_new_game(
            difficulty=payload.get("difficulty"),
            max_colors=payload.get("max_colors"),
        )

    def _on_menu_request(self, sender, **payload) -> None:
        self.return_to_menu()

    def start_new_game(
        self,
        difficulty: str | None = None,
        *,
        max_colors: int | None = None,
        base_fall_interval: float | None = None,
    ) -> SessionConfig:
        """Apply difficulty settings, clear all session state and deal the first pieces.

        Explicit ``max_colors``/``base_fall_interval`` override the difficulty table.
        """
        name = difficulty or DEFAULT_DIFFICULTY
        preset = get_difficulty(name)
        current = get_session_config(self.world)
        config = replace(
            current,
            max_colors=preset.max_colors if max_colors is None else int(max_colors),
            base_fall_interval=preset.base_fall_interval if base_fall_interval is None else float(base_fall_interval),
        )
        self._replace_singleton(SessionConfig, config)
        self._replace_singleton(Board, Board(rows=config.rows, cols=config.cols))
        self._replace_singleton(ScoreState, ScoreState())
        self._replace_singleton(ChainState, ChainState())

        state = get_game_state(self.world)
        state.input_locked = False
        state.difficulty = name
        deal_initial_pieces(self.world, self._rng)
        set_game_mode(self.world, GameMode.PLAYING)
        logger.info("New game: difficulty=%s colors=%d fall=%.2fs", name, config.max_colors, config.base_fall_interval)
        self.event_bus.emit(EVENT_NEW_GAME_STARTED, difficulty=name, max_colors=config.max_colors)
        return config

    def return_to_menu(self) -> None:
        set_game_mode(self.world, GameMode.MENU)

    def _replace_singleton(self, component_type, component) -> None:
        for entity, _ in self.world.get_component(component_type):
            self.world.add_component(entity, component)
            return
        raise RuntimeError(f"{component_type.__name__} component not found in world")
