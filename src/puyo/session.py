from __future__ import annotations

import random
from typing import List, Tuple

from esper import World

from puyo.components.game_state import GameMode
from puyo.components.piece import ActivePiece, PieceShape
from puyo.components.session_config import SessionConfig
from puyo.events.bus import EVENT_TICK, EventBus
from puyo.systems.board_ops import ghost_cells
from puyo.systems.cascade import CascadeResult, CascadeSystem
from puyo.systems.game_flow import GameFlowSystem
from puyo.systems.gravity_tick import GravityTickSystem
from puyo.systems.piece_control import PieceControlSystem
from puyo.utils.game_state import (
    get_active_piece,
    get_board,
    get_chain_state,
    get_game_state,
    get_next_piece,
    get_score_state,
)
from puyo.world import create_world


class GameSession:
    """Owns the event bus, the world and the engine systems for one player.

    All mutation goes through the command methods; the query properties read
    the world components directly.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world: World = create_world(config, rng=rng)
        self.game_flow = GameFlowSystem(self.world, self.event_bus)
        self.piece_control = PieceControlSystem(self.world, self.event_bus)
        self.cascade = CascadeSystem(self.world, self.event_bus)
        self.gravity = GravityTickSystem(self.world, self.event_bus, self.piece_control)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_new_game(
        self,
        difficulty: str | None = None,
        *,
        max_colors: int | None = None,
        base_fall_interval: float | None = None,
    ) -> SessionConfig:
        return self.game_flow.start_new_game(
            difficulty,
            max_colors=max_colors,
            base_fall_interval=base_fall_interval,
        )

    def move_left(self) -> bool:
        return self.piece_control.move_left()

    def move_right(self) -> bool:
        return self.piece_control.move_right()

    def rotate_cw(self) -> bool:
        return self.piece_control.rotate_cw()

    def rotate_ccw(self) -> bool:
        return self.piece_control.rotate_ccw()

    def soft_drop_tick(self) -> bool:
        return self.piece_control.soft_drop_tick()

    def hard_drop(self) -> int:
        return self.piece_control.hard_drop()

    def attempt_advance_or_lock(self) -> bool:
        return self.piece_control.attempt_advance_or_lock()

    def lock(self) -> CascadeResult | None:
        """Lock the piece where it is, regardless of support."""
        state = get_game_state(self.world)
        if state.mode != GameMode.PLAYING or state.input_locked:
            return None
        return self.cascade.lock_and_cascade()

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def board_rows(self) -> List[List[int]]:
        return get_board(self.world).to_rows()

    @property
    def current_piece(self) -> ActivePiece:
        return get_active_piece(self.world)

    @property
    def next_piece(self) -> PieceShape:
        return get_next_piece(self.world).shape

    @property
    def score(self) -> int:
        return get_score_state(self.world).score

    @property
    def level(self) -> int:
        return get_score_state(self.world).level

    @property
    def clears(self) -> int:
        return get_score_state(self.world).clears

    @property
    def chain(self) -> int:
        return get_chain_state(self.world).chain

    @property
    def last_chain(self) -> int:
        return get_chain_state(self.world).last_chain

    @property
    def fade_timer(self) -> float:
        return get_chain_state(self.world).fade_timer

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    @property
    def game_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER

    def ghost_cells(self) -> List[Tuple[int, int, int]]:
        piece = get_active_piece(self.world)
        return ghost_cells(get_board(self.world), piece.shape, piece.x, piece.y)
