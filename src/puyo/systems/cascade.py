from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Tuple

from esper import World

from puyo.components.game_state import GameMode
from puyo.constants import (
    CHAIN_MULTIPLIER_STEP,
    CLEARS_PER_LEVEL,
    FADE_ARMED,
    POINTS_PER_CELL,
)
from puyo.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_OVER,
    EVENT_GROUPS_CLEARED,
    EVENT_LEVEL_UP,
    EVENT_PIECE_LOCK,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
    EVENT_SETTLE_STEP,
)
from puyo.systems.board_ops import (
    find_groups,
    is_blocked,
    place_piece,
    remove_groups,
    settle_to_fixed_point,
)
from puyo.systems.spawn_ops import promote_next_piece
from puyo.utils.game_state import (
    get_active_piece,
    get_board,
    get_chain_state,
    get_game_state,
    get_score_state,
    get_session_config,
    set_game_mode,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class CascadeResult:
    """Outcome of one lock-in."""

    chain: int = 0
    cleared: int = 0
    groups: int = 0
    score_gained: int = 0
    game_over: bool = False
    waves: List[List[List[Position]]] = field(default_factory=list)


def chain_multiplier(chain: int) -> float:
    return 1.0 + CHAIN_MULTIPLIER_STEP * chain


def group_score(size: int, multiplier: float) -> int:
    return int(size * POINTS_PER_CELL * multiplier)


class CascadeSystem:
    """Fuses the falling piece into the board and resolves every clear/settle wave it causes.

    Runs synchronously from lock-in to the game-over test. Every wave and every
    settle sub-step is announced on the bus before the next one starts, so
    subscribers (the renderer) observe intermediate boards.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_PIECE_LOCK, self.on_piece_lock)

    def on_piece_lock(self, sender, **kwargs):
        state = get_game_state(self.world)
        if state.mode != GameMode.PLAYING or state.input_locked:
            return
        self.lock_and_cascade()

    def lock_and_cascade(self) -> CascadeResult:
        board = get_board(self.world)
        config = get_session_config(self.world)
        state = get_game_state(self.world)
        chain_state = get_chain_state(self.world)
        result = CascadeResult()

        state.input_locked = True
        try:
            piece = get_active_piece(self.world)
            locked_at = (piece.x, piece.y)
            written = place_piece(board, piece.shape, piece.x, piece.y)
            self.event_bus.emit(EVENT_PIECE_LOCKED, x=locked_at[0], y=locked_at[1], cells=written)
            promote_next_piece(self.world, self._rng)
            self.event_bus.emit(EVENT_PIECE_SPAWNED, x=piece.x, y=piece.y)

            chain_state.chain = 0
            while True:
                groups = self._clear_wave(result)
                if not groups:
                    break
                chain = chain_state.chain
                settle_to_fixed_point(board, on_step=self._settle_observer(chain))

            # Covers a lock that left floating cells without firing any wave.
            settle_to_fixed_point(board, on_step=self._settle_observer(chain_state.chain))

            if chain_state.chain == 0:
                chain_state.last_chain = 0
                chain_state.fade_timer = 0.0
            result.chain = chain_state.chain
        finally:
            state.input_locked = False

        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=result.chain, cleared=result.cleared)
        if result.chain:
            logger.debug("Lock at %s resolved a %d-chain clearing %d cells", locked_at, result.chain, result.cleared)

        if is_blocked(board, piece.shape, config.spawn_x, config.spawn_y):
            result.game_over = True
            set_game_mode(self.world, GameMode.GAME_OVER)
            scores = get_score_state(self.world)
            logger.info("Game over: score=%d level=%d clears=%d", scores.score, scores.level, scores.clears)
            self.event_bus.emit(EVENT_GAME_OVER, score=scores.score, level=scores.level, clears=scores.clears)

        return result

    def _clear_wave(self, result: CascadeResult) -> List[List[Position]]:
        """Remove every qualifying group once and apply its scoring; return the groups removed."""
        board = get_board(self.world)
        config = get_session_config(self.world)
        chain_state = get_chain_state(self.world)
        scores = get_score_state(self.world)

        multiplier = chain_multiplier(chain_state.chain)
        groups = find_groups(board, config.min_group_size)
        cells = [(row, col, board.get(row, col)) for group in groups for row, col in group]
        cleared = remove_groups(board, groups)
        if cleared == 0:
            return []

        chain_state.chain += 1
        delta = sum(group_score(len(group), multiplier) for group in groups)
        scores.score += delta
        scores.clears += len(groups)
        if scores.clears // CLEARS_PER_LEVEL >= scores.level:
            scores.level += 1
            logger.info("Level up to %d after %d clears", scores.level, scores.clears)
            self.event_bus.emit(EVENT_LEVEL_UP, level=scores.level, clears=scores.clears)
        chain_state.last_chain = chain_state.chain
        chain_state.fade_timer = FADE_ARMED

        result.cleared += cleared
        result.groups += len(groups)
        result.score_gained += delta
        result.waves.append(groups)

        positions = sorted({pos for group in groups for pos in group})
        self.event_bus.emit(
            EVENT_GROUPS_CLEARED,
            groups=groups,
            cells=cells,
            cleared=cleared,
            chain=chain_state.chain,
            multiplier=multiplier,
        )
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=chain_state.chain, positions=positions)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=scores.score, delta=delta)
        return groups

    def _settle_observer(self, chain: int):
        steps = {"count": 0}

        def on_step(board):
            steps["count"] += 1
            self.event_bus.emit(EVENT_SETTLE_STEP, step=steps["count"], chain=chain)

        return on_step
