from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from puyo.components.board import Board
from puyo.components.chain_state import ChainState
from puyo.components.game_state import GameMode, GameState
from puyo.components.piece import ActivePiece, NextPiece
from puyo.components.score_state import ScoreState
from puyo.components.session_config import SessionConfig

T = TypeVar("T")


def get_singleton(world: World, component_type: Type[T]) -> T:
    """Return the single instance of component_type, raising when the world lacks it."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found in world")


def get_board(world: World) -> Board:
    return get_singleton(world, Board)


def get_active_piece(world: World) -> ActivePiece:
    return get_singleton(world, ActivePiece)


def get_next_piece(world: World) -> NextPiece:
    return get_singleton(world, NextPiece)


def get_score_state(world: World) -> ScoreState:
    return get_singleton(world, ScoreState)


def get_chain_state(world: World) -> ChainState:
    return get_singleton(world, ChainState)


def get_game_state(world: World) -> GameState:
    return get_singleton(world, GameState)


def get_session_config(world: World) -> SessionConfig:
    return get_singleton(world, SessionConfig)


def set_game_mode(world: World, mode: GameMode) -> GameMode:
    """Update the global game mode and return the previous one."""
    state = get_game_state(world)
    previous = state.mode
    state.mode = mode
    return previous


def accepts_input(world: World) -> bool:
    """True when a piece command may change the board: playing and not mid-cascade."""
    state = get_game_state(world)
    return state.mode == GameMode.PLAYING and not state.input_locked
