import random

from esper import World

from puyo.components.board import Board
from puyo.components.chain_state import ChainState
from puyo.components.game_state import GameMode, GameState
from puyo.components.piece import ActivePiece, NextPiece, PieceShape
from puyo.components.score_state import ScoreState
from puyo.components.session_config import SessionConfig


def create_world(
    config: SessionConfig | None = None,
    initial_mode: GameMode = GameMode.MENU,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build the world with one state entity, one board entity and one piece entity.

    Pieces start empty; GameFlowSystem deals them when a game starts.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or SessionConfig()

    world.create_entity(
        GameState(mode=initial_mode),
        ScoreState(),
        ChainState(),
        config,
    )
    world.create_entity(Board(rows=config.rows, cols=config.cols))
    world.create_entity(
        ActivePiece(shape=PieceShape(), x=config.spawn_x, y=config.spawn_y),
        NextPiece(shape=PieceShape()),
    )
    return world
