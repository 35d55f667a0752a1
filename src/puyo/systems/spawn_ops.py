from __future__ import annotations

import random

from esper import World

from puyo.components.piece import ActivePiece, NextPiece
from puyo.systems.piece_ops import make_pair_piece
from puyo.utils.game_state import get_active_piece, get_next_piece, get_session_config


def deal_initial_pieces(world: World, rng: random.Random) -> None:
    """Generate a fresh current and next piece and put current at the spawn anchor."""
    config = get_session_config(world)
    piece = get_active_piece(world)
    preview = get_next_piece(world)
    piece.shape = make_pair_piece(rng, config.max_colors)
    piece.x, piece.y = config.spawn_x, config.spawn_y
    preview.shape = make_pair_piece(rng, config.max_colors)


def promote_next_piece(world: World, rng: random.Random) -> ActivePiece:
    """Move the preview into play at the spawn anchor and roll a new preview."""
    config = get_session_config(world)
    piece = get_active_piece(world)
    preview: NextPiece = get_next_piece(world)
    piece.shape = preview.shape
    piece.x, piece.y = config.spawn_x, config.spawn_y
    preview.shape = make_pair_piece(rng, config.max_colors)
    return piece
