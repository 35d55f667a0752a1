from __future__ import annotations

from typing import Tuple

from puyo.components.board import Board
from puyo.components.piece import ActivePiece, PieceShape
from puyo.systems.board_ops import is_blocked
from puyo.systems.piece_ops import rotate_clockwise, rotate_counterclockwise

# (dx, dy) anchor offsets in priority order: stay, left, right, up, up-left, up-right.
KICK_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 0),
    (-1, 0),
    (1, 0),
    (0, -1),
    (-1, -1),
    (1, -1),
)

ROTATE_CW = "cw"
ROTATE_CCW = "ccw"


def rotated_shape(shape: PieceShape, direction: str) -> PieceShape:
    if direction == ROTATE_CW:
        return rotate_clockwise(shape)
    if direction == ROTATE_CCW:
        return rotate_counterclockwise(shape)
    raise ValueError(f"Unknown rotation direction {direction!r}")


def find_kick(board: Board, rotated: PieceShape, x: int, y: int) -> Tuple[int, int] | None:
    """Return the first kick offset that leaves ``rotated`` unblocked, or None."""
    for dx, dy in KICK_OFFSETS:
        if not is_blocked(board, rotated, x + dx, y + dy):
            return dx, dy
    return None


def try_rotate(board: Board, piece: ActivePiece, rotated: PieceShape) -> Tuple[int, int] | None:
    """Commit ``rotated`` into piece at the first free kick position and return the new anchor.

    The piece is left untouched when all candidates are blocked.
    """
    kick = find_kick(board, rotated, piece.x, piece.y)
    if kick is None:
        return None
    piece.shape = rotated
    piece.x += kick[0]
    piece.y += kick[1]
    return piece.x, piece.y
