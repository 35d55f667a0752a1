from __future__ import annotations

from typing import Sequence

from esper import World

from puyo.components.board import Board
from puyo.components.piece import PieceShape
from puyo.utils.game_state import get_active_piece, get_board


def vertical_pair(top: int, bottom: int) -> PieceShape:
    return PieceShape.from_rows([[0, top, 0], [0, bottom, 0], [0, 0, 0]])


def load_board(world: World, rows: Sequence[str]) -> Board:
    """Overwrite the bottom of the world's board with the given rows ('.' is empty).

    ``rows`` may be shorter than the board; it is aligned to the bottom row.
    """
    board = get_board(world)
    pattern = Board.from_rows(rows)
    if pattern.cols != board.cols:
        raise ValueError("pattern width must match the board")
    board.clear()
    offset = board.rows - pattern.rows
    for row in range(pattern.rows):
        for col in range(pattern.cols):
            board.set(offset + row, col, pattern.get(row, col))
    return board


def set_piece(world: World, shape: PieceShape, x: int, y: int) -> None:
    piece = get_active_piece(world)
    piece.shape = shape
    piece.x = x
    piece.y = y
