import pytest

from puyo.components.board import Board
from puyo.components.piece import ActivePiece, PieceShape
from puyo.systems.board_ops import is_blocked
from puyo.systems.rotation import (
    KICK_OFFSETS,
    ROTATE_CW,
    find_kick,
    rotated_shape,
    try_rotate,
)

# Pair hanging below the center: clockwise rotation swings the lower cell to the left column.
HANGING_PAIR = PieceShape.from_rows([[0, 0, 0], [0, 1, 0], [0, 2, 0]])
VERTICAL_BAR = PieceShape.from_rows([[0, 3, 0], [0, 3, 0], [0, 3, 0]])


def test_kick_order_is_stay_left_right_up_upleft_upright():
    assert KICK_OFFSETS == ((0, 0), (-1, 0), (1, 0), (0, -1), (-1, -1), (1, -1))


def test_rotation_against_left_wall_kicks_right():
    board = Board(rows=20, cols=10)
    piece = ActivePiece(shape=HANGING_PAIR, x=-1, y=5)
    assert not is_blocked(board, piece.shape, piece.x, piece.y)
    rotated = rotated_shape(piece.shape, ROTATE_CW)
    assert is_blocked(board, rotated, -1, 5)

    assert try_rotate(board, piece, rotated) == (0, 5)
    assert piece.shape == rotated
    assert (piece.x, piece.y) == (0, 5)
    assert not is_blocked(board, piece.shape, piece.x, piece.y)


def test_first_free_kick_wins():
    board = Board(rows=20, cols=10)
    board.set(7, 5, 1)
    assert find_kick(board, VERTICAL_BAR, 4, 5) == (-1, 0)
    board.set(7, 4, 1)
    assert find_kick(board, VERTICAL_BAR, 4, 5) == (1, 0)
    board.set(7, 6, 1)
    assert find_kick(board, VERTICAL_BAR, 4, 5) == (0, -1)


def test_fully_blocked_rotation_leaves_piece_unchanged():
    board = Board.from_rows([
        "1.1",
        "1.1",
        "1.1",
        "1.1",
        "111",
    ])
    shape = PieceShape.from_rows([[0, 2, 0], [0, 3, 0], [0, 0, 0]])
    piece = ActivePiece(shape=shape, x=0, y=2)
    assert not is_blocked(board, piece.shape, piece.x, piece.y)

    assert try_rotate(board, piece, rotated_shape(shape, ROTATE_CW)) is None
    assert piece.shape == shape
    assert (piece.x, piece.y) == (0, 2)


def test_unknown_direction_is_rejected():
    with pytest.raises(ValueError):
        rotated_shape(VERTICAL_BAR, "sideways")
