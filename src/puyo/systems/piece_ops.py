from __future__ import annotations

import random
from typing import List

from puyo.components.piece import PieceShape
from puyo.constants import PIECE_SIZE

_LAST = PIECE_SIZE - 1


def is_corner(y: int, x: int) -> bool:
    return y in (0, _LAST) and x in (0, _LAST)


def rotate_clockwise(shape: PieceShape) -> PieceShape:
    """Cell (y, x) of the result comes from (2-x, y) of the source; corners stay empty."""
    out: List[int] = []
    for y in range(PIECE_SIZE):
        for x in range(PIECE_SIZE):
            out.append(0 if is_corner(y, x) else shape.at(_LAST - x, y))
    return PieceShape(cells=tuple(out))


def rotate_counterclockwise(shape: PieceShape) -> PieceShape:
    """Cell (y, x) of the result comes from (x, 2-y) of the source; corners stay empty."""
    out: List[int] = []
    for y in range(PIECE_SIZE):
        for x in range(PIECE_SIZE):
            out.append(0 if is_corner(y, x) else shape.at(x, _LAST - y))
    return PieceShape(cells=tuple(out))


def make_pair_piece(rng: random.Random, max_colors: int) -> PieceShape:
    """Vertical two-cell piece in the middle column; each cell gets an independent color."""
    cells = [0] * (PIECE_SIZE * PIECE_SIZE)
    cells[0 * PIECE_SIZE + 1] = rng.randint(1, max_colors)
    cells[1 * PIECE_SIZE + 1] = rng.randint(1, max_colors)
    return PieceShape(cells=tuple(cells))
