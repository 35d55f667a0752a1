from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from puyo.constants import PIECE_SIZE


@dataclass(frozen=True, slots=True)
class PieceShape:
    """Immutable 3x3 occupancy+color frame, row-major; 0 marks an empty cell."""
    cells: Tuple[int, ...] = (0,) * (PIECE_SIZE * PIECE_SIZE)

    def __post_init__(self) -> None:
        if len(self.cells) != PIECE_SIZE * PIECE_SIZE:
            raise ValueError(f"PieceShape needs {PIECE_SIZE * PIECE_SIZE} cells, got {len(self.cells)}")

    def at(self, y: int, x: int) -> int:
        return self.cells[y * PIECE_SIZE + x]

    def occupied(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (y, x, color) for every filled cell of the frame."""
        for index, color in enumerate(self.cells):
            if color:
                yield index // PIECE_SIZE, index % PIECE_SIZE, color

    @classmethod
    def from_rows(cls, rows) -> PieceShape:
        return cls(cells=tuple(int(v) for row in rows for v in row))


@dataclass(slots=True)
class ActivePiece:
    """The falling piece: its shape and the board anchor of its frame's top-left cell."""
    shape: PieceShape
    x: int
    y: int


@dataclass(slots=True)
class NextPiece:
    """Preview piece promoted to ActivePiece at the next lock-in."""
    shape: PieceShape
