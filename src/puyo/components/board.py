from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

EMPTY = 0


@dataclass(slots=True)
class Board:
    """Occupancy/color grid stored as a row-major flat buffer with ``cols`` stride.

    A cell holds 0 when empty or a color id (1..max_colors) when occupied, so
    occupancy and color can never disagree. Row 0 is the top of the well.
    """
    rows: int
    cols: int
    cells: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        size = self.rows * self.cols
        if not self.cells:
            self.cells = [EMPTY] * size
        elif len(self.cells) != size:
            raise ValueError(f"Board buffer has {len(self.cells)} cells, expected {size}")

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell {(row, col)} outside {self.rows}x{self.cols} board")
        return row * self.cols + col

    def get(self, row: int, col: int) -> int:
        return self.cells[self._index(row, col)]

    def set(self, row: int, col: int, color: int) -> None:
        self.cells[self._index(row, col)] = color

    def is_occupied(self, row: int, col: int) -> bool:
        return self.cells[self._index(row, col)] != EMPTY

    def occupied_count(self) -> int:
        return sum(1 for value in self.cells if value != EMPTY)

    def clear(self) -> None:
        self.cells = [EMPTY] * (self.rows * self.cols)

    def replace(self, cells: List[int]) -> None:
        """Commit a whole new buffer in one assignment."""
        if len(cells) != self.rows * self.cols:
            raise ValueError("Replacement buffer size does not match board dimensions")
        self.cells = cells

    def copy(self) -> Board:
        return Board(rows=self.rows, cols=self.cols, cells=list(self.cells))

    def to_rows(self) -> List[List[int]]:
        return [self.cells[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int] | str]) -> Board:
        """Build a board from nested ints or strings such as ``"..2.."`` ('.' is empty)."""
        parsed: List[List[int]] = []
        for line in rows:
            if isinstance(line, str):
                parsed.append([EMPTY if ch == "." else int(ch) for ch in line])
            else:
                parsed.append([int(v) for v in line])
        if not parsed:
            raise ValueError("Board needs at least one row")
        width = len(parsed[0])
        if any(len(r) != width for r in parsed):
            raise ValueError("All board rows must have the same width")
        flat = [value for r in parsed for value in r]
        return cls(rows=len(parsed), cols=width, cells=flat)
