from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from puyo.components.board import EMPTY, Board
from puyo.components.piece import PieceShape
from puyo.constants import MIN_GROUP_SIZE

Position = Tuple[int, int]
ColorEntry = Tuple[int, int, int]

# Row/col deltas for 4-directional adjacency.
NEIGHBOURS: Tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def is_blocked(board: Board, shape: PieceShape, x: int, y: int) -> bool:
    """Return True if the shape anchored at (x, y) leaves the well or overlaps a settled cell.

    Cells above the top row never block so pieces can spawn partly off-grid.
    """
    for py, px, _ in shape.occupied():
        col = x + px
        row = y + py
        if col < 0 or col >= board.cols or row >= board.rows:
            return True
        if row >= 0 and board.is_occupied(row, col):
            return True
    return False


def place_piece(board: Board, shape: PieceShape, x: int, y: int) -> List[ColorEntry]:
    """Write the shape's colors into the board, clipped to in-bounds cells.

    No collision check is made; callers confirm ``not is_blocked`` first.
    """
    written: List[ColorEntry] = []
    for py, px, color in shape.occupied():
        row, col = y + py, x + px
        if board.in_bounds(row, col):
            board.set(row, col, color)
            written.append((row, col, color))
    return written


def ghost_cells(board: Board, shape: PieceShape, x: int, y: int) -> List[ColorEntry]:
    """Landing preview: every piece cell dropped on its own to the lowest free row of its column.

    Lower cells land first, so two cells sharing a column stack instead of overlapping.
    """
    ghosts: List[ColorEntry] = []
    taken: set[Position] = set()

    def free(row: int, col: int) -> bool:
        if row < 0:
            return True
        return board.get(row, col) == EMPTY and (row, col) not in taken

    for py, px, color in sorted(shape.occupied(), key=lambda cell: -cell[0]):
        row, col = y + py, x + px
        if col < 0 or col >= board.cols:
            continue
        while row + 1 < board.rows and free(row + 1, col):
            row += 1
        if board.in_bounds(row, col):
            taken.add((row, col))
            ghosts.append((row, col, color))
    return ghosts


def settle_step(board: Board) -> bool:
    """Drop every occupied cell as far as the current board allows, in one atomic pass.

    Each cell falls through the run of empty cells directly below it in the
    board as it was before the pass; results go into a scratch buffer that is
    committed at the end. Returns True if anything moved.
    """
    rows, cols = board.rows, board.cols
    source = board.cells
    scratch = [EMPTY] * (rows * cols)
    moved = False
    for row in range(rows - 1, -1, -1):
        for col in range(cols):
            color = source[row * cols + col]
            if color == EMPTY:
                continue
            target = row
            while target + 1 < rows and source[(target + 1) * cols + col] == EMPTY:
                target += 1
            if target != row:
                moved = True
            scratch[target * cols + col] = color
    board.replace(scratch)
    return moved


def settle_to_fixed_point(board: Board, on_step: Optional[Callable[[Board], None]] = None) -> int:
    """Run settle_step until nothing moves; return how many steps moved cells.

    ``on_step`` is called after every moving step so a renderer can redraw.
    """
    steps = 0
    while settle_step(board):
        steps += 1
        if on_step is not None:
            on_step(board)
    return steps


def find_groups(board: Board, min_size: int = MIN_GROUP_SIZE) -> List[List[Position]]:
    """Return every maximal 4-connected same-color group with at least min_size cells.

    Groups are discovered in row-major scan order; each group's positions are sorted.
    """
    rows, cols = board.rows, board.cols
    cells = board.cells
    visited = [False] * (rows * cols)
    groups: List[List[Position]] = []
    for row in range(rows):
        for col in range(cols):
            start = row * cols + col
            color = cells[start]
            if color == EMPTY or visited[start]:
                continue
            visited[start] = True
            group: List[Position] = []
            pending: List[Position] = [(row, col)]
            while pending:
                r, c = pending.pop()
                group.append((r, c))
                for dr, dc in NEIGHBOURS:
                    nr, nc = r + dr, c + dc
                    if not (0 <= nr < rows and 0 <= nc < cols):
                        continue
                    idx = nr * cols + nc
                    if visited[idx] or cells[idx] != color:
                        continue
                    visited[idx] = True
                    pending.append((nr, nc))
            if len(group) >= min_size:
                groups.append(sorted(group))
    return groups


def remove_groups(board: Board, groups: Sequence[Sequence[Position]]) -> int:
    """Empty every cell of every group; return the number of cells cleared."""
    removed = 0
    for group in groups:
        for row, col in group:
            if board.get(row, col) != EMPTY:
                board.set(row, col, EMPTY)
                removed += 1
    return removed
