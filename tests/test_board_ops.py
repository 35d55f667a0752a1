from collections import Counter

from puyo.components.board import EMPTY, Board
from puyo.components.piece import PieceShape
from puyo.systems.board_ops import (
    find_groups,
    ghost_cells,
    is_blocked,
    place_piece,
    remove_groups,
    settle_step,
    settle_to_fixed_point,
)

PAIR = PieceShape.from_rows([[0, 1, 0], [0, 2, 0], [0, 0, 0]])
BAR = PieceShape.from_rows([[0, 0, 0], [3, 3, 3], [0, 0, 0]])


def blocked_by_hand(board, shape, x, y):
    for py, px, _ in shape.occupied():
        row, col = y + py, x + px
        if not 0 <= col < board.cols or row >= board.rows:
            return True
        if row >= 0 and board.cells[row * board.cols + col]:
            return True
    return False


def column_stacks(board):
    """Colors of each column read bottom-up, ignoring gaps."""
    return [
        [board.get(r, c) for r in range(board.rows - 1, -1, -1) if board.get(r, c)]
        for c in range(board.cols)
    ]


def test_is_blocked_matches_brute_force_on_every_anchor():
    board = Board.from_rows([
        ".....",
        "..1..",
        ".....",
        "2...3",
        "22.33",
    ])
    for shape in (PAIR, BAR):
        for x in range(-3, board.cols + 2):
            for y in range(-3, board.rows + 2):
                assert is_blocked(board, shape, x, y) == blocked_by_hand(board, shape, x, y), (x, y)


def test_cells_above_the_top_do_not_block():
    board = Board(rows=4, cols=4)
    assert not is_blocked(board, PAIR, 1, -1)
    assert not is_blocked(board, PAIR, 1, -2)
    assert is_blocked(board, PAIR, -2, -1)


def test_place_piece_clips_cells_above_the_top():
    board = Board(rows=4, cols=4)
    written = place_piece(board, PAIR, 1, -1)
    assert written == [(0, 2, 2)]
    assert board.occupied_count() == 1


def test_ghost_drops_each_cell_and_stacks_shared_columns():
    board = Board.from_rows([
        "....",
        "....",
        "....",
        "..1.",
    ])
    ghosts = ghost_cells(board, PAIR, 1, 0)
    assert sorted(ghosts) == [(1, 2, 1), (2, 2, 2)]
    assert board.occupied_count() == 1


def test_ghost_of_horizontal_piece_lands_per_column():
    board = Board.from_rows([
        "....",
        "....",
        "....",
        ".1..",
    ])
    ghosts = ghost_cells(board, BAR, 0, 0)
    assert sorted(ghosts) == [(2, 1, 3), (3, 0, 3), (3, 2, 3)]


def test_settle_step_drops_through_empty_run_below():
    board = Board.from_rows(["1.", "..", "2.", ".."])
    assert settle_step(board)
    assert board.to_rows() == [[0, 0], [1, 0], [0, 0], [2, 0]]
    assert settle_step(board)
    assert board.to_rows() == [[0, 0], [0, 0], [1, 0], [2, 0]]
    assert not settle_step(board)


def test_settle_to_fixed_point_leaves_no_floating_cells():
    board = Board.from_rows([
        "1.2.3",
        ".4...",
        "5..1.",
        "..2..",
        "3...4",
        ".....",
    ])
    before = board.occupied_count()
    stacks = column_stacks(board)
    steps = []
    count = settle_to_fixed_point(board, on_step=lambda b: steps.append(b.occupied_count()))
    assert count == len(steps) > 0
    assert not settle_step(board)
    assert board.occupied_count() == before
    assert column_stacks(board) == stacks
    for r in range(board.rows - 1):
        for c in range(board.cols):
            if board.get(r, c):
                assert board.get(r + 1, c) != EMPTY


def test_settle_on_settled_board_reports_no_steps():
    board = Board.from_rows(["...", "1..", "12."])
    assert settle_to_fixed_point(board) == 0
    assert board.to_rows() == [[0, 0, 0], [1, 0, 0], [1, 2, 0]]


def test_vertical_group_of_four_is_found_and_removed():
    board = Board(rows=20, cols=10)
    for row in range(16, 20):
        board.set(row, 3, 2)
    groups = find_groups(board, 4)
    assert groups == [[(16, 3), (17, 3), (18, 3), (19, 3)]]
    assert remove_groups(board, groups) == 4
    assert board.occupied_count() == 0


def test_group_below_threshold_is_left_alone():
    board = Board.from_rows([
        "....",
        ".1..",
        ".1..",
        ".1..",
    ])
    assert find_groups(board, 4) == []
    assert board.occupied_count() == 3
    assert find_groups(board, 3) == [[(1, 1), (2, 1), (3, 1)]]


def test_groups_are_maximal_and_ignore_diagonals():
    board = Board.from_rows([
        "1....",
        ".1...",
        ".111.",
        ".2.11",
    ])
    groups = find_groups(board, 4)
    assert groups == [[(1, 1), (2, 1), (2, 2), (2, 3), (3, 3), (3, 4)]]


def test_touching_colors_form_separate_groups():
    board = Board.from_rows([
        "1122",
        "1122",
    ])
    groups = find_groups(board, 4)
    assert len(groups) == 2
    colors = sorted(board.get(*group[0]) for group in groups)
    assert colors == [1, 2]


def test_clear_and_settle_conserve_cells_per_color():
    board = Board.from_rows([
        "3....",
        "1.2..",
        "1.2..",
        "1.23.",
        "14233",
    ])
    before = Counter(v for v in board.cells if v)
    groups = find_groups(board, 4)
    removed_cells = Counter(board.get(r, c) for group in groups for r, c in group)
    removed = remove_groups(board, groups)
    assert removed == sum(len(g) for g in groups) == 8
    settle_to_fixed_point(board)
    after = Counter(v for v in board.cells if v)
    assert after + removed_cells == before
