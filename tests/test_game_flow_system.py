import random

import pytest

from puyo.components.game_state import GameMode
from puyo.events.bus import EVENT_MENU_REQUEST, EVENT_NEW_GAME_REQUEST, EVENT_NEW_GAME_STARTED
from puyo.session import GameSession
from puyo.utils.game_state import get_board, get_game_state, get_session_config
from tests.helpers import load_board, set_piece, vertical_pair


def test_new_session_waits_in_menu_and_rejects_commands():
    session = GameSession(rng=random.Random(5))
    assert session.mode == GameMode.MENU
    assert not session.move_left()
    assert not session.rotate_cw()
    assert session.hard_drop() == -1
    assert session.lock() is None
    session.tick(5.0)
    assert get_board(session.world).occupied_count() == 0


def test_start_new_game_applies_difficulty():
    session = GameSession(rng=random.Random(5))
    started = []
    session.event_bus.subscribe(EVENT_NEW_GAME_STARTED, lambda s, **k: started.append(k))

    config = session.start_new_game("hard")

    assert config.max_colors == 6
    assert config.base_fall_interval == 0.6
    assert get_session_config(session.world) is config
    assert session.mode == GameMode.PLAYING
    assert get_game_state(session.world).difficulty == "hard"
    assert started == [{"difficulty": "hard", "max_colors": 6}]
    assert session.gravity.clock.base_interval == 0.6


def test_pieces_use_only_configured_colors():
    session = GameSession(rng=random.Random(11))
    session.start_new_game(max_colors=2)
    for _ in range(30):
        for shape in (session.current_piece.shape, session.next_piece):
            assert {c for _, _, c in shape.occupied()} <= {1, 2}
        session.hard_drop()
        if session.game_over:
            break


def test_first_piece_spawns_at_anchor():
    session = GameSession(rng=random.Random(5))
    session.start_new_game("easy")
    piece = session.current_piece
    assert (piece.x, piece.y) == (4, 0)
    assert [(y, x) for y, x, _ in piece.shape.occupied()] == [(0, 1), (1, 1)]


def test_start_new_game_rejects_bad_settings(session):
    with pytest.raises(ValueError):
        session.start_new_game("impossible")
    with pytest.raises(ValueError):
        session.start_new_game(max_colors=8)
    assert session.mode == GameMode.PLAYING


def test_new_game_resets_board_score_and_chain(session):
    load_board(session.world, [
        "...1......",
        "...2......",
        "1112......",
    ])
    set_piece(session.world, vertical_pair(2, 2), x=3, y=18)
    session.attempt_advance_or_lock()
    session.hard_drop()
    assert session.score > 0

    session.start_new_game("medium")

    assert session.score == 0
    assert session.level == 1
    assert session.clears == 0
    assert session.chain == 0
    assert session.last_chain == 0
    assert session.fade_timer == 0.0
    assert get_board(session.world).occupied_count() == 0
    assert get_session_config(session.world).max_colors == 5


def test_new_game_after_game_over(session):
    board = get_board(session.world)
    for row in range(1, board.rows):
        board.set(row, 5, 1 + row % 3)
    set_piece(session.world, vertical_pair(1, 2), x=-1, y=18)
    session.lock()
    assert session.game_over

    session.start_new_game("easy")

    assert session.mode == GameMode.PLAYING
    assert session.move_left()


def test_new_game_request_event_starts_game():
    session = GameSession(rng=random.Random(5))
    session.event_bus.emit(EVENT_NEW_GAME_REQUEST, difficulty="very_hard")
    assert session.mode == GameMode.PLAYING
    assert get_session_config(session.world).max_colors == 7


def test_return_to_menu(session):
    session.game_flow.return_to_menu()
    assert session.mode == GameMode.MENU
    assert not session.move_left()


def test_menu_request_event_returns_to_menu(session):
    session.event_bus.emit(EVENT_MENU_REQUEST)
    assert session.mode == GameMode.MENU
