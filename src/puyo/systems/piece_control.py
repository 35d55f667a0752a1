from esper import World

from puyo.events.bus import (
    EventBus,
    EVENT_HARD_DROP_REQUEST,
    EVENT_PIECE_LOCK,
    EVENT_PIECE_MOVE_REQUEST,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_ROTATE_REQUEST,
    EVENT_PIECE_ROTATED,
)
from puyo.systems.board_ops import is_blocked
from puyo.systems.rotation import ROTATE_CCW, ROTATE_CW, rotated_shape, try_rotate
from puyo.utils.game_state import accepts_input, get_active_piece, get_board


class PieceControlSystem:
    """Moves and rotates the falling piece; a False return means the request was rejected."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_PIECE_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_PIECE_ROTATE_REQUEST, self.on_rotate_request)
        self.event_bus.subscribe(EVENT_HARD_DROP_REQUEST, self.on_hard_drop_request)

    def on_move_request(self, sender, **kwargs):
        dx = kwargs.get('dx')
        if dx is None:
            return
        self.shift(int(dx), 0)

    def on_rotate_request(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if direction not in (ROTATE_CW, ROTATE_CCW):
            return
        self.rotate(direction)

    def on_hard_drop_request(self, sender, **kwargs):
        self.hard_drop()

    def shift(self, dx: int, dy: int) -> bool:
        if not accepts_input(self.world):
            return False
        piece = get_active_piece(self.world)
        board = get_board(self.world)
        if is_blocked(board, piece.shape, piece.x + dx, piece.y + dy):
            return False
        piece.x += dx
        piece.y += dy
        self.event_bus.emit(EVENT_PIECE_MOVED, x=piece.x, y=piece.y, dx=dx, dy=dy)
        return True

    def move_left(self) -> bool:
        return self.shift(-1, 0)

    def move_right(self) -> bool:
        return self.shift(1, 0)

    def soft_drop_tick(self) -> bool:
        return self.shift(0, 1)

    def rotate(self, direction: str) -> bool:
        if not accepts_input(self.world):
            return False
        piece = get_active_piece(self.world)
        board = get_board(self.world)
        rotated = rotated_shape(piece.shape, direction)
        old_x, old_y = piece.x, piece.y
        anchor = try_rotate(board, piece, rotated)
        if anchor is None:
            return False
        kick = (anchor[0] - old_x, anchor[1] - old_y)
        self.event_bus.emit(EVENT_PIECE_ROTATED, direction=direction, x=piece.x, y=piece.y, kick=kick)
        return True

    def rotate_cw(self) -> bool:
        return self.rotate(ROTATE_CW)

    def rotate_ccw(self) -> bool:
        return self.rotate(ROTATE_CCW)

    def hard_drop(self) -> int:
        """Drop the piece until it rests, then lock it. Returns rows travelled (-1 if rejected)."""
        if not accepts_input(self.world):
            return -1
        rows = 0
        while self.shift(0, 1):
            rows += 1
        self.event_bus.emit(EVENT_PIECE_LOCK, reason="hard_drop")
        return rows

    def attempt_advance_or_lock(self) -> bool:
        """Per-tick gravity decision: move down one row, or lock when resting. True if it moved."""
        if not accepts_input(self.world):
            return False
        if self.shift(0, 1):
            return True
        self.event_bus.emit(EVENT_PIECE_LOCK, reason="gravity")
        return False
