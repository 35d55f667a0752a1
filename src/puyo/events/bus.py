from blinker import Signal
from typing import Dict

class EventBus:
    """Synchronous event bus built on blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not stored in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"                      # payload: symbol=int, modifiers=int
EVENT_KEY_RELEASE = "key_release"                  # payload: symbol=int, modifiers=int
EVENT_PIECE_MOVE_REQUEST = "piece_move_request"    # payload: dx=int
EVENT_PIECE_ROTATE_REQUEST = "piece_rotate_request"  # payload: direction="cw"|"ccw"
EVENT_SOFT_DROP_HELD = "soft_drop_held"            # payload: held=bool
EVENT_HARD_DROP_REQUEST = "hard_drop_request"      # payload: none
EVENT_QUIT_REQUEST = "quit_request"                # payload: none


# ============================================================================
# PIECE LIFECYCLE
# ============================================================================
EVENT_PIECE_MOVED = "piece_moved"                  # payload: x=int, y=int, dx=int, dy=int
EVENT_PIECE_ROTATED = "piece_rotated"              # payload: direction=str, x=int, y=int, kick=(dx,dy)
EVENT_PIECE_LOCK = "piece_lock"                    # payload: reason=str
EVENT_PIECE_LOCKED = "piece_locked"                # payload: x=int, y=int, cells=[(r,c,color),...]
EVENT_PIECE_SPAWNED = "piece_spawned"              # payload: x=int, y=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_GROUPS_CLEARED = "groups_cleared"            # payload: groups=[[(r,c),...]], cells=[(r,c,color),...], cleared=int, chain=int, multiplier=float
EVENT_SETTLE_STEP = "settle_step"                  # payload: step=int, chain=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, cleared=int


# ============================================================================
# SCORING
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_LEVEL_UP = "level_up"                        # payload: level=int, clears=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: difficulty=str|None, max_colors=int|None
EVENT_NEW_GAME_STARTED = "new_game_started"        # payload: difficulty=str, max_colors=int
EVENT_MENU_REQUEST = "menu_request"                # payload: none
EVENT_GAME_OVER = "game_over"                      # payload: score=int, level=int, clears=int
