"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level game modes that gate which commands are accepted."""
    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the active mode and the input lock."""
    mode: GameMode = GameMode.MENU
    input_locked: bool = False
    difficulty: str | None = None
