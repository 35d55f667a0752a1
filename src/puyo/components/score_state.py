from dataclasses import dataclass

from puyo.constants import STARTING_LEVEL


@dataclass(slots=True)
class ScoreState:
    """Session totals. All three values only ever grow within a game."""

    score: int = 0
    level: int = STARTING_LEVEL
    clears: int = 0
