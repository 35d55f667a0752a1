from dataclasses import dataclass

GRID_COLS = 10
GRID_ROWS = 20
TILE_SIZE = 28
BOTTOM_MARGIN = 40

# 3x3 local piece frame; rotation center is (1, 1).
PIECE_SIZE = 3

MIN_GROUP_SIZE = 4
MAX_COLORS = 7

# Scoring: every cleared cell is worth POINTS_PER_CELL times the chain multiplier,
# which grows by CHAIN_MULTIPLIER_STEP for every wave already fired in the lock-in.
POINTS_PER_CELL = 100
CHAIN_MULTIPLIER_STEP = 0.5
CLEARS_PER_LEVEL = 5
STARTING_LEVEL = 1

# Fall interval (seconds) = base / (LEVEL_SPEED_BASE + LEVEL_SPEED_STEP * level)
SOFT_DROP_INTERVAL = 0.025
LEVEL_SPEED_BASE = 0.5
LEVEL_SPEED_STEP = 0.25

# Chain text display value. Armed on every clear wave, decayed by the caller side.
FADE_ARMED = 5.0
FADE_DECAY_PER_SECOND = 3.0

# Side panel geometry for the arcade front end.
SIDE_PANEL_GAP = 24
PREVIEW_TILE_SIZE = 22


@dataclass(frozen=True, slots=True)
class Difficulty:
    name: str
    max_colors: int
    base_fall_interval: float


DIFFICULTIES = {
    "easy": Difficulty("easy", max_colors=4, base_fall_interval=1.0),
    "medium": Difficulty("medium", max_colors=5, base_fall_interval=0.8),
    "hard": Difficulty("hard", max_colors=6, base_fall_interval=0.6),
    "very_hard": Difficulty("very_hard", max_colors=7, base_fall_interval=0.45),
}
DEFAULT_DIFFICULTY = "easy"

# Menu order for the difficulty picker (keys 1-4).
DIFFICULTY_ORDER = ("easy", "medium", "hard", "very_hard")


def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty {name!r}; expected one of {sorted(DIFFICULTIES)}") from None
