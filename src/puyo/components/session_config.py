from dataclasses import dataclass

from puyo.constants import (
    GRID_COLS,
    GRID_ROWS,
    MAX_COLORS,
    MIN_GROUP_SIZE,
    PIECE_SIZE,
    DIFFICULTIES,
    DEFAULT_DIFFICULTY,
)


@dataclass(slots=True)
class SessionConfig:
    """Per-game configuration; fixed from start_new_game until the next one."""

    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    min_group_size: int = MIN_GROUP_SIZE
    max_colors: int = DIFFICULTIES[DEFAULT_DIFFICULTY].max_colors
    base_fall_interval: float = DIFFICULTIES[DEFAULT_DIFFICULTY].base_fall_interval

    def __post_init__(self) -> None:
        if self.cols < PIECE_SIZE or self.rows < PIECE_SIZE:
            raise ValueError(f"Board must be at least {PIECE_SIZE}x{PIECE_SIZE}, got {self.cols}x{self.rows}")
        if self.min_group_size < 1:
            raise ValueError("min_group_size must be positive")
        if not 1 <= self.max_colors <= MAX_COLORS:
            raise ValueError(f"max_colors must be within 1..{MAX_COLORS}, got {self.max_colors}")
        if self.base_fall_interval <= 0:
            raise ValueError("base_fall_interval must be positive")

    @property
    def spawn_x(self) -> int:
        return self.cols // 2 - 1

    @property
    def spawn_y(self) -> int:
        return 0
