from __future__ import annotations

from typing import Any, Dict, List, Tuple

from esper import World

from puyo.components.game_state import GameMode
from puyo.constants import (
    BOTTOM_MARGIN,
    DIFFICULTY_ORDER,
    PREVIEW_TILE_SIZE,
    SIDE_PANEL_GAP,
    TILE_SIZE,
)
from puyo.events.bus import EVENT_GROUPS_CLEARED, EVENT_NEW_GAME_STARTED, EVENT_TICK, EventBus
from puyo.systems.board_ops import ghost_cells
from puyo.utils.game_state import (
    get_active_piece,
    get_board,
    get_chain_state,
    get_game_state,
    get_next_piece,
    get_score_state,
)

# Color id -> RGB, matching the terminal palette order (red, green, yellow, blue, magenta, cyan, white).
PALETTE: Dict[int, Tuple[int, int, int]] = {
    1: (205, 49, 49),
    2: (13, 188, 121),
    3: (229, 229, 16),
    4: (36, 114, 200),
    5: (188, 63, 188),
    6: (17, 168, 205),
    7: (229, 229, 229),
}
WALL_COLOR = (90, 90, 110)
GHOST_ALPHA = 70
FLASH_DURATION = 0.4
PADDING = 2


class RenderSystem:
    """Draws the well, pieces and HUD with arcade.

    Every frame first rebuilds a plain layout cache (rectangles and text lines)
    so the drawing can be checked without an arcade window.
    """

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.tile_size = TILE_SIZE
        self.layout: Dict[str, Any] = {}
        self._flash: List[Tuple[int, int, int]] = []
        self._flash_remaining = 0.0
        self.event_bus.subscribe(EVENT_GROUPS_CLEARED, self.on_groups_cleared)
        self.event_bus.subscribe(EVENT_NEW_GAME_STARTED, self.on_new_game_started)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_groups_cleared(self, sender, **kwargs):
        self._flash = list(kwargs.get('cells') or [])
        self._flash_remaining = FLASH_DURATION

    def on_new_game_started(self, sender, **kwargs):
        self._flash = []
        self._flash_remaining = 0.0

    def on_tick(self, sender, **kwargs):
        if self._flash_remaining <= 0.0:
            return
        self._flash_remaining = max(0.0, self._flash_remaining - float(kwargs.get('dt', 1/60)))
        if self._flash_remaining == 0.0:
            self._flash = []

    def board_origin(self) -> Tuple[float, float]:
        board = get_board(self.world)
        board_width = board.cols * self.tile_size
        left = (self.window.width - board_width) / 2
        return left, BOTTOM_MARGIN

    def cell_rect(self, row: int, col: int) -> Tuple[float, float, float, float]:
        """(left, right, bottom, top) of a board cell; row 0 is the top of the well."""
        board = get_board(self.world)
        left, bottom = self.board_origin()
        x = left + col * self.tile_size
        y = bottom + (board.rows - 1 - row) * self.tile_size
        return x + PADDING, x + self.tile_size - PADDING, y + PADDING, y + self.tile_size - PADDING

    def build_layout(self) -> Dict[str, Any]:
        state = get_game_state(self.world)
        layout: Dict[str, Any] = {"mode": state.mode, "cells": [], "ghost": [], "piece": [], "next": [], "flash": [], "text": []}
        if state.mode == GameMode.MENU:
            layout["text"] = self._menu_lines()
            self.layout = layout
            return layout

        board = get_board(self.world)
        for row in range(board.rows):
            for col in range(board.cols):
                color = board.get(row, col)
                if color:
                    layout["cells"].append((self.cell_rect(row, col), PALETTE[color]))

        piece = get_active_piece(self.world)
        if state.mode == GameMode.PLAYING:
            for row, col, color in ghost_cells(board, piece.shape, piece.x, piece.y):
                layout["ghost"].append((self.cell_rect(row, col), PALETTE[color] + (GHOST_ALPHA,)))
            for py, px, color in piece.shape.occupied():
                row, col = piece.y + py, piece.x + px
                if board.in_bounds(row, col):
                    layout["piece"].append((self.cell_rect(row, col), PALETTE[color]))

        for row, col, color in self._flash:
            if board.in_bounds(row, col):
                alpha = int(255 * self._flash_remaining / FLASH_DURATION)
                layout["flash"].append((self.cell_rect(row, col), PALETTE[color] + (alpha,)))

        left, bottom = self.board_origin()
        panel_x = left + board.cols * self.tile_size + SIDE_PANEL_GAP
        top = bottom + board.rows * self.tile_size
        for py, px, color in get_next_piece(self.world).shape.occupied():
            x = panel_x + px * PREVIEW_TILE_SIZE
            y = top - 60 - (py + 1) * PREVIEW_TILE_SIZE
            layout["next"].append(((x, x + PREVIEW_TILE_SIZE - 1, y, y + PREVIEW_TILE_SIZE - 1), PALETTE[color]))

        layout["text"] = self._hud_lines(panel_x, top)
        self.layout = layout
        return layout

    def _menu_lines(self) -> List[Tuple[str, float, float, int]]:
        cx = self.window.width / 2
        y = self.window.height * 0.7
        lines = [("Puyo Cascade", cx, y, 28), ("Select Difficulty:", cx, y - 50, 16)]
        for index, name in enumerate(DIFFICULTY_ORDER, start=1):
            label = name.replace("_", " ").title()
            lines.append((f"{index}. {label}", cx, y - 50 - index * 28, 14))
        return lines

    def _hud_lines(self, panel_x: float, top: float) -> List[Tuple[str, float, float, int]]:
        scores = get_score_state(self.world)
        chain_state = get_chain_state(self.world)
        lines = [
            ("Next:", panel_x, top - 30, 14),
            (f"Score: {scores.score}", panel_x, top - 160, 14),
            (f"Level: {scores.level}", panel_x, top - 185, 14),
            (f"Clears: {scores.clears}", panel_x, top - 210, 14),
            ("Z/X: Rotate  Up: Hard Drop  Down: Soft Drop  Q: Quit", 12, 12, 11),
        ]
        difficulty = get_game_state(self.world).difficulty
        if difficulty:
            lines.append((f"Difficulty: {difficulty.replace('_', ' ').title()}", panel_x, top - 235, 14))
        if chain_state.fade_timer > 0.0 and chain_state.last_chain > 1:
            lines.append((f"CHAIN x{chain_state.last_chain}!", panel_x, top - 270, 20 if chain_state.fade_timer > 0.5 else 14))
        if get_game_state(self.world).mode == GameMode.GAME_OVER:
            lines.append(("GAME OVER!", self.window.width / 2, self.window.height / 2, 28))
            lines.append(("Press any key", self.window.width / 2, self.window.height / 2 - 36, 14))
        return lines

    def process(self):
        layout = self.build_layout()
        # Local import keeps tests headless without creating a window.
        import arcade
        try:
            arcade.get_window()
        except Exception:
            return
        if layout["mode"] != GameMode.MENU:
            self._draw_well(arcade)
        for key in ("cells", "flash", "ghost", "piece", "next"):
            for (left, right, bottom, top), color in layout[key]:
                arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, color)
        for text, x, y, size in layout["text"]:
            anchor = "center" if layout["mode"] == GameMode.MENU or text.startswith(("GAME OVER", "Press")) else "left"
            arcade.draw_text(text, x, y, arcade.color.WHITE, size, anchor_x=anchor)

    def _draw_well(self, arcade) -> None:
        board = get_board(self.world)
        left, bottom = self.board_origin()
        right = left + board.cols * self.tile_size
        top = bottom + board.rows * self.tile_size
        arcade.draw_lrbt_rectangle_outline(left - 2, right + 2, bottom - 2, top + 2, WALL_COLOR, 3)
