# Credits: https://github.com/parappayo/hex-py/blob/master/game_state.py
# License: (MIT License) https://github.com/parappayo/hex-py/blob/master/LICENSE
# Author: Parappayo
# Modified by: HackXIt

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

Coordinate = Tuple[int, int]


class ViewerState:
    """Everything the viewer thread draws. Written by the board, read by pygame."""

    def __init__(self, size: int, tile_size: int = 36):
        self.size = size
        self.tile_size = tile_size
        self.margin = 60
        side = size * tile_size + 2 * self.margin
        self.screen_size = (side, side + 30)
        self.board_position = (self.margin, self.margin + 30)

        self.background_colour = (30, 30, 36)
        self.grid_colour = (90, 90, 100)
        self.player_colour = {1: (220, 70, 60), -1: (60, 120, 220)}
        self.cursor_colour = (250, 250, 250)

        self.board: np.ndarray = np.zeros((size, size), dtype=np.int8)
        self.links: List[Tuple[Coordinate, Coordinate, int]] = []
        self.last_move = None
        self.current_player = 1
        self.winner = 0
        self.nearest_cell_to_mouse: Optional[Coordinate] = None

        self.engine = None
        self.status_message = ""
        self.step_event = None
        self.click_event = None
        self.shutdown_event = None
        self.auto_mode = False
        self.auto_delay = 0.33

    def cell_rect(self, cell: Coordinate) -> Tuple[int, int, int, int]:
        x0, y0 = self.board_position
        row, col = cell
        return (x0 + col * self.tile_size, y0 + row * self.tile_size,
                self.tile_size, self.tile_size)

    def cell_center(self, cell: Coordinate) -> Tuple[int, int]:
        x, y, w, h = self.cell_rect(cell)
        return (x + w // 2, y + h // 2)

    def cell_at(self, pixel: Tuple[int, int]) -> Optional[Coordinate]:
        x0, y0 = self.board_position
        col = (pixel[0] - x0) // self.tile_size
        row = (pixel[1] - y0) // self.tile_size
        if 0 <= row < self.size and 0 <= col < self.size:
            return (int(row), int(col))
        return None

    def is_game_over(self) -> bool:
        return self.winner != 0

    def is_valid_move(self) -> bool:
        cell = self.nearest_cell_to_mouse
        if cell is None or self.is_game_over():
            return False
        return self.board[cell] == 0
