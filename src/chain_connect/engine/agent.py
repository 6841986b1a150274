"""Adapter from :class:`MoveGenerator` to the ``(board, action_set) -> move`` agent signature."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

import numpy as np

from ..board.game_board import EMPTY, PLAYER_O, PLAYER_X, GameBoard, player_name
from .generator import MoveGenerator
from .geometry import Coordinate

logger = logging.getLogger(__name__)


def infer_player(board) -> int:
    """X moves first, so X is to move whenever the stone counts are equal."""
    grid = np.asarray(board)
    xs = int(np.count_nonzero(grid == PLAYER_X))
    os_ = int(np.count_nonzero(grid == PLAYER_O))
    return PLAYER_X if xs <= os_ else PLAYER_O


class EngineAgent(object):
    """Callable agent backed by a private mirror of the game board.

    Each call diffs the incoming board against the mirror and replays the
    new stones, so the engine keeps its move order and incremental state.
    A board with fewer stones than the mirror starts a new game.
    """

    def __init__(self, personality=None, *, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None, enable_diagonal_extension: bool = False,
                 debug: bool = False):
        self.personality = personality
        self.rng = rng if rng is not None else random.Random(seed)
        self.enable_diagonal_extension = enable_diagonal_extension
        self.debug = debug
        self.mirror: Optional[GameBoard] = None
        self.generator: Optional[MoveGenerator] = None
        self.player: Optional[int] = None
        self.fallbacks = 0

    def _new_game(self, size: int, player: int) -> None:
        self.mirror = GameBoard(size)
        self.player = player
        self.generator = MoveGenerator(
            self.mirror, player, self.personality,
            enable_diagonal_extension=self.enable_diagonal_extension,
            rng=self.rng, debug=self.debug,
        )
        logger.debug("engine agent playing %s on %dx%d", player_name(player), size, size)

    def _sync(self, grid: np.ndarray) -> None:
        mirror = self.mirror
        occupied_mirror = mirror.board != EMPTY
        if np.any(grid[occupied_mirror] != mirror.board[occupied_mirror]):
            raise ValueError("board is not a continuation of the previous position")
        new = [(int(r), int(c)) for r, c in zip(*np.nonzero((grid != EMPTY) & ~occupied_mirror))]
        # own stone (the move we returned last turn) goes before the reply
        new.sort(key=lambda pos: 0 if grid[pos] == self.player else 1)
        for r, c in new:
            result = mirror.make_move(r, c, int(grid[r, c]))
            if not result.success:
                raise ValueError(f"cannot replay ({r}, {c}): {result.reason}")

    def __call__(self, board, action_set: Sequence[Coordinate]) -> Coordinate:
        grid = np.asarray(board, dtype=np.int8)
        size = grid.shape[0]
        player = infer_player(grid)
        stones = int(np.count_nonzero(grid))
        if self.mirror is None or self.mirror.size != size or player != self.player \
                or stones < self.mirror.move_count:
            self._new_game(size, player)
        try:
            self._sync(grid)
        except ValueError as err:
            logger.warning("%s, rebuilding the mirror board", err)
            self._new_game(size, player)
            self._sync(grid)

        legal: List[Coordinate] = [tuple(m) for m in action_set]
        move = self.generator.get_next_move()
        if move is not None and move.position in legal:
            return move.position
        self.fallbacks += 1
        logger.info("engine had no usable move, playing at random")
        return self.rng.choice(legal)

    def stats(self) -> dict:
        data = self.generator.get_stats() if self.generator is not None else {}
        data["fallbacks"] = self.fallbacks
        return data
