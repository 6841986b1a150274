"""Last legality gate before a move leaves the engine."""
from __future__ import annotations

import logging
from collections import Counter
from numbers import Integral
from typing import NamedTuple, Optional

from .blocking import BlockingDetector
from .moves import MoveDescriptor, Priority

logger = logging.getLogger(__name__)

CHECKS = ("format", "bounds", "empty", "diagonals")


class Validation(NamedTuple):
    valid: bool
    failed: Optional[str] = None
    reason: str = ""
    overridden: bool = False


class MoveValidator:
    """Runs format, bounds, emptiness and diagonal-crossing checks in order.

    A move flagged ``Priority.CRITICAL`` may still pass when the diagonal
    check is the only one that fails; the other checks are never waived.
    """

    def __init__(self, board, player: int, blocking: Optional[BlockingDetector] = None):
        self.board = board
        self.player = player
        self.blocking = blocking if blocking is not None else BlockingDetector(board)
        self.rejections: Counter = Counter()
        self.overrides = 0

    def validate(self, move, priority: Optional[Priority] = None) -> Validation:
        if priority is None:
            priority = getattr(move, "priority", Priority.NORMAL)
        row = getattr(move, "row", None)
        col = getattr(move, "col", None)

        if not _is_coordinate(row) or not _is_coordinate(col):
            return self._reject("format", f"row/col must be integers, got {row!r}, {col!r}")
        if not self.board.is_valid_position(row, col):
            return self._reject("bounds", f"({row}, {col}) is off the board")
        if self.board.board[row][col] != 0:
            return self._reject("empty", f"({row}, {col}) is occupied")
        if self.blocking.would_cross_opponent_diagonal(row, col, self.player):
            if priority >= Priority.CRITICAL:
                self.overrides += 1
                logger.info("critical move (%d, %d) allowed across an opponent diagonal", row, col)
                return Validation(True, "diagonals", "diagonal crossing overridden", True)
            return self._reject("diagonals", f"({row}, {col}) would cross an opponent diagonal")
        return Validation(True)

    def is_valid(self, move: MoveDescriptor, priority: Optional[Priority] = None) -> bool:
        return self.validate(move, priority).valid

    def _reject(self, check: str, reason: str) -> Validation:
        self.rejections[check] += 1
        logger.debug("move rejected by %s check: %s", check, reason)
        return Validation(False, check, reason)

    def get_stats(self) -> dict:
        return {"rejections": dict(self.rejections), "overrides": self.overrides}


def _is_coordinate(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)
