"""
Diagonal crossing analysis.

Two stones on opposite corners of a 2x2 block are diagonally linked. The
link is *crossed* when the two remaining corners both hold the opposing
player. The detector answers three questions off that one rule:

* is a pattern's fill cell still usable for its owner (:meth:`BlockingDetector.is_gap_blocked`)
* would a placement link diagonally across an opponent link (:meth:`BlockingDetector.would_cross_opponent_diagonal`)
* which opponent patterns did the last stone cut (:meth:`BlockingDetector.check_pattern_blocking_after_move`)
"""
from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..board.game_board import opponent_of
from . import geometry
from .geometry import Coordinate
from .patterns import Pattern

logger = logging.getLogger(__name__)

SURROUNDED_SHARE = 0.6


class BlockResult(NamedTuple):
    blocked: bool
    reason: str = "no blocking detected"
    method: Optional[str] = None


_NOT_BLOCKED = BlockResult(False)


class BlockingDetector:
    """Crossing and gap-blocking checks against a live board.

    Results of :meth:`is_gap_blocked` are cached per board generation
    (the move count); the cache drops itself as soon as a stone is added.
    """

    def __init__(self, board):
        self.board = board
        self.debug_mode = False
        self._cache: Dict[tuple, BlockResult] = {}
        self._generation = -1
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Primitive
    # ------------------------------------------------------------------
    def _owner(self, pos: Coordinate) -> Optional[int]:
        r, c = pos
        if not self.board.is_valid_position(r, c):
            return None
        return int(self.board.board[r][c])

    def is_diagonal_crossed(self, a: Coordinate, b: Coordinate, by_player: int) -> bool:
        """True when *a*-*b* are diagonal neighbours and *by_player* holds both other corners."""
        if not geometry.are_diagonal(a, b):
            return False
        c1, c2 = geometry.crossing_corners(a, b)
        return self._owner(c1) == by_player and self._owner(c2) == by_player

    # ------------------------------------------------------------------
    # Move legality
    # ------------------------------------------------------------------
    def would_cross_opponent_diagonal(self, row: int, col: int, player: int) -> bool:
        """A stone of *player* at (row, col) would link diagonally across an opponent link."""
        opponent = opponent_of(player)
        for neighbour in geometry.diagonal_neighbors((row, col), self.board.size):
            if self._owner(neighbour) != player:
                continue
            if self.is_diagonal_crossed((row, col), neighbour, opponent):
                return True
        return False

    def would_cross_own_diagonal(self, row: int, col: int, player: int) -> bool:
        """An opponent stone at (row, col) would link across one of *player*'s links.

        True means the cell is shielded by *player*'s diagonals.
        """
        return self.would_cross_opponent_diagonal(row, col, opponent_of(player))

    # ------------------------------------------------------------------
    # Gap blocking
    # ------------------------------------------------------------------
    def _sync_generation(self) -> None:
        if self._generation != self.board.move_count:
            self.invalidate_cache()

    def invalidate_cache(self) -> None:
        self._cache.clear()
        self._generation = self.board.move_count

    def is_gap_blocked(self, cell: Coordinate, owner: int, pattern: Optional[Pattern] = None) -> BlockResult:
        """Is fill cell *cell* of *pattern* unusable for *owner*?

        L and I patterns: blocked when at least half (rounded up) of the
        diagonal sightlines between the cell and the endpoints are crossed.
        D patterns: blocked when two or more diagonal neighbours of the cell
        are opponent stones. Any pattern: blocked when more than 60% of the
        cell's on-board neighbours are opponent stones.
        """
        self._sync_generation()
        key = (cell, owner, pattern.key if pattern is not None else None)
        cached = self._cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1

        opponent = opponent_of(owner)
        result = _NOT_BLOCKED
        if pattern is not None and self._diagonally_blocked(cell, pattern, opponent):
            result = BlockResult(True, "blocked by opponent diagonals", "diagonal")
        elif self._surrounded(cell, opponent):
            result = BlockResult(True, "surrounded by opponent stones", "surrounded")

        self._cache[key] = result
        if result.blocked and self.debug_mode:
            logger.debug("gap %s blocked for %d: %s", cell, owner, result.reason)
        return result

    def _diagonally_blocked(self, cell: Coordinate, pattern: Pattern, opponent: int) -> bool:
        if pattern.kind == "D":
            stones = sum(1 for n in geometry.diagonal_neighbors(cell, self.board.size)
                         if self._owner(n) == opponent)
            return stones >= 2
        sightlines = [end for end in pattern.endpoints if geometry.are_diagonal(cell, end)]
        if not sightlines:
            return False
        crossed = sum(1 for end in sightlines if self.is_diagonal_crossed(cell, end, opponent))
        return crossed >= math.ceil(len(sightlines) / 2)

    def _surrounded(self, cell: Coordinate, opponent: int) -> bool:
        around = geometry.neighbors8(cell, self.board.size)
        if not around:
            return False
        stones = sum(1 for n in around if self._owner(n) == opponent)
        return stones / len(around) > SURROUNDED_SHARE

    def filter_blocked_gaps(self, cells: Iterable[Coordinate], owner: int,
                            pattern: Optional[Pattern] = None) -> Tuple[List[Coordinate], List[Coordinate]]:
        """Split *cells* into ``(usable, blocked)`` for *owner*."""
        usable: List[Coordinate] = []
        blocked: List[Coordinate] = []
        for cell in cells:
            (blocked if self.is_gap_blocked(cell, owner, pattern).blocked else usable).append(cell)
        return usable, blocked

    # ------------------------------------------------------------------
    # Pattern invalidation after a move
    # ------------------------------------------------------------------
    def _cuts_sightline(self, stone: Coordinate, pattern: Pattern, player: int) -> bool:
        """Does *stone* sit on a crossing corner of an endpoint-to-fill-cell sightline?"""
        size = self.board.size
        for cell in pattern.fill_cells(size):
            for end in pattern.endpoints:
                if not geometry.are_diagonal(cell, end):
                    continue
                corners = geometry.crossing_corners(cell, end)
                if stone in corners and self.is_diagonal_crossed(cell, end, player):
                    return True
        return False

    def check_pattern_blocking_after_move(self, row: int, col: int, player: int,
                                          patterns: Iterable[Pattern]) -> List[Pattern]:
        """Opponent patterns the stone at (row, col) has cut off for good.

        A pattern qualifies when the new stone completes a crossing of one of
        its sightlines and no fill cell is left that the owner could still use.
        """
        self._sync_generation()
        stone = (row, col)
        size = self.board.size
        cut: List[Pattern] = []
        for pattern in patterns:
            if pattern.owner == player:
                continue
            if not self._cuts_sightline(stone, pattern, player):
                continue
            empty = [cell for cell in pattern.fill_cells(size) if self._owner(cell) == 0]
            usable, _ = self.filter_blocked_gaps(empty, pattern.owner, pattern)
            if not usable:
                logger.debug("pattern %s cut by %s", pattern.id, stone)
                cut.append(pattern)
        return cut

    def get_stats(self) -> dict:
        return {
            "cached_results": len(self._cache),
            "generation": self._generation,
            "current_move": self.board.move_count,
            "hits": self.hits,
            "misses": self.misses,
        }
