"""
Gap registry
============

Live index of every unrealized two-stone pattern on the board, for both
players, and the gap view the move handlers consume.

A pattern stays registered while at least one of its fill cells is still
usable for its owner. It is dropped once the owner occupies a fill cell
(the connection is realized) or once the opponent has occupied or cut every
fill cell.

Gap classification
------------------
* **threatened** - exactly one usable fill cell left; a single opponent
  stone kills the connection.
* **safe** - two or more usable fill cells.

Scores
------
``priority`` orders a player's own gaps, ``attack_priority`` orders the
opponent's gaps as targets. Both are plain sums of the constants below.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..board.game_board import opponent_of
from . import geometry
from .blocking import BlockingDetector
from .geometry import Coordinate
from .patterns import Pattern, PatternKey, find_patterns, patterns_at

logger = logging.getLogger(__name__)

BASE_PRIORITY = 500
KIND_BONUS = {"L": 500, "I": 300, "D": 0}
BORDER_WEIGHT = 20
COMPLETION_BONUS = {1: 2000, 2: 1000, 3: 500}
CENTER_RADIUS = 10
CENTER_WEIGHT = 10
NEIGHBOUR_BONUS = 50

ATTACK_BASE = 4000
ATTACK_KIND_BONUS = {"L": 2000, "I": 1000, "D": 0}
ATTACK_STRATEGIC_CAP = 500


@dataclass(frozen=True)
class Gap:
    """Read-only view of one active pattern."""
    owner: int
    pattern_type: str
    endpoints: Tuple[Coordinate, Coordinate]
    fill_cells: Tuple[Coordinate, ...]
    usable_cells: Tuple[Coordinate, ...]
    priority: int = 0
    attack_priority: int = 0
    pattern: Optional[Pattern] = field(default=None, compare=False, repr=False)

    @property
    def blocked(self) -> bool:
        return not self.usable_cells

    @property
    def threatened(self) -> bool:
        return len(self.usable_cells) == 1

    @property
    def pattern_id(self) -> str:
        return self.pattern.id if self.pattern is not None else ""


class GapRegistry:
    """Pattern and gap bookkeeping for one engine.

    Parameters
    ----------
    board : GameBoard
        Live board; read only.
    player : int
        The player the registry answers "own" questions for.
    blocking : BlockingDetector, optional
        Shared detector; a private one is created when omitted.
    """

    def __init__(self, board, player: int, blocking: Optional[BlockingDetector] = None):
        self.board = board
        self.player = player
        self.blocking = blocking if blocking is not None else BlockingDetector(board)
        self.debug_mode = False
        self._patterns: Dict[PatternKey, Pattern] = {}
        self._synced_moves = 0
        self.realized = 0
        self.removed = 0

    # ------------------------------------------------------------------
    # Synchronisation
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._patterns.clear()
        self._synced_moves = 0
        self.realized = 0
        self.removed = 0
        self.blocking.invalidate_cache()

    def rebuild(self) -> None:
        """Discard everything and index the current board from scratch."""
        self.reset()
        for player in (self.player, opponent_of(self.player)):
            for pattern in find_patterns(self.board, player):
                if self._is_live(pattern):
                    self._patterns[pattern.key] = pattern
        self._synced_moves = self.board.move_count
        self.cleanup_blocked_patterns()
        logger.debug("registry rebuilt: %d patterns", len(self._patterns))

    def update_registry(self) -> None:
        """Bring the registry up to date with the board's move history.

        Calling it again without an intervening move changes nothing.
        """
        moves = self.board.move_count
        if moves == self._synced_moves:
            return
        if moves < self._synced_moves or self._synced_moves == 0:
            self.rebuild()
            return
        for record in self.board.history[self._synced_moves:moves]:
            self.update_after_move(record.row, record.col, record.player)
        self._synced_moves = moves
        self.cleanup_blocked_patterns()

    on_board_changed = update_registry

    def update_after_move(self, row: int, col: int, player: int) -> None:
        """Apply the effect of one stone at (row, col)."""
        stone = (row, col)
        for key, pattern in list(self._patterns.items()):
            if stone not in pattern.fill_cells(self.board.size):
                continue
            if pattern.owner == player:
                del self._patterns[key]
                self.realized += 1
                logger.debug("pattern %s realized by %s", pattern.id, stone)

        opponent_patterns = [p for p in self._patterns.values() if p.owner != player]
        for pattern in self.blocking.check_pattern_blocking_after_move(row, col, player, opponent_patterns):
            self._drop(pattern, "cut")

        for pattern in patterns_at(self.board, stone, player):
            if pattern.key not in self._patterns and self._is_live(pattern):
                self._patterns[pattern.key] = pattern
                logger.debug("pattern %s registered", pattern.id)

    def cleanup_blocked_patterns(self) -> int:
        """Drop every pattern with no usable fill cell left; returns how many."""
        dropped = 0
        for pattern in list(self._patterns.values()):
            if not self._usable_cells(pattern):
                self._drop(pattern, "blocked")
                dropped += 1
        return dropped

    def _drop(self, pattern: Pattern, why: str) -> None:
        if self._patterns.pop(pattern.key, None) is not None:
            self.removed += 1
            logger.debug("pattern %s dropped (%s)", pattern.id, why)

    def _is_live(self, pattern: Pattern) -> bool:
        cells = pattern.fill_cells(self.board.size)
        if any(self.board.board[r][c] == pattern.owner for r, c in cells):
            return False
        return any(self.board.board[r][c] == 0 for r, c in cells)

    # ------------------------------------------------------------------
    # Gap views
    # ------------------------------------------------------------------
    def _empty_cells(self, pattern: Pattern) -> List[Coordinate]:
        return [(r, c) for r, c in pattern.fill_cells(self.board.size) if self.board.board[r][c] == 0]

    def _usable_cells(self, pattern: Pattern) -> List[Coordinate]:
        usable, _ = self.blocking.filter_blocked_gaps(self._empty_cells(pattern), pattern.owner, pattern)
        return usable

    def _strategic_value(self, cells: Iterable[Coordinate]) -> int:
        cells = list(cells)
        if not cells:
            return 0
        size = self.board.size
        nearest = min(geometry.center_distance(cell, size) for cell in cells)
        value = max(0, (CENTER_RADIUS - nearest) * CENTER_WEIGHT)
        stones = set()
        for cell in cells:
            for r, c in geometry.neighbors8(cell, size):
                if self.board.board[r][c] != 0:
                    stones.add((r, c))
        return value + NEIGHBOUR_BONUS * len(stones)

    def gap_priority(self, pattern: Pattern, empty: List[Coordinate]) -> int:
        size = self.board.size
        border = min(geometry.nearest_border_distance(end, pattern.owner, size) for end in pattern.endpoints)
        score = BASE_PRIORITY + KIND_BONUS.get(pattern.kind, 0)
        score += max(0, size - border) * BORDER_WEIGHT
        score += COMPLETION_BONUS.get(len(empty), 0)
        return score + self._strategic_value(empty)

    def attack_priority(self, pattern: Pattern, empty: List[Coordinate]) -> int:
        score = ATTACK_BASE + ATTACK_KIND_BONUS.get(pattern.kind, 0)
        completion = COMPLETION_BONUS.get(len(empty), 0)
        if completion >= 2000:
            score += 3000
        elif completion >= 1000:
            score += 1500
        return score + min(self._strategic_value(empty), ATTACK_STRATEGIC_CAP)

    def _gap(self, pattern: Pattern) -> Gap:
        empty = self._empty_cells(pattern)
        usable = self._usable_cells(pattern)
        return Gap(
            owner=pattern.owner,
            pattern_type=pattern.kind,
            endpoints=pattern.endpoints,
            fill_cells=tuple(empty),
            usable_cells=tuple(usable),
            priority=self.gap_priority(pattern, empty),
            attack_priority=self.attack_priority(pattern, empty),
            pattern=pattern,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_player_patterns(self, player: Optional[int] = None) -> List[Pattern]:
        player = self.player if player is None else player
        return [p for p in self._patterns.values() if p.owner == player]

    def get_gaps(self, player: Optional[int] = None) -> List[Gap]:
        gaps = [self._gap(p) for p in self.get_player_patterns(player)]
        return sorted(gaps, key=lambda g: g.priority, reverse=True)

    def get_own_threatened_gaps(self, player: Optional[int] = None) -> List[Gap]:
        return [g for g in self.get_gaps(player) if g.threatened]

    def get_own_unthreatened_gaps(self, player: Optional[int] = None) -> List[Gap]:
        return [g for g in self.get_gaps(player) if len(g.usable_cells) >= 2]

    get_safe_gaps = get_own_unthreatened_gaps

    def get_opponent_vulnerable_gaps(self, opponent: Optional[int] = None) -> List[Gap]:
        """Opponent gaps that still have usable cells, best attack target first."""
        opponent = opponent_of(self.player) if opponent is None else opponent
        gaps = [g for g in self.get_gaps(opponent) if not g.blocked]
        return sorted(gaps, key=lambda g: g.attack_priority, reverse=True)

    def get_patterns_at_position(self, pos: Coordinate) -> List[Pattern]:
        size = self.board.size
        return [p for p in self._patterns.values() if p.touches(pos) or pos in p.fill_cells(size)]

    def has_any_gaps(self, player: Optional[int] = None) -> bool:
        player = self.player if player is None else player
        return any(p.owner == player for p in self._patterns.values())

    def get_stats(self) -> dict:
        own = self.get_gaps(self.player)
        theirs = self.get_gaps(opponent_of(self.player))
        return {
            "total_patterns": len(self._patterns),
            "own_patterns": len(own),
            "own_threatened": sum(1 for g in own if g.threatened),
            "own_safe": sum(1 for g in own if len(g.usable_cells) >= 2),
            "opponent_patterns": len(theirs),
            "opponent_threatened": sum(1 for g in theirs if g.threatened),
            "realized": self.realized,
            "removed": self.removed,
            "synced_moves": self._synced_moves,
            "blocking": self.blocking.get_stats(),
        }
