"""Two-ply follow-through for attacks on opponent gaps.

After an attack stone lands in an opponent gap, the tracker remembers the
gap's fill cells. On the engine's next turn, if the opponent ignored the
threat, another fill cell is taken and the opponent pattern is dead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..board.game_board import opponent_of
from .geometry import Coordinate
from .moves import MoveDescriptor, MoveType, Priority

logger = logging.getLogger(__name__)

MAX_AGE = 4
FOLLOW_THROUGH_VALUE = 9000


class ThreatStatus(str, Enum):
    ARMED = "armed"
    FULFILLED = "fulfilled"
    ABANDONED = "abandoned"


@dataclass
class ThreatRecord:
    created_at_move: int
    target_cell: Coordinate
    fill_cells: Tuple[Coordinate, ...]
    own_move: int
    status: ThreatStatus = ThreatStatus.ARMED
    completed_with: Optional[Coordinate] = None

    @property
    def alternative_fill_cells(self) -> Tuple[Coordinate, ...]:
        return tuple(c for c in self.fill_cells if c != self.target_cell)


class ThreatTracker:
    """Holds at most one armed :class:`ThreatRecord` at a time."""

    def __init__(self, board, player: int, max_age: int = MAX_AGE):
        self.board = board
        self.player = player
        self.max_age = max_age
        self.records: List[ThreatRecord] = []
        self.own_moves = 0

    @property
    def active(self) -> Optional[ThreatRecord]:
        for record in self.records:
            if record.status is ThreatStatus.ARMED:
                return record
        return None

    def reset(self) -> None:
        self.records = []
        self.own_moves = 0

    def arm(self, target: Coordinate, fill_cells) -> Optional[ThreatRecord]:
        if self.active is not None:
            logger.debug("threat already armed, ignoring attack at %s", target)
            return None
        record = ThreatRecord(self.board.move_count, tuple(target), tuple(fill_cells), self.own_moves)
        self.records.append(record)
        logger.info("threat armed at %s over %s", target, record.fill_cells)
        return record

    def record_own_move(self) -> None:
        """Count an engine move and drop records older than ``max_age`` own moves."""
        self.own_moves += 1
        kept = []
        for record in self.records:
            if self.own_moves - record.own_move > self.max_age:
                if record.status is ThreatStatus.ARMED:
                    record.status = ThreatStatus.ABANDONED
                logger.debug("threat at %s collected (%s)", record.target_cell, record.status.value)
                continue
            kept.append(record)
        self.records = kept

    def _abandon(self, record: ThreatRecord, why: str) -> None:
        record.status = ThreatStatus.ABANDONED
        logger.info("threat at %s abandoned: %s", record.target_cell, why)

    def pending_move(self) -> Optional[MoveDescriptor]:
        """Completion move for the armed threat, or None.

        Resolves the record on the turn two plies after the attack: if the
        opponent answered inside the fill cells, nothing is left to take or
        that turn has already passed, it is abandoned right here.
        """
        record = self.active
        if record is None:
            return None
        if self.board.move_count < record.created_at_move + 2:
            return None
        if self.board.move_count > record.created_at_move + 2:
            self._abandon(record, "resolution turn has passed")
            return None
        board = self.board.board
        opponent = opponent_of(self.player)
        tr, tc = record.target_cell
        if board[tr][tc] != self.player:
            self._abandon(record, "attack stone was never placed")
            return None
        if any(board[r][c] == opponent for r, c in record.fill_cells):
            self._abandon(record, "opponent responded")
            return None
        empty = [c for c in record.alternative_fill_cells if board[c[0]][c[1]] == 0]
        if not empty:
            self._abandon(record, "no fill cell left")
            return None
        row, col = empty[0]
        return MoveDescriptor(row, col, MoveType.THREAT_FOLLOW_THROUGH, "cut",
                              f"completing the cut started at {record.target_cell}",
                              FOLLOW_THROUGH_VALUE, priority=Priority.HIGH)

    def skip_resolution(self, move: MoveDescriptor) -> None:
        """Abandon the armed record when its resolution turn went to *move* instead."""
        record = self.active
        if record is not None and self.board.move_count >= record.created_at_move + 2:
            self._abandon(record, f"resolution turn used for {move.move_type} at {move.position}")

    def fulfil(self, move: MoveDescriptor) -> None:
        record = self.active
        if record is None:
            return
        record.status = ThreatStatus.FULFILLED
        record.completed_with = move.position
        logger.info("threat at %s fulfilled with %s", record.target_cell, move.position)

    def abandon_active(self, why: str) -> None:
        record = self.active
        if record is not None:
            self._abandon(record, why)

    def get_stats(self) -> dict:
        return {
            "records": len(self.records),
            "armed": sum(1 for r in self.records if r.status is ThreatStatus.ARMED),
            "fulfilled": sum(1 for r in self.records if r.status is ThreatStatus.FULFILLED),
            "abandoned": sum(1 for r in self.records if r.status is ThreatStatus.ABANDONED),
        }
