"""Move descriptors exchanged between handlers, validator and caller."""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Optional

from .geometry import Coordinate

logger = logging.getLogger(__name__)


class Priority(IntEnum):
    NORMAL = 0
    HIGH = 1
    CRITICAL = 2


class MoveType:
    INITIAL = "initial"
    SECOND = "second"
    THREAT_RESPONSE = "threat-response"
    THREAT_FOLLOW_THROUGH = "threat-follow-through"
    FRAGMENT_CONNECTION = "fragment-connection"
    ATTACK = "attack"
    BORDER_CONNECTION = "border-connection"
    CHAIN_EXTENSION = "chain-extension"
    STRATEGIC_EXTENSION = "strategic-extension"
    GAP_FILL = "gap-fill"
    DIAGONAL_EXTENSION = "diagonal-extension"


class MoveDescriptor(object):
    """
    One proposed move.

    Attributes
    ----------
    row, col : int
        Target cell.
    move_type : str
        One of the :class:`MoveType` names.
    pattern : str, optional
        Pattern class the move builds or defends ('L', 'I', 'D', ...).
    reason : str
        Human readable explanation, shown in debug logs.
    value : float
        Handler score after personality weighting.
    from_head : (int, int), optional
        Head stone the move extends from.
    direction : str, optional
        Compass direction of the extension.
    priority : Priority
        Validator override level.
    """

    __slots__ = ("row", "col", "move_type", "pattern", "reason", "value",
                 "from_head", "direction", "priority", "meta")

    def __init__(self, row: int, col: int, move_type: str, pattern: Optional[str] = None,
                 reason: str = "", value: float = 0.0, from_head: Optional[Coordinate] = None,
                 direction: Optional[str] = None, priority: Priority = Priority.NORMAL, **meta: Any):
        self.row = row
        self.col = col
        self.move_type = move_type
        self.pattern = pattern
        self.reason = reason
        self.value = value
        self.from_head = from_head
        self.direction = direction
        self.priority = priority
        self.meta = meta

    @property
    def position(self) -> Coordinate:
        return (self.row, self.col)

    def is_well_formed(self) -> bool:
        return isinstance(self.row, int) and isinstance(self.col, int) and \
            not isinstance(self.row, bool) and not isinstance(self.col, bool) and \
            isinstance(self.move_type, str)

    def as_dict(self) -> dict:
        data = {
            "row": self.row,
            "col": self.col,
            "move_type": self.move_type,
            "pattern": self.pattern,
            "reason": self.reason,
            "value": self.value,
            "from_head": self.from_head,
            "direction": self.direction,
        }
        data.update(self.meta)
        return data

    def __eq__(self, other) -> bool:
        if not isinstance(other, MoveDescriptor):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return (f"MoveDescriptor(({self.row}, {self.col}), {self.move_type!r}, "
                f"pattern={self.pattern!r}, value={self.value:.0f})")
