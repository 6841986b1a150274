"""Bridge the active fragment to another fragment."""
from __future__ import annotations

import logging
from typing import Optional

from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

MIN_MOVES = 5
BASE_VALUE = 3000


def connect_fragments(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.fragments is None or ctx.board.move_count < MIN_MOVES:
        return None
    found = ctx.fragments.find_connection_move()
    if found is None:
        return None
    move, active, other = found
    logger.debug("bridge %s between fragments of size %d and %d", (move.row, move.col), active.size, other.size)
    return MoveDescriptor(
        move.row, move.col, MoveType.FRAGMENT_CONNECTION, move.kind,
        f"joining fragment at {move.anchors[0]} with fragment at {move.anchors[1]}",
        (BASE_VALUE + move.value) * ctx.weight("fragment_connection"),
        anchors=move.anchors,
    )
