"""Defend own patterns that are one opponent stone from being cut."""
from __future__ import annotations

import logging
from typing import Optional

from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType, Priority

logger = logging.getLogger(__name__)

MIN_MOVES = 4


def respond_to_threats(ctx: EngineContext) -> Optional[MoveDescriptor]:
    """Occupy the last usable fill cell of the most valuable threatened gap."""
    if ctx.registry is None or ctx.board.move_count < MIN_MOVES:
        return None
    threatened = ctx.registry.get_own_threatened_gaps(ctx.player)
    if not threatened:
        return None
    if ctx.rng.random() > ctx.personality.strategy.defensive_reactivity:
        logger.debug("ignoring %d threatened gap(s) this turn", len(threatened))
        return None
    gap = threatened[0]
    row, col = gap.usable_cells[0]
    logger.info("defending %s gap %s at (%d, %d)", gap.pattern_type, gap.endpoints, row, col)
    return MoveDescriptor(
        row, col, MoveType.THREAT_RESPONSE, gap.pattern_type,
        f"closing threatened {gap.pattern_type} gap between {gap.endpoints[0]} and {gap.endpoints[1]}",
        gap.priority * ctx.weight("gap_threat"),
        priority=Priority.CRITICAL,
        threatened=len(threatened),
    )
