"""Single diagonal step from an own stone (optional handler)."""
from __future__ import annotations

import logging
from typing import Optional

from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

BASE_VALUE = 600


def score_diagonal(ctx: EngineContext, origin, cell) -> float:
    """Progress toward the player's borders, own support and opponent pressure."""
    size = ctx.size
    score = 0.0
    progress = geometry.nearest_border_distance(origin, ctx.player, size) - \
        geometry.nearest_border_distance(cell, ctx.player, size)
    score += 15 * progress
    around = geometry.neighbors8(cell, size)
    own = sum(1 for n in around if ctx.cell(n) == ctx.player)
    theirs = sum(1 for n in around if ctx.cell(n) == ctx.opponent)
    score += 5 * own
    score -= 8 * theirs
    if ctx.blocking.would_cross_own_diagonal(cell[0], cell[1], ctx.player):
        # already shielded by own diagonal links
        score += 10
    return score


def generate_diagonal_extension(ctx: EngineContext) -> Optional[MoveDescriptor]:
    best = None
    for origin in ctx.own_stones():
        for cell in geometry.diagonal_neighbors(origin, ctx.size):
            if not ctx.is_empty(cell):
                continue
            if ctx.blocking.would_cross_opponent_diagonal(cell[0], cell[1], ctx.player):
                continue
            score = score_diagonal(ctx, origin, cell)
            if best is None or score > best[0]:
                best = (score, origin, cell)
    if best is None:
        return None
    score, origin, (row, col) = best
    direction = geometry.vector_direction(row - origin[0], col - origin[1])
    return MoveDescriptor(row, col, MoveType.DIAGONAL_EXTENSION, "diagonal",
                          f"diagonal step from {origin}", (BASE_VALUE + score) * ctx.weight("diagonal_extension"),
                          from_head=origin, direction=direction)
