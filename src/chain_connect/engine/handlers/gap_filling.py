"""Fill one of the engine's own safe gaps."""
from __future__ import annotations

import logging
from typing import Optional

from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

TOP_CHOICES = 3


def _own_neighbours(ctx: EngineContext, cell) -> int:
    return sum(1 for n in geometry.neighbors8(cell, ctx.size) if ctx.cell(n) == ctx.player)


def choose_fill_cell(ctx: EngineContext, gap):
    """L gaps: any cell will do. I gaps: the cell hugging most own stones."""
    cells = list(gap.usable_cells)
    if not cells:
        return None
    if gap.pattern_type == "I":
        return max(cells, key=lambda c: _own_neighbours(ctx, c))
    return cells[0]


def fill_order(gaps):
    """L gaps first, each class by priority."""
    return sorted(gaps, key=lambda g: (g.pattern_type == "L", g.priority), reverse=True)


def fill_safe_gaps(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.registry is None:
        return None
    gaps = fill_order(ctx.registry.get_safe_gaps(ctx.player))
    if not gaps:
        return None
    pool = gaps[:TOP_CHOICES]
    if len(pool) > 1 and ctx.rng.random() < ctx.personality.randomization.move_selection:
        gap = ctx.rng.choice(pool)
    else:
        gap = gaps[0]
    cell = choose_fill_cell(ctx, gap)
    if cell is None:
        return None
    return MoveDescriptor(
        cell[0], cell[1], MoveType.GAP_FILL, gap.pattern_type,
        f"filling {gap.pattern_type} gap {gap.endpoints[0]}-{gap.endpoints[1]}",
        gap.priority * ctx.weight("safe_gap_filling"),
    )
