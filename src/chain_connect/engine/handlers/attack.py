"""Occupy a fill cell of an opponent pattern to force a reply."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType, Priority
from ..patterns import partners_of

logger = logging.getLogger(__name__)

CRITICAL_LEVEL = 6000
STANDARD_LEVEL = 4000


def attack_tier(ctx: EngineContext, best_priority: float) -> Optional[Tuple[str, float]]:
    """Return ``(tier, weight)`` for the strongest available attack, or None."""
    priorities = ctx.personality.priorities
    strategy = ctx.personality.strategy
    if best_priority >= CRITICAL_LEVEL * priorities.critical_attack:
        return "critical", priorities.critical_attack
    if best_priority >= STANDARD_LEVEL * priorities.standard_attack:
        return "standard", priorities.standard_attack
    if best_priority >= strategy.attack_threshold * priorities.opportunistic_attack:
        if ctx.rng.random() >= strategy.independent_playing:
            return "opportunistic", priorities.opportunistic_attack
    return None


def _cell_score(ctx: EngineContext, cell) -> int:
    score = 50
    distance = geometry.nearest_border_distance(cell, ctx.opponent, ctx.size)
    if distance <= 3:
        score += 20
    elif distance <= 5:
        score += 10
    if any(True for _ in partners_of(ctx.board, cell, ctx.player)):
        score += 10
    if cell in ctx.targeted:
        score -= 15
    return score


def generate_attack(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.registry is None:
        return None
    if ctx.threats is not None and ctx.threats.active is not None:
        return None
    vulnerable = ctx.registry.get_opponent_vulnerable_gaps(ctx.opponent)
    if not vulnerable:
        return None
    tier = attack_tier(ctx, vulnerable[0].attack_priority)
    if tier is None:
        return None
    name, weight = tier

    for gap in vulnerable:
        if gap.pattern_type != "L":
            continue
        cells = [c for c in gap.usable_cells
                 if ctx.validator.is_valid(MoveDescriptor(c[0], c[1], MoveType.ATTACK))]
        if not cells:
            continue
        target = max(cells, key=lambda c: _cell_score(ctx, c))
        logger.info("%s attack on %s at %s", name, gap.endpoints, target)
        return MoveDescriptor(
            target[0], target[1], MoveType.ATTACK, gap.pattern_type,
            f"{name} attack on opponent gap {gap.endpoints[0]}-{gap.endpoints[1]}",
            gap.attack_priority * weight,
            priority=Priority.HIGH,
            tier=name,
            threat_cells=tuple(gap.fill_cells),
        )
    return None
