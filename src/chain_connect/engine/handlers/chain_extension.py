"""Grow the active fragment from one of its heads with an L-pattern."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

EXTENSION_VALUE = 2200
DIAGONAL_VALUE = 1500
STRATEGIC_VALUE = 1800
FALLBACK_VALUE = 1000

_DIRECTION_FILTER = {
    "north": lambda dr, dc: dr < 0,
    "south": lambda dr, dc: dr > 0,
    "west": lambda dr, dc: dc < 0,
    "east": lambda dr, dc: dc > 0,
}


def would_create_threatened_pattern(ctx: EngineContext, head, target) -> bool:
    """True when the opponent could cut head-target right away.

    Either a gap cell already holds an opponent stone, or an opponent stone
    sits orthogonally next to one endpoint in line with the other.
    """
    if geometry.pattern_type(head, target) != "L":
        return False
    opponent = ctx.opponent
    if any(ctx.cell(g) == opponent for g in geometry.gap_cells(head, target, ctx.size)):
        return True
    for here, there in ((head, target), (target, head)):
        for pos in geometry.orthogonal_neighbors(here, ctx.size):
            if ctx.cell(pos) == opponent and (pos[0] == there[0] or pos[1] == there[1]):
                return True
    return False


def _ordered_vectors(ctx: EngineContext, direction: str) -> List[Tuple[int, int]]:
    keep = _DIRECTION_FILTER.get(direction, lambda dr, dc: True)
    vectors = [v for v in geometry.STRATEGIC_L_ORDER if keep(*v)]
    if ctx.rng.random() < ctx.personality.randomization.l_pattern_choice:
        ctx.rng.shuffle(vectors)
    return vectors


def _target_valid(ctx: EngineContext, head, target) -> bool:
    if not ctx.is_empty(target):
        return False
    gaps = geometry.gap_cells(head, target, ctx.size)
    if not any(ctx.cell(g) in (0, ctx.player) for g in gaps):
        return False
    return not would_create_threatened_pattern(ctx, head, target)


def _target_score(ctx: EngineContext, head, target, vector) -> float:
    size = ctx.size
    score = 100.0
    axis = geometry.axis_coordinate(target, ctx.player)
    if axis in (0, size - 1):
        score += 300
    score += 50 * sum(1 for n in geometry.neighbors8(target, size) if ctx.cell(n) == ctx.player)
    risk = ctx.personality.strategy.risk_taking
    if risk > 0.6 and abs(vector[0]) + abs(vector[1]) >= 3:
        score += 50
    if risk < 0.4 and geometry.edge_distance(target, size) >= 3:
        score += 30
    return score


def extend_from_head(ctx: EngineContext, head, direction: str) -> Optional[MoveDescriptor]:
    best = None
    for vector in _ordered_vectors(ctx, direction):
        target = (head[0] + vector[0], head[1] + vector[1])
        if not ctx.board.is_valid_position(*target) or not _target_valid(ctx, head, target):
            continue
        score = _target_score(ctx, head, target, vector)
        if best is None or score > best[0]:
            best = (score, target)
    if best is None:
        return None
    score, (row, col) = best
    return MoveDescriptor(row, col, MoveType.CHAIN_EXTENSION, "L",
                          f"L extension {direction} from {head}",
                          EXTENSION_VALUE * ctx.weight("chain_extension"),
                          from_head=head, direction=direction, score=score)


def diagonal_from_head(ctx: EngineContext, head, direction: str) -> Optional[MoveDescriptor]:
    """A diagonal step toward *direction* when every L target is unsafe."""
    for cell in geometry.diagonal_neighbors(head, ctx.size):
        if not geometry.is_toward(head, cell, direction) or not ctx.is_empty(cell):
            continue
        if ctx.blocking.would_cross_opponent_diagonal(cell[0], cell[1], ctx.player):
            continue
        return MoveDescriptor(cell[0], cell[1], MoveType.CHAIN_EXTENSION, "diagonal",
                              f"diagonal extension {direction} from {head}",
                              DIAGONAL_VALUE * ctx.weight("chain_extension"),
                              from_head=head, direction=direction)
    return None


def strategic_extension(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.strategic is None or ctx.fragments is None:
        return None
    fragment = ctx.fragments.get_active_fragment()
    choice = ctx.strategic.select_strategic_extension(fragment, ctx.fragments.fragments)
    if choice is None:
        return None
    move = extend_from_head(ctx, choice.stone, choice.direction)
    if move is None:
        move = diagonal_from_head(ctx, choice.stone, choice.direction)
    if move is None:
        return None
    move.move_type = MoveType.STRATEGIC_EXTENSION
    move.value = STRATEGIC_VALUE * ctx.weight("chain_extension")
    move.reason = f"{choice.mode} branch from {choice.stone}"
    move.meta["mode"] = choice.mode
    return move


def _any_stone_extension(ctx: EngineContext) -> Optional[MoveDescriptor]:
    for stone in ctx.own_stones():
        for move in geometry.pattern_moves(stone, ("L", "I"), ctx.player, ctx.size):
            target = move.position
            if not _target_valid(ctx, stone, target):
                continue
            if ctx.blocking.would_cross_opponent_diagonal(target[0], target[1], ctx.player):
                continue
            return MoveDescriptor(target[0], target[1], MoveType.CHAIN_EXTENSION, move.kind,
                                  f"{move.kind} pattern from {stone}",
                                  FALLBACK_VALUE * ctx.weight("chain_extension"),
                                  from_head=stone, direction=move.direction)
    return None


def generate_chain_extension(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.fragments is None:
        return _any_stone_extension(ctx)

    heads = ctx.fragments.extendable_heads()
    if not heads:
        move = strategic_extension(ctx)
        return move if move is not None else _any_stone_extension(ctx)

    first = ctx.fragments.select_head(ctx.rng, ctx.personality.randomization.head_selection)
    ordered = [first] + [h for h in heads if h != first]
    for choice in ordered:
        move = extend_from_head(ctx, choice.head, choice.direction)
        if move is not None:
            return move
    for choice in ordered:
        move = diagonal_from_head(ctx, choice.head, choice.direction)
        if move is not None:
            return move
    move = strategic_extension(ctx)
    return move if move is not None else _any_stone_extension(ctx)
