"""First and second stone of the engine."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ...board.game_board import is_vertical
from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

MIN_WEIGHT = 0.01


def _starting_cells(ctx: EngineContext) -> List[Tuple[int, int]]:
    area = ctx.personality.starting_area
    last = ctx.size - 1
    rows = range(max(0, area.row_range[0]), min(last, area.row_range[1]) + 1)
    cols = range(max(0, area.col_range[0]), min(last, area.col_range[1]) + 1)
    return [(r, c) for r in rows for c in cols if ctx.board.is_valid_move(r, c)]


def _opening_weight(ctx: EngineContext, cell: Tuple[int, int]) -> float:
    area = ctx.personality.starting_area
    distance = geometry.center_distance(cell, ctx.size)
    weight = 1.0 + area.center_weight * (4 - min(distance, 4)) / 4
    if area.avoid_edges:
        edge = geometry.edge_distance(cell, ctx.size)
        if edge < 2:
            weight *= 0.2
        elif edge < 3:
            weight *= 0.6
    jitter = ctx.personality.randomization.starting_position
    weight *= 1 + (ctx.rng.random() - 0.5) * jitter
    return max(weight, MIN_WEIGHT)


def initial_move(ctx: EngineContext) -> Optional[MoveDescriptor]:
    """Weighted random cell of the starting area, centre cells favoured."""
    if ctx.own_stones():
        return None
    candidates = _starting_cells(ctx)
    if not candidates:
        center = geometry.board_center(ctx.size)
        if not ctx.is_empty(center):
            return None
        logger.debug("starting area unavailable, opening in the centre")
        return MoveDescriptor(center[0], center[1], MoveType.INITIAL, "initial",
                              "centre fallback", 50.0)
    weights = [_opening_weight(ctx, cell) for cell in candidates]
    row, col = ctx.rng.choices(candidates, weights=weights, k=1)[0]
    return MoveDescriptor(row, col, MoveType.INITIAL, "initial",
                          f"opening from {len(candidates)} starting cells", 50.0)


def _orthogonal_pressure(ctx: EngineContext, first) -> Optional[Tuple[int, int]]:
    for dr, dc in geometry.ORTHOGONAL:
        pos = (first[0] + dr, first[1] + dc)
        if ctx.board.is_valid_position(*pos) and ctx.cell(pos) == ctx.opponent:
            return (dr, dc)
    return None


def _extension_direction(ctx: EngineContext, first, target) -> str:
    toward_near, toward_far = geometry.head_directions(ctx.player)
    delta = geometry.axis_coordinate(target, ctx.player) - geometry.axis_coordinate(first, ctx.player)
    return toward_near if delta < 0 else toward_far


def _evasive_move(ctx: EngineContext, first, offset) -> Optional[MoveDescriptor]:
    """Diagonal step away from an orthogonally adjacent opponent stone."""
    dr, dc = offset
    away = (first[0] - dr, first[1] - dc)
    if dr == 0:
        options = [(away[0] - 1, away[1]), (away[0] + 1, away[1])]
    else:
        options = [(away[0], away[1] - 1), (away[0], away[1] + 1)]
    options = [p for p in options if ctx.is_empty(p) and
               not ctx.blocking.would_cross_opponent_diagonal(p[0], p[1], ctx.player)]
    if not options:
        return None
    options.sort(key=lambda p: (geometry.center_distance(p, ctx.size), ctx.rng.random()))
    target = options[0]
    direction = _extension_direction(ctx, first, target)
    return MoveDescriptor(target[0], target[1], MoveType.SECOND, "diagonal",
                          f"evading pressure on {first}", 80.0,
                          from_head=first, direction=direction)


def _l_move_score(ctx: EngineContext, first, move: geometry.PatternMove) -> float:
    score = 0.0
    axis = "vertical" if is_vertical(ctx.player) else "horizontal"
    if move.orientation == axis:
        score += 20
    near = geometry.border_distance(first, ctx.player, "near", ctx.size)
    far = geometry.border_distance(first, ctx.player, "far", ctx.size)
    delta = geometry.axis_coordinate(move.position, ctx.player) - geometry.axis_coordinate(first, ctx.player)
    toward_near = delta < 0
    if toward_near == (near <= far):
        score += 10
    else:
        score += 5
    return score + ctx.rng.random() * 5


def second_move(ctx: EngineContext) -> Optional[MoveDescriptor]:
    """L-pattern off the first stone, or a diagonal dodge when it is pressed."""
    stones = ctx.own_stones()
    if len(stones) != 1:
        return None
    first = stones[0]

    pressure = _orthogonal_pressure(ctx, first)
    if pressure is not None:
        move = _evasive_move(ctx, first, pressure)
        if move is not None:
            return move
        logger.debug("no evasive cell next to %s, falling back to an L move", first)

    candidates = [m for m in geometry.pattern_moves(first, ("L",), size=ctx.size)
                  if ctx.is_empty(m.position)]
    if not candidates:
        return None
    best = max(candidates, key=lambda m: _l_move_score(ctx, first, m))
    direction = _extension_direction(ctx, first, best.position)
    return MoveDescriptor(best.row, best.col, MoveType.SECOND, "L",
                          f"L-pattern from {first} heading {direction}", 60.0,
                          from_head=first, direction=direction)
