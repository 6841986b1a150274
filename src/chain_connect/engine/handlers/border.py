"""Finish a chain by reaching the border row or column from a nearby head."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ...board.game_board import is_vertical
from .. import geometry
from ..context import EngineContext
from ..moves import MoveDescriptor, MoveType

logger = logging.getLogger(__name__)

ADJACENT_VALUE = 8000
PATTERN_VALUE = 7000
EARLY_GAME = 10


def _border_line(ctx: EngineContext, side: str) -> int:
    return 0 if side == "near" else ctx.size - 1


def _on_border(ctx: EngineContext, pos, side: str) -> bool:
    return geometry.axis_coordinate(pos, ctx.player) == _border_line(ctx, side)


def _make_cell(ctx: EngineContext, axis: int, cross: int) -> Tuple[int, int]:
    return (axis, cross) if is_vertical(ctx.player) else (cross, axis)


def _candidate_heads(ctx: EngineContext) -> List[Tuple[Tuple[int, int], str]]:
    if ctx.fragments is not None:
        fragment = ctx.fragments.get_active_fragment()
        if fragment is not None:
            return [(fragment.near_head, "near"), (fragment.far_head, "far")]
    # no tracker: every stone is a potential head for both borders
    stones = ctx.own_stones()
    return [(s, side) for s in stones for side in ("near", "far")]


def _adjacent_cells(ctx: EngineContext, head, side: str) -> List[Tuple[int, int]]:
    line = _border_line(ctx, side)
    cross = geometry.cross_coordinate(head, ctx.player)
    cells = [_make_cell(ctx, line, c) for c in (cross - 1, cross, cross + 1)]
    return [c for c in cells if ctx.is_empty(c)]


def _pattern_cells(ctx: EngineContext, head, side: str) -> List[Tuple[int, int]]:
    line = _border_line(ctx, side)
    cells = []
    for move in geometry.pattern_moves(head, ("L", "I"), size=ctx.size):
        if geometry.axis_coordinate(move.position, ctx.player) != line:
            continue
        if not ctx.is_empty(move.position):
            continue
        gaps = geometry.gap_cells(head, move.position, ctx.size)
        if gaps and all(ctx.cell(g) == ctx.opponent for g in gaps):
            continue
        cells.append(move.position)
    return cells


def _legal(ctx: EngineContext, cell) -> bool:
    return not ctx.blocking.would_cross_opponent_diagonal(cell[0], cell[1], ctx.player)


def check_border_connection(ctx: EngineContext) -> Optional[MoveDescriptor]:
    weight = ctx.weight("border_connection")
    if ctx.rng.random() > weight and ctx.board.move_count < EARLY_GAME:
        logger.debug("border connection postponed")
        return None
    stones = ctx.own_stones()
    touched = {side for side in ("near", "far") if any(_on_border(ctx, s, side) for s in stones)}

    for head, side in _candidate_heads(ctx):
        if side in touched:
            continue
        distance = geometry.border_distance(head, ctx.player, side, ctx.size)
        if distance == 1:
            cells = [c for c in _adjacent_cells(ctx, head, side) if _legal(ctx, c)]
            if cells:
                row, col = ctx.rng.choice(cells)
                return MoveDescriptor(row, col, MoveType.BORDER_CONNECTION, "adjacent",
                                      f"touching the {side} border from {head}", ADJACENT_VALUE * weight,
                                      from_head=head)
        elif distance == 2:
            cells = [c for c in _pattern_cells(ctx, head, side) if _legal(ctx, c)]
            if cells:
                cells.sort(key=lambda c: abs(geometry.cross_coordinate(c, ctx.player) -
                                             geometry.cross_coordinate(head, ctx.player)))
                row, col = cells[0]
                kind = geometry.pattern_type(head, (row, col))
                return MoveDescriptor(row, col, MoveType.BORDER_CONNECTION, kind,
                                      f"{kind} pattern to the {side} border from {head}",
                                      PATTERN_VALUE * weight, from_head=head)
    return None
