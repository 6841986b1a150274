"""Consistency checks over a running engine's bookkeeping."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from . import geometry

logger = logging.getLogger(__name__)


@dataclass
class SystemReport:
    successes: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        return f"{len(self.successes)} passed, {len(self.warnings)} warnings, {len(self.errors)} errors"


def _check_components(generator, report: SystemReport) -> None:
    ctx = generator.ctx
    for name in ("registry", "fragments", "blocking", "validator", "threats"):
        if getattr(ctx, name, None) is None:
            report.warnings.append(f"{name} not available, fallback heuristics in use")
        else:
            report.successes.append(f"{name} present")


def _check_registrations(registry, report: SystemReport) -> None:
    keys = set()
    pairs = set()
    for player in (registry.player, -registry.player):
        for pattern in registry.get_player_patterns(player):
            pair = frozenset(pattern.endpoints)
            if pair in pairs:
                report.errors.append(f"duplicate registration for {pattern.id}")
            pairs.add(pair)
            keys.add(pattern.key)
            expected = geometry.gap_cells(pattern.endpoints[0], pattern.endpoints[1], registry.board.size)
            if pattern.fill_cells(registry.board.size) != expected:
                report.errors.append(f"fill cells of {pattern.id} differ from geometry")
            for r, c in pattern.endpoints:
                if registry.board.board[r][c] != pattern.owner:
                    report.errors.append(f"endpoint ({r}, {c}) of {pattern.id} not owned by {pattern.owner}")
    report.successes.append(f"{len(keys)} registrations checked")


def _check_classification(registry, report: SystemReport) -> None:
    threatened = {g.pattern_id for g in registry.get_own_threatened_gaps()}
    safe = {g.pattern_id for g in registry.get_safe_gaps()}
    overlap = threatened & safe
    if overlap:
        report.errors.append(f"gaps both threatened and safe: {sorted(overlap)}")
    else:
        report.successes.append("threatened and safe gaps are disjoint")
    for gap in registry.get_gaps():
        if gap.blocked:
            report.warnings.append(f"blocked gap {gap.pattern_id} still registered")


def _check_cache(blocking, report: SystemReport) -> None:
    stats = blocking.get_stats()
    if stats["cached_results"] and stats["generation"] != stats["current_move"]:
        report.errors.append(
            f"blocking cache from move {stats['generation']} used at move {stats['current_move']}")
    else:
        report.successes.append("blocking cache is current")


def check_gap_system(generator) -> SystemReport:
    """Run every check against *generator* (a :class:`MoveGenerator`)."""
    report = SystemReport()
    _check_components(generator, report)
    registry = generator.ctx.registry
    if registry is not None:
        registry.update_registry()
        _check_registrations(registry, report)
        _check_classification(registry, report)
    _check_cache(generator.ctx.blocking, report)
    level = logging.INFO if report.ok else logging.WARNING
    logger.log(level, "gap system check: %s", report.summary())
    return report
