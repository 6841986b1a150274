"""
Mid-chain extension
===================

When neither head of the active fragment can grow any more, a stone from
the middle of the fragment is picked to branch out instead. Two kinds of
targets are considered:

* ``fragment-bridging`` - the axis gap between the fragment and another one
  of the same player.
* ``border-extension`` - a border the fragment has not reached yet.

Every non-head stone outside the border zone is scored against every
target with the weights of that target's mode, and the best stone wins.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Sequence

from ..board.game_board import opponent_of
from . import geometry
from .geometry import Coordinate

logger = logging.getLogger(__name__)

SCORING_WEIGHTS: Dict[str, Dict[str, float]] = {
    "fragment-bridging": {
        "distance": 15, "clearance": 20, "resistance": -25, "congestion": -30, "border": 8,
    },
    "border-extension": {
        "distance": 12, "clearance": 25, "resistance": -35, "congestion": -20, "border": 15,
    },
}

LOOKAHEAD = 3
CONGESTION_RADIUS = 2
HISTORY_LIMIT = 32


@dataclass
class ExtensionTarget:
    mode: str
    direction: str
    position: int       # axis coordinate the extension aims at
    priority: float
    border: bool = False
    meta: dict = field(default_factory=dict)


@dataclass
class StrategicChoice:
    stone: Coordinate
    direction: str
    target: ExtensionTarget
    score: float
    breakdown: Dict[str, float]

    @property
    def mode(self) -> str:
        return self.target.mode


class StrategicExtensionManager:

    def __init__(self, board, player: int):
        self.board = board
        self.player = player
        self.opponent = opponent_of(player)
        self.enabled = True
        self.history: Deque[StrategicChoice] = deque(maxlen=HISTORY_LIMIT)

    def reset(self) -> None:
        self.history.clear()

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------
    def _span(self, stones) -> Sequence[int]:
        values = [geometry.axis_coordinate(s, self.player) for s in stones]
        return min(values), max(values)

    def border_status(self, stones) -> Dict[str, bool]:
        low, high = self._span(stones)
        return {"near": low <= 1, "far": high >= self.board.size - 2}

    def fragment_targets(self, fragment, others) -> List[ExtensionTarget]:
        toward_near, toward_far = geometry.head_directions(self.player)
        low, high = self._span(fragment.stones)
        status = self.border_status(fragment.stones)
        targets = []
        for other in others:
            if other is fragment or other.stones == fragment.stones:
                continue
            o_low, o_high = self._span(other.stones)
            if high < o_low:
                start, end, direction = high, o_low, toward_far
            elif o_high < low:
                start, end, direction = o_high, low, toward_near
            else:
                continue
            gap = end - start - 1
            other_status = self.border_status(other.stones)
            opposite = (status["near"] and other_status["far"]) or (status["far"] and other_status["near"])
            priority = 1000 if opposite else 0
            priority += max(0, 100 - gap * 10)
            priority += 2 * (len(fragment.stones) + len(other.stones))
            if priority > 50 or opposite:
                targets.append(ExtensionTarget("fragment-bridging", direction, (start + end) // 2, priority,
                                               meta={"gap": gap, "winning": opposite}))
        return targets

    def border_targets(self, fragment) -> List[ExtensionTarget]:
        size = self.board.size
        toward_near, toward_far = geometry.head_directions(self.player)
        low, high = self._span(fragment.stones)
        status = self.border_status(fragment.stones)
        targets = []
        if not status["near"] and low > 2:
            targets.append(ExtensionTarget("border-extension", toward_near, 0, 200 - low * 5, border=True))
        if not status["far"] and high < size - 3:
            distance = size - 1 - high
            targets.append(ExtensionTarget("border-extension", toward_far, size - 1, 200 - distance * 5, border=True))
        return targets

    def identify_targets(self, fragment, fragments) -> List[ExtensionTarget]:
        targets = self.fragment_targets(fragment, fragments or []) + self.border_targets(fragment)
        return sorted(targets, key=lambda t: -t.priority)

    # ------------------------------------------------------------------
    # Scoring components
    # ------------------------------------------------------------------
    def distance_score(self, stone: Coordinate, target: ExtensionTarget) -> float:
        distance = abs(geometry.axis_coordinate(stone, self.player) - target.position)
        if target.border:
            return max(0.0, 10 - distance * 0.8)
        return max(0.0, 10 - distance)

    def clearance(self, stone: Coordinate, direction: str) -> int:
        empty = 0
        for distance in range(1, LOOKAHEAD + 1):
            r, c = geometry.step(stone, direction, distance)
            if not self.board.is_valid_position(r, c):
                break
            if self.board.board[r][c] == 0:
                empty += 1
        return empty

    def resistance(self, stone: Coordinate, direction: str) -> float:
        total = 0.0
        for distance in range(1, LOOKAHEAD + 1):
            r, c = geometry.step(stone, direction, distance)
            if not self.board.is_valid_position(r, c):
                break
            if self.board.board[r][c] == self.opponent:
                total += 1.0 / distance
        return min(1.0, total)

    def congestion(self, stone: Coordinate) -> float:
        cells = [p for p in geometry.cells_in_radius(stone, CONGESTION_RADIUS, self.board.size) if p != stone]
        if not cells:
            return 0.0
        occupied = sum(1 for r, c in cells if self.board.board[r][c] != 0)
        return occupied / len(cells)

    def border_proximity(self, stone: Coordinate, direction: str) -> float:
        pos = geometry.axis_coordinate(stone, self.player)
        if direction in ("north", "west"):
            return max(0, 10 - pos)
        return max(0, 10 - (self.board.size - 1 - pos))

    def score(self, stone: Coordinate, target: ExtensionTarget) -> Dict[str, float]:
        weights = SCORING_WEIGHTS[target.mode]
        parts = {
            "distance": self.distance_score(stone, target) * weights["distance"],
            "clearance": self.clearance(stone, target.direction) * weights["clearance"],
            "resistance": self.resistance(stone, target.direction) * weights["resistance"],
            "congestion": self.congestion(stone) * weights["congestion"],
            "border": self.border_proximity(stone, target.direction) * weights["border"],
        }
        parts["total"] = max(0.0, sum(parts.values()))
        return parts

    def in_border_zone(self, stone: Coordinate) -> bool:
        last = self.board.size - 1
        return any(v <= 1 or v >= last - 1 for v in stone)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_strategic_extension(self, fragment, fragments=None) -> Optional[StrategicChoice]:
        """Best (stone, direction) to branch from, or None."""
        if not self.enabled or fragment is None or len(fragment.stones) < 2:
            return None
        targets = self.identify_targets(fragment, fragments)
        if not targets:
            logger.debug("no strategic targets for fragment of %d stones", len(fragment.stones))
            return None
        heads = {fragment.near_head, fragment.far_head}
        stones = [s for s in fragment.stones if s not in heads and not self.in_border_zone(s)]
        best: Optional[StrategicChoice] = None
        for target in targets:
            for stone in stones:
                parts = self.score(stone, target)
                if parts["total"] <= 0:
                    continue
                if best is None or parts["total"] > best.score:
                    best = StrategicChoice(stone, target.direction, target, parts["total"], parts)
        if best is not None:
            self.history.append(best)
            logger.info("strategic extension from %s toward %s (%s, %.1f)",
                        best.stone, best.direction, best.mode, best.score)
        return best
