"""Connected fragments of one player's stones and their extension heads."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from ..board.game_board import PLAYER_X, opponent_of
from . import geometry
from .geometry import Coordinate

logger = logging.getLogger(__name__)

SIZE_WEIGHT = 10
BORDER_TOUCH_BONUS = 100
BOTH_BORDERS_BONUS = 1000
HEAD_PROGRESS_WEIGHT = 5


@dataclass(frozen=True)
class Fragment:
    """A connected group of stones and its two axis-extremal heads."""
    player: int
    stones: FrozenSet[Coordinate]
    near_head: Coordinate
    far_head: Coordinate
    touches_near: bool
    touches_far: bool
    score: int

    @property
    def size(self) -> int:
        return len(self.stones)

    @property
    def borders_touched(self) -> int:
        return int(self.touches_near) + int(self.touches_far)

    @property
    def connected_to_top_border(self) -> bool:
        return self.player == PLAYER_X and self.touches_near

    @property
    def connected_to_bottom_border(self) -> bool:
        return self.player == PLAYER_X and self.touches_far

    @property
    def connected_to_left_border(self) -> bool:
        return self.player != PLAYER_X and self.touches_near

    @property
    def connected_to_right_border(self) -> bool:
        return self.player != PLAYER_X and self.touches_far

    def axis_span(self) -> Tuple[int, int]:
        return (geometry.axis_coordinate(self.near_head, self.player),
                geometry.axis_coordinate(self.far_head, self.player))

    def __contains__(self, pos) -> bool:
        return pos in self.stones


class HeadChoice(NamedTuple):
    head: Coordinate
    side: str           # 'near' or 'far'
    direction: str      # compass name the head grows toward


class ConnectionMove(NamedTuple):
    row: int
    col: int
    kind: str                 # 'adjacent' when the cell touches both fragments directly
    anchors: Tuple[Coordinate, Coordinate]
    value: int


class FragmentTracker:
    """Partition of a player's stones, rebuilt from the board on every :meth:`update`.

    Two stones belong to the same fragment when they touch orthogonally, touch
    diagonally through a link the opponent has not crossed, or form a pattern
    the registry still tracks. Without a registry only adjacency counts.
    """

    def __init__(self, board, player: int, registry=None):
        self.board = board
        self.player = player
        self.registry = registry
        self.fragments: List[Fragment] = []
        self.active: Optional[Fragment] = None
        self._by_stone: Dict[Coordinate, Fragment] = {}
        self._generation = -1

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------
    def _links(self, stones: Sequence[Coordinate]) -> Dict[Coordinate, List[Coordinate]]:
        own = set(stones)
        links: Dict[Coordinate, List[Coordinate]] = {s: [] for s in stones}
        for stone in stones:
            for other in geometry.neighbors8(stone, self.board.size):
                if other not in own:
                    continue
                if geometry.are_diagonal(stone, other) and \
                        self.board.is_diagonal_link_blocked(stone, other, self.player):
                    continue
                links[stone].append(other)
        if self.registry is not None:
            for pattern in self.registry.get_player_patterns(self.player):
                a, b = pattern.endpoints
                if a in links and b in links:
                    links[a].append(b)
                    links[b].append(a)
        return links

    def describe(self, stones) -> Fragment:
        """Fragment record for an explicit group of stones."""
        stones = frozenset(stones)
        size = self.board.size
        near = min(stones, key=lambda s: (geometry.axis_coordinate(s, self.player), s))
        far = max(stones, key=lambda s: (geometry.axis_coordinate(s, self.player), s))
        touches_near = geometry.axis_coordinate(near, self.player) == 0
        touches_far = geometry.axis_coordinate(far, self.player) == size - 1
        score = SIZE_WEIGHT * len(stones)
        score += BORDER_TOUCH_BONUS * (int(touches_near) + int(touches_far))
        if touches_near and touches_far:
            score += BOTH_BORDERS_BONUS
        remaining = geometry.border_distance(near, self.player, "near", size) + \
            geometry.border_distance(far, self.player, "far", size)
        score += HEAD_PROGRESS_WEIGHT * max(0, size - 1 - remaining)
        return Fragment(self.player, stones, near, far, touches_near, touches_far, score)

    def update(self) -> List[Fragment]:
        """Recompute every fragment from the live board."""
        stones = self.board.get_player_positions(self.player)
        links = self._links(stones)
        seen = set()
        fragments: List[Fragment] = []
        for start in stones:
            if start in seen:
                continue
            component = {start}
            stack = [start]
            seen.add(start)
            while stack:
                current = stack.pop()
                for nxt in links[current]:
                    if nxt not in seen:
                        seen.add(nxt)
                        component.add(nxt)
                        stack.append(nxt)
            fragments.append(self.describe(component))

        fragments.sort(key=lambda f: (-f.score, f.near_head))
        self.fragments = fragments
        self.active = fragments[0] if fragments else None
        self._by_stone = {s: f for f in fragments for s in f.stones}
        self._generation = self.board.move_count
        logger.debug("%d fragment(s) for %d, active size %d",
                     len(fragments), self.player, self.active.size if self.active else 0)
        return fragments

    def _fresh(self) -> None:
        if self._generation != self.board.move_count:
            self.update()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_active_fragment(self) -> Optional[Fragment]:
        self._fresh()
        return self.active

    def fragment_of(self, pos: Coordinate) -> Optional[Fragment]:
        self._fresh()
        return self._by_stone.get(pos)

    def heads(self, fragment: Optional[Fragment] = None) -> Optional[Tuple[Coordinate, Coordinate]]:
        """(near head, far head) of *fragment*, the active one by default."""
        fragment = fragment if fragment is not None else self.get_active_fragment()
        if fragment is None:
            return None
        return (fragment.near_head, fragment.far_head)

    def can_extend(self, side: str, fragment: Optional[Fragment] = None) -> bool:
        fragment = fragment if fragment is not None else self.get_active_fragment()
        if fragment is None:
            return False
        head = fragment.near_head if side == "near" else fragment.far_head
        return geometry.border_distance(head, self.player, side, self.board.size) > 1

    def head_direction(self, side: str) -> str:
        toward_near, toward_far = geometry.head_directions(self.player)
        return toward_near if side == "near" else toward_far

    def select_head(self, rng: Optional[random.Random] = None, randomness: float = 0.0,
                    fragment: Optional[Fragment] = None) -> Optional[HeadChoice]:
        """Pick the head to extend this turn.

        The head with more distance left to its border goes first; with
        probability *randomness* the two extendable heads are swapped.
        """
        fragment = fragment if fragment is not None else self.get_active_fragment()
        if fragment is None:
            return None
        size = self.board.size
        choices = [
            HeadChoice(head, side, self.head_direction(side))
            for side, head in (("near", fragment.near_head), ("far", fragment.far_head))
            if self.can_extend(side, fragment)
        ]
        if not choices:
            return None
        choices.sort(key=lambda h: -geometry.border_distance(h.head, self.player, h.side, size))
        rng = rng or random
        if len(choices) > 1 and rng.random() < randomness:
            choices.reverse()
        return choices[0]

    def extendable_heads(self, fragment: Optional[Fragment] = None) -> List[HeadChoice]:
        fragment = fragment if fragment is not None else self.get_active_fragment()
        if fragment is None:
            return []
        return [HeadChoice(head, side, self.head_direction(side))
                for side, head in (("near", fragment.near_head), ("far", fragment.far_head))
                if self.can_extend(side, fragment)]

    # ------------------------------------------------------------------
    # Bridging
    # ------------------------------------------------------------------
    def best_connection_move(self, first: Fragment, second: Fragment) -> Optional[ConnectionMove]:
        """Best empty cell joining *first* and *second*.

        A cell touching a stone of each fragment wins outright; otherwise
        the cell must be a pattern vector away from a stone of one fragment
        and touch or pattern-link a stone of the other.
        """
        board = self.board
        size = board.size
        best: Optional[ConnectionMove] = None

        def consider(move: ConnectionMove) -> None:
            nonlocal best
            if best is None or move.value > best.value:
                best = move

        for stone in first.stones:
            for cell in geometry.neighbors8(stone, size):
                if not board.is_valid_move(*cell):
                    continue
                partner = next((n for n in geometry.neighbors8(cell, size) if n in second.stones), None)
                if partner is not None and self._placeable(cell):
                    consider(ConnectionMove(cell[0], cell[1], "adjacent", (stone, partner), 1000))

        for source, target in ((first, second), (second, first)):
            for stone in source.stones:
                for move in geometry.pattern_moves(stone, geometry.PATTERN_KINDS, self.player, size):
                    cell = move.position
                    if not board.is_valid_move(*cell) or not self._placeable(cell):
                        continue
                    partner = next((n for n in geometry.neighbors8(cell, size) if n in target.stones), None)
                    if partner is None:
                        continue
                    value = 500 + (100 if move.kind == "L" else 0) + move.priority
                    consider(ConnectionMove(cell[0], cell[1], move.kind, (stone, partner), value))
        return best

    def find_connection_move(self) -> Optional[Tuple[ConnectionMove, Fragment, Fragment]]:
        """Best bridge between the active fragment and any other fragment."""
        self._fresh()
        if len(self.fragments) < 2 or self.active is None:
            return None
        best = None
        for other in self.fragments[1:]:
            move = self.best_connection_move(self.active, other)
            if move is not None and (best is None or move.value > best[0].value):
                best = (move, self.active, other)
        return best

    def _placeable(self, cell: Coordinate) -> bool:
        """No opponent diagonal would be crossed by a stone on *cell*."""
        opponent = opponent_of(self.player)
        for neighbour in geometry.diagonal_neighbors(cell, self.board.size):
            if self.board.board[neighbour[0]][neighbour[1]] != self.player:
                continue
            c1, c2 = geometry.crossing_corners(cell, neighbour)
            if self.board.board[c1[0]][c1[1]] == opponent and self.board.board[c2[0]][c2[1]] == opponent:
                return False
        return True

    def get_stats(self) -> dict:
        self._fresh()
        return {
            "fragments": len(self.fragments),
            "active_size": self.active.size if self.active else 0,
            "active_score": self.active.score if self.active else 0,
            "largest": max((f.size for f in self.fragments), default=0),
        }
