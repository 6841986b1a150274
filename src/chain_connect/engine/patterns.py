"""Two-stone patterns and their detection on a live board."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from . import geometry
from .geometry import Coordinate

PatternKey = Tuple[int, Coordinate, Coordinate]


@dataclass(frozen=True)
class Pattern:
    """Two same-player stones one pattern vector apart.

    Endpoints are stored sorted so the same pair always yields the same key.
    """
    owner: int
    kind: str
    endpoints: Tuple[Coordinate, Coordinate]
    created_at: int = field(default=0, compare=False)

    @classmethod
    def between(cls, a: Coordinate, b: Coordinate, owner: int, created_at: int = 0) -> "Pattern":
        kind = geometry.pattern_type(a, b)
        if kind not in geometry.PATTERN_KINDS:
            raise ValueError(f"{a} and {b} are not a pattern vector apart")
        first, second = sorted((a, b))
        return cls(owner, kind, (first, second), created_at)

    @property
    def key(self) -> PatternKey:
        return (self.owner, self.endpoints[0], self.endpoints[1])

    @property
    def id(self) -> str:
        (r1, c1), (r2, c2) = self.endpoints
        return f"{self.kind}:{r1},{c1}-{r2},{c2}"

    @property
    def vector(self) -> Coordinate:
        (r1, c1), (r2, c2) = self.endpoints
        return (r2 - r1, c2 - c1)

    def fill_cells(self, size: int = geometry.BOARD_SIZE) -> List[Coordinate]:
        """Every geometric fill cell, whatever its content."""
        return geometry.gap_cells(self.endpoints[0], self.endpoints[1], size)

    def touches(self, pos: Coordinate) -> bool:
        return pos in self.endpoints


def partners_of(board, pos: Coordinate, player: int,
                kinds: Sequence[str] = geometry.PATTERN_KINDS) -> Iterable[Coordinate]:
    """Stones of *player* one pattern vector away from *pos*."""
    r, c = pos
    for kind in kinds:
        for dr, dc in geometry.PATTERN_VECTORS[kind]:
            nr, nc = r + dr, c + dc
            if board.is_valid_position(nr, nc) and board.board[nr][nc] == player:
                yield (nr, nc)


def patterns_at(board, pos: Coordinate, player: int,
                kinds: Sequence[str] = geometry.PATTERN_KINDS) -> List[Pattern]:
    """Patterns that the stone at *pos* forms with existing stones of *player*."""
    created = board.move_count
    return [Pattern.between(pos, other, player, created) for other in partners_of(board, pos, player, kinds)]


def find_patterns(board, player: int, kinds: Sequence[str] = geometry.PATTERN_KINDS) -> List[Pattern]:
    """All stone pairs of *player* at a pattern vector, each pair once."""
    found = {}
    for pos in board.get_player_positions(player):
        for pattern in patterns_at(board, pos, player, kinds):
            found.setdefault(pattern.key, pattern)
    return list(found.values())
