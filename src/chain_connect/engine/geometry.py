"""chain_connect.engine.geometry
================================
Stateless board geometry: pattern vectors, neighbourhoods, gap cells and
border distances. Nothing here reads stones; callers pass the board size.

Pattern classes
---------------
* **L** - knight-like offsets ``(±2, ±1)`` / ``(±1, ±2)``, two gap cells.
* **I** - straight jumps ``(±2, 0)`` / ``(0, ±2)``, three gap cells inside the board.
* **D** - diagonal jumps ``(±2, ±2)``, one gap cell.
"""
from __future__ import annotations

import math
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..board.game_board import BOARD_SIZE, PLAYER_X

Coordinate = Tuple[int, int]

# -------------------------------------------------------------------------------
# CONSTANTS
# -------------------------------------------------------------------------------
PATTERN_VECTORS: Dict[str, Tuple[Coordinate, ...]] = {
    "L": ((-2, -1), (-2, 1), (2, -1), (2, 1),     # vertical L
          (-1, -2), (1, -2), (-1, 2), (1, 2)),    # horizontal L
    "I": ((-2, 0), (2, 0), (0, -2), (0, 2)),
    "D": ((-2, -2), (-2, 2), (2, -2), (2, 2)),
}
PATTERN_KINDS: Tuple[str, ...] = tuple(PATTERN_VECTORS)

DIRECTION_VECTORS: Dict[str, Coordinate] = {
    "north": (-1, 0), "south": (1, 0),
    "west": (0, -1), "east": (0, 1),
    "northwest": (-1, -1), "northeast": (-1, 1),
    "southwest": (1, -1), "southeast": (1, 1),
}

NEIGHBORS_8: Tuple[Coordinate, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
ORTHOGONAL: Tuple[Coordinate, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Tuple[Coordinate, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# order in which chain extension tries L-vectors from a head
STRATEGIC_L_ORDER: Tuple[Coordinate, ...] = (
    (2, 1), (2, -1), (-2, 1), (-2, -1),
    (1, 2), (1, -2), (-1, 2), (-1, -2),
)

_VECTOR_KIND: Dict[Coordinate, str] = {
    (abs(dr), abs(dc)): kind for kind, vectors in PATTERN_VECTORS.items() for dr, dc in vectors
}


class PatternMove(NamedTuple):
    """A candidate cell at a pattern vector from *origin*, with its annotations."""
    row: int
    col: int
    kind: str
    vector: Coordinate
    origin: Coordinate
    magnitude: float
    orientation: str
    direction: str
    alignment: int
    priority: int = 0

    @property
    def position(self) -> Coordinate:
        return (self.row, self.col)

# -------------------------------------------------------------------------------
# BASIC POSITION HELPERS
# -------------------------------------------------------------------------------
def in_bounds(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    return 0 <= row < size and 0 <= col < size


def neighbors8(pos: Coordinate, size: int = BOARD_SIZE) -> List[Coordinate]:
    r, c = pos
    return [(r + dr, c + dc) for dr, dc in NEIGHBORS_8 if in_bounds(r + dr, c + dc, size)]


def orthogonal_neighbors(pos: Coordinate, size: int = BOARD_SIZE) -> List[Coordinate]:
    r, c = pos
    return [(r + dr, c + dc) for dr, dc in ORTHOGONAL if in_bounds(r + dr, c + dc, size)]


def diagonal_neighbors(pos: Coordinate, size: int = BOARD_SIZE) -> List[Coordinate]:
    r, c = pos
    return [(r + dr, c + dc) for dr, dc in DIAGONAL if in_bounds(r + dr, c + dc, size)]


def are_adjacent(a: Coordinate, b: Coordinate) -> bool:
    dr, dc = abs(a[0] - b[0]), abs(a[1] - b[1])
    return max(dr, dc) == 1


def are_diagonal(a: Coordinate, b: Coordinate) -> bool:
    return abs(a[0] - b[0]) == 1 and abs(a[1] - b[1]) == 1


def crossing_corners(a: Coordinate, b: Coordinate) -> Tuple[Coordinate, Coordinate]:
    """The other two corners of the 2x2 block spanned by diagonal neighbours *a* and *b*."""
    return (a[0], b[1]), (b[0], a[1])


def manhattan(a: Coordinate, b: Coordinate) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def board_center(size: int = BOARD_SIZE) -> Coordinate:
    return (size // 2, size // 2)


def center_distance(pos: Coordinate, size: int = BOARD_SIZE) -> int:
    return manhattan(pos, board_center(size))


def edge_distance(pos: Coordinate, size: int = BOARD_SIZE) -> int:
    """Distance to the closest of all four edges."""
    r, c = pos
    return min(r, c, size - 1 - r, size - 1 - c)

# -------------------------------------------------------------------------------
# PLAYER AXIS
# -------------------------------------------------------------------------------
def axis_coordinate(pos: Coordinate, player: int) -> int:
    """Row for the vertical player, column for the horizontal one."""
    return pos[0] if player == PLAYER_X else pos[1]


def cross_coordinate(pos: Coordinate, player: int) -> int:
    return pos[1] if player == PLAYER_X else pos[0]


def border_distance(pos: Coordinate, player: int, which: str = "near", size: int = BOARD_SIZE) -> int:
    """Distance from *pos* to the player's *near* (row/col 0) or *far* edge."""
    coord = axis_coordinate(pos, player)
    if which == "near":
        return coord
    if which == "far":
        return size - 1 - coord
    raise ValueError(f"which must be 'near' or 'far', not {which!r}")


def nearest_border_distance(pos: Coordinate, player: int, size: int = BOARD_SIZE) -> int:
    return min(border_distance(pos, player, "near", size), border_distance(pos, player, "far", size))


def head_directions(player: int) -> Tuple[str, str]:
    """(towards near edge, towards far edge) compass names."""
    return ("north", "south") if player == PLAYER_X else ("west", "east")


def is_toward(origin: Coordinate, target: Coordinate, direction: Optional[str]) -> bool:
    if direction == "north":
        return target[0] < origin[0]
    if direction == "south":
        return target[0] > origin[0]
    if direction == "west":
        return target[1] < origin[1]
    if direction == "east":
        return target[1] > origin[1]
    return True


def step(pos: Coordinate, direction: str, distance: int = 1) -> Coordinate:
    dr, dc = DIRECTION_VECTORS[direction]
    return (pos[0] + dr * distance, pos[1] + dc * distance)

# -------------------------------------------------------------------------------
# VECTOR CLASSIFICATION
# -------------------------------------------------------------------------------
def pattern_type(a: Coordinate, b: Coordinate) -> Optional[str]:
    """'L', 'I', 'D', 'adjacent' or None for the displacement a -> b."""
    key = (abs(b[0] - a[0]), abs(b[1] - a[1]))
    kind = _VECTOR_KIND.get(key)
    if kind is not None:
        return kind
    if are_adjacent(a, b):
        return "adjacent"
    return None


def classify_orientation(dr: int, dc: int, kind: str) -> str:
    if kind == "L":
        return "vertical" if abs(dr) > abs(dc) else "horizontal"
    if kind == "I":
        return "horizontal" if dr == 0 else "vertical"
    if kind == "D":
        return "main-diagonal" if dr * dc > 0 else "anti-diagonal"
    return "undefined"


def vector_direction(dr: int, dc: int) -> str:
    if dr == 0 and dc != 0:
        return "east" if dc > 0 else "west"
    if dc == 0 and dr != 0:
        return "south" if dr > 0 else "north"
    if dr < 0 and dc < 0:
        return "northwest"
    if dr < 0 < dc:
        return "northeast"
    if dc < 0 < dr:
        return "southwest"
    if dr > 0 and dc > 0:
        return "southeast"
    return "undefined"


def vector_aligns_with(vector: Coordinate, direction_vector: Coordinate, threshold: float = 0.5) -> bool:
    """Cosine between the two vectors is at least *threshold*."""
    dot = vector[0] * direction_vector[0] + vector[1] * direction_vector[1]
    norm = math.hypot(*vector) * math.hypot(*direction_vector)
    if norm == 0:
        return False
    return dot / norm >= threshold

# -------------------------------------------------------------------------------
# GAP CELLS AND PATTERN MOVES
# -------------------------------------------------------------------------------
def gap_cells(a: Coordinate, b: Coordinate, size: int = BOARD_SIZE) -> List[Coordinate]:
    """
    Cells adjacent to both *a* and *b*, restricted to the board.

    The caller guarantees ``b - a`` is a pattern vector.

    Example:
        >>> gap_cells((5, 5), (7, 6))
        [(6, 5), (6, 6)]
    """
    around_b = set(neighbors8(b, size))
    return sorted(cell for cell in neighbors8(a, size) if cell in around_b)


def _player_priority(kind: str, orientation: str, direction: str, alignment: int, player: int) -> int:
    priority = 50
    axis_orientation = "vertical" if player == PLAYER_X else "horizontal"
    axis_directions = ("north", "south") if player == PLAYER_X else ("east", "west")
    if kind == "L":
        priority += 30 if orientation == axis_orientation else -20
    if direction in axis_directions:
        priority += 15
    priority += max(0, 15 - alignment * 2)
    return priority


def pattern_moves(
    origin: Coordinate,
    kinds: Sequence[str] = ("L", "I"),
    player: Optional[int] = None,
    size: int = BOARD_SIZE,
    direction: Optional[str] = None,
    threshold: float = 0.5,
) -> List[PatternMove]:
    """
    Enumerate the in-bounds cells at a pattern vector from *origin*.

    Args:
        origin: The stone the vectors start from.
        kinds: Pattern classes to include, any of ``'L'``, ``'I'``, ``'D'``.
        player: When given, moves get a player-relative priority (axis-aligned
            L-patterns first) and come back sorted by it.
        size: Board side length.
        direction: Optional compass name; keeps only vectors whose cosine with
            that direction reaches *threshold*.
        threshold: Cosine threshold for *direction*.

    Returns:
        list[PatternMove]: annotated candidates.
    """
    moves: List[PatternMove] = []
    for kind in kinds:
        for dr, dc in PATTERN_VECTORS.get(kind, ()):
            row, col = origin[0] + dr, origin[1] + dc
            if not in_bounds(row, col, size):
                continue
            if direction is not None and not vector_aligns_with((dr, dc), DIRECTION_VECTORS[direction], threshold):
                continue
            orientation = classify_orientation(dr, dc, kind)
            compass = vector_direction(dr, dc)
            alignment = nearest_border_distance((row, col), player, size) if player is not None else 0
            priority = _player_priority(kind, orientation, compass, alignment, player) if player is not None else 0
            moves.append(PatternMove(
                row, col, kind, (dr, dc), origin, math.hypot(dr, dc),
                orientation, compass, alignment, priority,
            ))
    if player is not None:
        moves.sort(key=lambda m: -m.priority)
    return moves


def cells_in_radius(pos: Coordinate, radius: int, size: int = BOARD_SIZE) -> Iterable[Coordinate]:
    r, c = pos
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            if (dr or dc) and in_bounds(r + dr, c + dc, size):
                yield (r + dr, c + dc)
