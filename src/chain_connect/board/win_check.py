"""Connectivity kernels for the square board.

Stones connect to all 8 neighbours. A diagonal step is refused when the two
other corners of its 2x2 block belong to the opponent *and* the opponent's
diagonal was linked first (a link is established on the later of its two
stones). Empty cells carry move index -1.
"""
from __future__ import annotations

from typing import List, Tuple

import numba as nb
import numpy as np

Coordinate = Tuple[int, int]
DiagonalLink = Tuple[Coordinate, Coordinate, int]


@nb.njit(cache=True)
def _diagonal_blocked(board: np.ndarray, move_order: np.ndarray,
                      r: int, c: int, nr: int, nc: int, player: int) -> bool:
    if board[r, nc] != -player or board[nr, c] != -player:
        return False
    opponent_link = max(move_order[r, nc], move_order[nr, c])
    own_link = max(move_order[r, c], move_order[nr, nc])
    return opponent_link < own_link


@nb.njit(cache=True)
def _flood_from_start_edge(board: np.ndarray, move_order: np.ndarray, player: int) -> np.ndarray:
    """
    Return a uint8 mask of every `player` stone reachable from its start edge.

    Parameters
    ----------
    board      : int8[:, :]   values {-1, 0, 1}
    move_order : int32[:, :]  move index per stone, -1 for empty cells
    player     : int          1 (X, top -> bottom) or -1 (O, left -> right)
    """
    n = board.shape[0]
    visited = np.zeros((n, n), np.uint8)
    queue_r = np.empty(n * n, np.int32)
    queue_c = np.empty(n * n, np.int32)
    head = 0
    tail = 0

    # seed ---------------------------------------------------------------
    for k in range(n):
        if player == 1:
            r = 0
            c = k
        else:
            r = k
            c = 0
        if board[r, c] == player:
            visited[r, c] = 1
            queue_r[tail] = r
            queue_c[tail] = c
            tail += 1

    # breadth-first over the 8-neighbourhood -----------------------------
    while head < tail:
        r = queue_r[head]
        c = queue_c[head]
        head += 1
        for dr in range(-1, 2):
            for dc in range(-1, 2):
                if dr == 0 and dc == 0:
                    continue
                nr = r + dr
                nc = c + dc
                if nr < 0 or nc < 0 or nr >= n or nc >= n:
                    continue
                if visited[nr, nc] == 1 or board[nr, nc] != player:
                    continue
                if dr != 0 and dc != 0:
                    if _diagonal_blocked(board, move_order, r, c, nr, nc, player):
                        continue
                visited[nr, nc] = 1
                queue_r[tail] = nr
                queue_c[tail] = nc
                tail += 1
    return visited


def reachable_from_start(board: np.ndarray, move_order: np.ndarray, player: int) -> np.ndarray:
    return _flood_from_start_edge(
        np.asarray(board, dtype=np.int8), np.asarray(move_order, dtype=np.int32), int(player)
    )


def connects_axis(board: np.ndarray, move_order: np.ndarray, player: int) -> Tuple[bool, int]:
    """Return ``(connected, reached)`` where *reached* counts stones linked to the start edge."""
    mask = reachable_from_start(board, move_order, player)
    n = mask.shape[0]
    target = mask[n - 1, :] if player == 1 else mask[:, n - 1]
    return bool(target.any()), int(mask.sum())


def is_diagonal_blocked(board: np.ndarray, move_order: np.ndarray,
                        a: Coordinate, b: Coordinate, player: int) -> bool:
    """True when the diagonal link a-b of *player* lost the race to the crossing one."""
    return bool(_diagonal_blocked(
        np.asarray(board, dtype=np.int8), np.asarray(move_order, dtype=np.int32),
        a[0], a[1], b[0], b[1], int(player),
    ))


def diagonal_links(board: np.ndarray, move_order: np.ndarray, player: int) -> List[DiagonalLink]:
    """All standing diagonal links of *player* as ``(a, b, established_at_move)``."""
    board = np.asarray(board, dtype=np.int8)
    move_order = np.asarray(move_order, dtype=np.int32)
    n = board.shape[0]
    links: List[DiagonalLink] = []
    for r in range(n - 1):
        for c in range(n):
            if board[r, c] != player:
                continue
            # only look downwards so each pair is visited once
            for dc in (-1, 1):
                nr, nc = r + 1, c + dc
                if not (0 <= nc < n) or board[nr, nc] != player:
                    continue
                if _diagonal_blocked(board, move_order, r, c, nr, nc, player):
                    continue
                established = int(max(move_order[r, c], move_order[nr, nc]))
                links.append(((r, c), (nr, nc), established))
    return links
