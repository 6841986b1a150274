"""Shared per-engine state handed to every move handler."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from ..board.game_board import opponent_of
from .blocking import BlockingDetector
from .fragments import FragmentTracker
from .personality import Personality
from .registry import GapRegistry
from .validator import MoveValidator


@dataclass
class EngineContext:
    board: object
    player: int
    personality: Personality
    rng: random.Random
    blocking: BlockingDetector
    registry: Optional[GapRegistry]
    fragments: Optional[FragmentTracker]
    validator: MoveValidator
    strategic: Optional[object] = None
    threats: Optional[object] = None
    debug: bool = False
    targeted: set = field(default_factory=set)

    @property
    def opponent(self) -> int:
        return opponent_of(self.player)

    @property
    def size(self) -> int:
        return self.board.size

    def own_stones(self):
        return self.board.get_player_positions(self.player)

    def cell(self, pos) -> int:
        return int(self.board.board[pos[0]][pos[1]])

    def is_empty(self, pos) -> bool:
        return self.board.is_valid_move(pos[0], pos[1])

    def weight(self, name: str) -> float:
        return float(getattr(self.personality.priorities, name))
