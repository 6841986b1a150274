"""
Move generator
==============

Evaluates the handlers in a fixed order once per turn and returns the first
candidate that the validator accepts::

    initial -> second -> threat-response -> threat-follow-through
    -> fragment-connection -> attack -> border-connection
    -> chain-extension -> safe-gap-fill -> diagonal-extension

A handler that raises or returns something malformed is logged and skipped.
"""
from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Callable, Dict, List, Optional, Tuple

from ..board.game_board import player_name
from .blocking import BlockingDetector
from .context import EngineContext
from .fragments import FragmentTracker
from .handlers import (
    attack, border, chain_extension, connection, diagonal, gap_filling, opening, threat,
)
from .moves import MoveDescriptor, MoveType
from .personality import Personality, load_personality
from .registry import GapRegistry
from .strategic import StrategicExtensionManager
from .threat_tracker import ThreatTracker
from .validator import MoveValidator

logger = logging.getLogger(__name__)

Handler = Callable[[EngineContext], Optional[MoveDescriptor]]

# -------------------------------------------------------------------------------
# STRATEGY USAGE
# -------------------------------------------------------------------------------
_STRATEGY_COUNTER: Counter = Counter()

STRATEGIES: Tuple[str, ...] = (
    "initial", "second", "threat-response", "threat-follow-through",
    "fragment-connection", "attack", "border-connection", "chain-extension",
    "safe-gap-fill", "diagonal-extension",
)


def bump_strategy(name: str) -> None:
    """Increment global usage count for `name`."""
    _STRATEGY_COUNTER[name] += 1


def get_strategy_counts() -> Dict[str, int]:
    """Return a shallow copy so callers cannot mutate the original."""
    return dict(_STRATEGY_COUNTER)


def reset_strategy_counts() -> None:
    _STRATEGY_COUNTER.clear()


def print_strategy_summary(counts: Dict[str, int]) -> None:
    """
    Prints how many times each handler produced the chosen move.

    Args:
        counts (dict): strategy name -> number of uses.
    """
    print("\n Strategy usage summary:")
    for name in STRATEGIES:
        print(f"  {name}: {counts.get(name, 0)} times")


def _follow_through(ctx: EngineContext) -> Optional[MoveDescriptor]:
    if ctx.threats is None:
        return None
    return ctx.threats.pending_move()

# -------------------------------------------------------------------------------
# GENERATOR
# -------------------------------------------------------------------------------
class MoveGenerator(object):
    """
    Heuristic move selection for one player.

    Parameters
    ----------
    board : GameBoard
        Live board. The generator never writes to it.
    player : int
        ``PLAYER_X`` or ``PLAYER_O``.
    personality : Personality or mapping, optional
        Weights and noise; the default personality when omitted.
    enable_diagonal_extension : bool
        Run the diagonal handler as the last step.
    rng : random.Random, optional
        Source of all randomness, for reproducible games.
    use_trackers : bool
        Build the gap registry and fragment tracker. Without them the
        handlers fall back to treating every own stone as a head.
    debug : bool
        Same as calling :meth:`set_debug_mode` right away.
    """

    def __init__(self, board, player: int, personality=None, *,
                 enable_diagonal_extension: bool = False,
                 rng: Optional[random.Random] = None,
                 use_trackers: bool = True,
                 debug: bool = False):
        self.board = board
        self.player = player
        self.personality: Personality = load_personality(personality)
        self.enable_diagonal_extension = enable_diagonal_extension
        self.rng = rng if rng is not None else random.Random()

        self.blocking = BlockingDetector(board)
        registry = GapRegistry(board, player, self.blocking) if use_trackers else None
        fragments = FragmentTracker(board, player, registry) if use_trackers else None
        self.ctx = EngineContext(
            board=board,
            player=player,
            personality=self.personality,
            rng=self.rng,
            blocking=self.blocking,
            registry=registry,
            fragments=fragments,
            validator=MoveValidator(board, player, self.blocking),
            strategic=StrategicExtensionManager(board, player),
            threats=ThreatTracker(board, player),
        )
        self.steps: List[Tuple[str, Handler]] = [
            ("initial", opening.initial_move),
            ("second", opening.second_move),
            ("threat-response", threat.respond_to_threats),
            ("threat-follow-through", _follow_through),
            ("fragment-connection", connection.connect_fragments),
            ("attack", attack.generate_attack),
            ("border-connection", border.check_border_connection),
            ("chain-extension", chain_extension.generate_chain_extension),
            ("safe-gap-fill", gap_filling.fill_safe_gaps),
            ("diagonal-extension", diagonal.generate_diagonal_extension),
        ]
        self.last_move: Optional[MoveDescriptor] = None
        self.last_move_type: Optional[str] = None
        self.turns = 0
        self.failures: Counter = Counter()
        self._own_stones_seen = 0
        self.debug = False
        if debug:
            self.set_debug_mode(True)

    @property
    def registry(self) -> Optional[GapRegistry]:
        return self.ctx.registry

    @property
    def fragments(self) -> Optional[FragmentTracker]:
        return self.ctx.fragments

    @property
    def threats(self) -> ThreatTracker:
        return self.ctx.threats

    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        if self.ctx.registry is not None:
            self.ctx.registry.update_registry()
        if self.ctx.fragments is not None:
            self.ctx.fragments.update()
        # attacked cells only matter while they are still empty
        self.ctx.targeted.intersection_update(self.board.legal_moves())
        own = len(self.ctx.own_stones())
        if own < self._own_stones_seen:
            self._own_stones_seen = 0
        while self._own_stones_seen < own:
            self._own_stones_seen += 1
            self.ctx.threats.record_own_move()

    def _run(self, name: str, handler: Handler) -> Optional[MoveDescriptor]:
        try:
            move = handler(self.ctx)
        except Exception as exc:
            self.failures[name] += 1
            logger.warning("%s handler failed: %s", name, exc, exc_info=self.debug)
            return None
        if move is None:
            return None
        if not isinstance(move, MoveDescriptor) or not move.is_well_formed():
            logger.warning("%s handler returned a malformed move: %r", name, move)
            return None
        return move

    def get_next_move(self) -> Optional[MoveDescriptor]:
        """Pick this turn's move, or None when no handler has one."""
        self._refresh()
        self.turns += 1
        for name, handler in self.steps:
            if name == "diagonal-extension" and not self.enable_diagonal_extension:
                continue
            move = self._run(name, handler)
            if move is None:
                continue
            verdict = self.ctx.validator.validate(move)
            if not verdict.valid:
                logger.debug("%s candidate %s rejected: %s", name, move.position, verdict.reason)
                if move.move_type == MoveType.THREAT_FOLLOW_THROUGH:
                    self.ctx.threats.abandon_active("completion move rejected")
                continue
            self._accept(name, move)
            return move
        logger.info("%s has no move", player_name(self.player))
        self.last_move = None
        self.last_move_type = None
        return None

    def _accept(self, name: str, move: MoveDescriptor) -> None:
        if move.move_type == MoveType.THREAT_FOLLOW_THROUGH:
            self.ctx.threats.fulfil(move)
        else:
            self.ctx.threats.skip_resolution(move)
        if move.move_type == MoveType.ATTACK:
            self.ctx.threats.arm(move.position, move.meta.get("threat_cells", ()))
            self.ctx.targeted.add(move.position)
        bump_strategy(name)
        self.last_move = move
        self.last_move_type = move.move_type
        logger.info("%s plays %s (%s): %s", player_name(self.player), move.position, name, move.reason)

    # ------------------------------------------------------------------
    def reset(self) -> None:
        if self.ctx.registry is not None:
            self.ctx.registry.reset()
        self.ctx.threats.reset()
        self.ctx.strategic.reset()
        self.ctx.targeted.clear()
        self.blocking.invalidate_cache()
        self.last_move = None
        self.last_move_type = None
        self.turns = 0
        self._own_stones_seen = 0
        self.failures.clear()

    def set_debug_mode(self, enabled: bool) -> None:
        self.debug = bool(enabled)
        logging.getLogger("chain_connect").setLevel(logging.DEBUG if enabled else logging.INFO)
        self.ctx.debug = self.debug
        self.blocking.debug_mode = self.debug
        if self.ctx.registry is not None:
            self.ctx.registry.debug_mode = self.debug

    def get_stats(self) -> dict:
        fragments = self.ctx.fragments
        active = fragments.get_active_fragment() if fragments is not None else None
        return {
            "chain_length": active.size if active is not None else 0,
            "fragments": len(fragments.fragments) if fragments is not None else 0,
            "personality": self.personality.name,
            "gap_stats": self.ctx.registry.get_stats() if self.ctx.registry is not None else {},
            "last_move_type": self.last_move_type,
            "turns": self.turns,
            "threats": self.ctx.threats.get_stats(),
            "validator": self.ctx.validator.get_stats(),
            "failures": dict(self.failures),
        }
