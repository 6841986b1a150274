"""Heuristic decision engine: patterns, gaps, fragments and the move pipeline."""
from .agent import EngineAgent, infer_player
from .blocking import BlockingDetector
from .diagnostics import SystemReport, check_gap_system
from .fragments import Fragment, FragmentTracker
from .generator import (
    MoveGenerator, bump_strategy, get_strategy_counts, print_strategy_summary, reset_strategy_counts,
)
from .moves import MoveDescriptor, MoveType, Priority
from .patterns import Pattern
from .personality import DEFAULT_PERSONALITY, Personality, load_personality
from .registry import Gap, GapRegistry
from .strategic import StrategicExtensionManager
from .threat_tracker import ThreatRecord, ThreatStatus, ThreatTracker
from .validator import MoveValidator

__all__ = [
    "BlockingDetector", "DEFAULT_PERSONALITY", "EngineAgent", "Fragment", "FragmentTracker",
    "Gap", "GapRegistry", "MoveDescriptor", "MoveGenerator", "MoveType", "MoveValidator",
    "Pattern", "Personality", "Priority", "StrategicExtensionManager", "SystemReport",
    "ThreatRecord", "ThreatStatus", "ThreatTracker", "bump_strategy", "check_gap_system",
    "get_strategy_counts", "infer_player", "load_personality", "print_strategy_summary",
    "reset_strategy_counts",
]
