"""Personality: the tunable weights and noise levels of the engine.

Field names accept both snake_case and the camelCase spelling used by
saved personality files (``gapThreat``, ``attackThreshold``, ...).
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Priorities(BaseModel):
    """Per move type multipliers applied to handler values."""
    model_config = ConfigDict(populate_by_name=True)

    gap_threat: float = Field(1.0, alias="gapThreat", ge=0)
    critical_attack: float = Field(1.0, alias="criticalAttack", ge=0)
    standard_attack: float = Field(1.0, alias="standardAttack", ge=0)
    opportunistic_attack: float = Field(1.0, alias="opportunisticAttack", ge=0)
    border_connection: float = Field(1.0, alias="borderConnection", ge=0)
    chain_extension: float = Field(1.0, alias="chainExtension", ge=0)
    safe_gap_filling: float = Field(1.0, alias="safeGapFilling", ge=0)
    fragment_connection: float = Field(1.0, alias="fragmentConnection", ge=0)
    diagonal_extension: float = Field(1.0, alias="diagonalExtension", ge=0)


class Randomization(BaseModel):
    """Probabilities in [0, 1]."""
    model_config = ConfigDict(populate_by_name=True)

    starting_position: float = Field(0.2, alias="startingPosition", ge=0, le=1)
    move_selection: float = Field(0.1, alias="moveSelection", ge=0, le=1)
    head_selection: float = Field(0.3, alias="headSelection", ge=0, le=1)
    l_pattern_choice: float = Field(0.2, alias="lPatternChoice", ge=0, le=1)


class Strategy(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    attack_threshold: float = Field(3500, alias="attackThreshold", ge=0)
    defensive_reactivity: float = Field(1.0, alias="defensiveReactivity", ge=0, le=1)
    independent_playing: float = Field(0.5, alias="independentPlaying", ge=0, le=1)
    risk_taking: float = Field(0.5, alias="riskTaking", ge=0, le=1)


class StartingArea(BaseModel):
    """Rows and columns (inclusive) the opening stone is drawn from."""
    model_config = ConfigDict(populate_by_name=True)

    row_range: Tuple[int, int] = Field((6, 8), alias="rowRange")
    col_range: Tuple[int, int] = Field((6, 8), alias="colRange")
    center_weight: float = Field(0.8, alias="centerWeight", ge=0)
    avoid_edges: bool = Field(True, alias="avoidEdges")


class Personality(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "balanced"
    priorities: Priorities = Field(default_factory=Priorities)
    randomization: Randomization = Field(default_factory=Randomization)
    strategy: Strategy = Field(default_factory=Strategy)
    starting_area: StartingArea = Field(default_factory=StartingArea, alias="startingArea")

    def summary(self) -> dict:
        return self.model_dump(by_alias=True)


DEFAULT_PERSONALITY = Personality()


def load_personality(data: Optional[Any] = None) -> Personality:
    """Build a :class:`Personality` from a mapping, an instance or ``None``.

    Raises ``pydantic.ValidationError`` on out-of-range values.
    """
    if data is None:
        return DEFAULT_PERSONALITY.model_copy(deep=True)
    if isinstance(data, Personality):
        return data
    if not isinstance(data, Mapping):
        raise TypeError(f"personality must be a mapping, got {type(data).__name__}")
    personality = Personality.model_validate(dict(data))
    logger.debug("loaded personality %r", personality.name)
    return personality
