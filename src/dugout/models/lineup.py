"""Lineup shapes, generation input and result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .player import POSITIONS, Player, Position


InningAssignment = Dict[Position, str]
Lineup = Dict[int, InningAssignment]

RuleId = Literal[
    "GRID_COMPLETE",
    "NO_DUPLICATES",
    "PITCHER_MATCH",
    "CATCHER_MATCH",
    "NO_CONSECUTIVE_BENCH",
    "INFIELD_MINIMUM",
    "NO_CONSECUTIVE_POSITION",
    "POSITION_BLOCK",
]

UNKNOWN_PLAYER_NAME = "Unknown"


class GenerateLineupInput(BaseModel):
    """Everything the generator, validator and scorer need for one game."""

    present_players: List[Player]
    innings: int = Field(..., ge=1)
    pitcher_assignments: Dict[int, str] = Field(default_factory=dict)
    catcher_assignments: Dict[int, str] = Field(default_factory=dict)
    position_blocks: Dict[str, List[Position]] = Field(default_factory=dict)
    bench_priority: Optional[Dict[str, float]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("pitcher_assignments", "catcher_assignments")
    @classmethod
    def _drop_cleared_slots(cls, value: Dict[int, str]) -> Dict[int, str]:
        # The editor clears a battery slot by writing an empty id.
        return {inning: player_id for inning, player_id in value.items() if player_id}

    def player_ids(self) -> List[str]:
        return [player.player_id for player in self.present_players]

    def player_names(self) -> Dict[str, str]:
        return {player.player_id: player.name for player in self.present_players}

    def player_name(self, player_id: str) -> str:
        return self.player_names().get(player_id, UNKNOWN_PLAYER_NAME)

    def is_blocked(self, player_id: str, position: Position) -> bool:
        return position in self.position_blocks.get(player_id, ())


@dataclass(frozen=True)
class RuleViolation:
    """A single broken lineup rule, worded for the coach."""

    rule: RuleId
    message: str
    inning: Optional[int] = None
    player_id: Optional[str] = None
    position: Optional[Position] = None


@dataclass(frozen=True)
class LineupGenerationResult:
    lineup: Lineup
    valid: bool
    errors: Tuple[RuleViolation, ...] = ()
    attempt_count: int = 0


@dataclass(frozen=True)
class LineupScore:
    total: float
    bench_equity: float
    infield_balance: float
    position_variety: float


@dataclass(frozen=True)
class FieldingFairness:
    total_bench_innings: int = 0
    positions_played: Tuple[Position, ...] = field(default_factory=tuple)


def playing_players(assignment: Optional[Mapping[Position, str]]) -> set[str]:
    """Return the ids fielded in one inning; empty slots are ignored."""

    if not assignment:
        return set()
    return {assignment[pos] for pos in POSITIONS if assignment.get(pos)}


def benched_players(
    assignment: Optional[Mapping[Position, str]],
    player_ids: Iterable[str],
) -> List[str]:
    """Players with no position in the inning are that inning's bench."""

    playing = playing_players(assignment)
    return [player_id for player_id in player_ids if player_id not in playing]


def position_of(assignment: Optional[Mapping[Position, str]], player_id: str) -> Optional[Position]:
    if not assignment:
        return None
    for pos in POSITIONS:
        if assignment.get(pos) == player_id:
            return pos
    return None
