"""Data models shared across the scheduling core, API and CLI."""

from .history import BattingBand, BattingHistoryEntry, GameHistoryEntry, PlayerGameSummary
from .lineup import (
    UNKNOWN_PLAYER_NAME,
    FieldingFairness,
    GenerateLineupInput,
    InningAssignment,
    Lineup,
    LineupGenerationResult,
    LineupScore,
    RuleId,
    RuleViolation,
    benched_players,
    playing_players,
    position_of,
)
from .player import (
    FIELD_POSITION_COUNT,
    INFIELD_POSITIONS,
    NON_BATTERY_INFIELD,
    NON_BATTERY_POSITIONS,
    OUTFIELD_POSITIONS,
    POSITIONS,
    Player,
    Position,
)

__all__ = [
    "BattingBand",
    "BattingHistoryEntry",
    "FIELD_POSITION_COUNT",
    "FieldingFairness",
    "GameHistoryEntry",
    "GenerateLineupInput",
    "INFIELD_POSITIONS",
    "InningAssignment",
    "Lineup",
    "LineupGenerationResult",
    "LineupScore",
    "NON_BATTERY_INFIELD",
    "NON_BATTERY_POSITIONS",
    "OUTFIELD_POSITIONS",
    "POSITIONS",
    "Player",
    "PlayerGameSummary",
    "Position",
    "RuleId",
    "RuleViolation",
    "UNKNOWN_PLAYER_NAME",
    "benched_players",
    "playing_players",
    "position_of",
]
