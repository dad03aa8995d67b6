"""Records of finalized games kept by the surrounding application."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import Position


BattingBand = Literal["top", "middle", "bottom"]


class BattingHistoryEntry(BaseModel):
    """One finalized batting order; append-only."""

    entry_id: str = Field(..., min_length=1)
    game_date: str
    order: List[str]

    model_config = ConfigDict(frozen=True)


class PlayerGameSummary(BaseModel):
    player_id: str
    player_name: str
    batting_position: int = Field(..., ge=-1)
    fielding_positions: List[Position]
    bench_innings: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class GameHistoryEntry(BaseModel):
    """Complete snapshot of a finalized game."""

    entry_id: str = Field(..., min_length=1)
    game_date: str
    innings: int = Field(..., ge=1, le=20)
    lineup: Dict[int, Dict[Position, str]]
    batting_order: List[str]
    player_summaries: List[PlayerGameSummary]
    game_label: Optional[str] = None
    pitcher_assignments: Optional[Dict[int, str]] = None
    catcher_assignments: Optional[Dict[int, str]] = None
    player_count: Optional[int] = None

    model_config = ConfigDict(frozen=True)
