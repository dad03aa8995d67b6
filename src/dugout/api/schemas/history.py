from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from dugout.models import Player, Position


class GameRecordRequest(BaseModel):
    players: List[Player] = Field(..., max_length=30)
    innings: int = Field(..., ge=1, le=20)
    lineup: Dict[int, Dict[Position, str]]
    batting_order: List[str] = Field(..., max_length=30)
    game_label: str | None = Field(default=None, max_length=200)
    pitcher_assignments: Dict[int, str] | None = None
    catcher_assignments: Dict[int, str] | None = None


class DeletedResponse(BaseModel):
    entry_id: str
    deleted: bool
