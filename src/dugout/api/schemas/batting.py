from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from dugout.models import BattingHistoryEntry, Player


class BattingOrderRequest(BaseModel):
    players: List[Player] = Field(..., max_length=30)
    # Falls back to the stored batting log when omitted.
    history: List[BattingHistoryEntry] | None = None


class BandCountResponse(BaseModel):
    player_id: str
    top: int
    middle: int
    bottom: int


class BattingOrderResponse(BaseModel):
    order: List[str]
    band_counts: List[BandCountResponse]
    history_games: int
