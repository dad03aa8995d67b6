"""Canonical player and position models shared by the scheduling core."""

from __future__ import annotations

from typing import Literal, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


Position = Literal["P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF"]

POSITIONS: Tuple[Position, ...] = ("P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF")
# Battery positions count as infield for the infield minimum.
INFIELD_POSITIONS: Tuple[Position, ...] = ("P", "C", "1B", "2B", "3B", "SS")
NON_BATTERY_INFIELD: Tuple[Position, ...] = ("1B", "2B", "3B", "SS")
OUTFIELD_POSITIONS: Tuple[Position, ...] = ("LF", "CF", "RF")
NON_BATTERY_POSITIONS: Tuple[Position, ...] = NON_BATTERY_INFIELD + OUTFIELD_POSITIONS

FIELD_POSITION_COUNT = len(POSITIONS)


class Player(BaseModel):
    """Roster snapshot handed to the core; identity is ``player_id``."""

    player_id: str = Field(..., min_length=1)
    name: str
    is_present: bool = True

    model_config = ConfigDict(frozen=True)
