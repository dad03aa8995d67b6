"""Pydantic models for API I/O."""

from .batting import BandCountResponse, BattingOrderRequest, BattingOrderResponse
from .history import DeletedResponse, GameRecordRequest
from .lineup import (
    GenerateLineupRequest,
    GenerateLineupResponse,
    LineupOptionResponse,
    LineupPayloadRequest,
    LineupRequest,
    LineupScoreResponse,
    PreValidateResponse,
    RuleViolationResponse,
    ValidateLineupResponse,
)

__all__ = [
    "BandCountResponse",
    "BattingOrderRequest",
    "BattingOrderResponse",
    "DeletedResponse",
    "GameRecordRequest",
    "GenerateLineupRequest",
    "GenerateLineupResponse",
    "LineupOptionResponse",
    "LineupPayloadRequest",
    "LineupRequest",
    "LineupScoreResponse",
    "PreValidateResponse",
    "RuleViolationResponse",
    "ValidateLineupResponse",
]
