from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from dugout.lineup import distribute_across_innings
from dugout.models import (
    GenerateLineupInput,
    LineupGenerationResult,
    LineupScore,
    Player,
    Position,
    RuleId,
    RuleViolation,
)


class LineupRequest(BaseModel):
    players: List[Player] = Field(..., max_length=30)
    innings: int = Field(default=6, ge=1, le=20)
    pitcher_assignments: Dict[int, str] = Field(default_factory=dict)
    catcher_assignments: Dict[int, str] = Field(default_factory=dict)
    # Chosen pitchers/catchers rotated in consecutive blocks; explicit assignments win.
    pitchers: List[str] = Field(default_factory=list, max_length=20)
    catchers: List[str] = Field(default_factory=list, max_length=20)
    position_blocks: Dict[str, List[Position]] = Field(default_factory=dict)
    bench_priority: Dict[str, float] | None = None
    use_history: bool = False

    def to_input(self, bench_priority: Dict[str, float] | None = None) -> GenerateLineupInput:
        return GenerateLineupInput(
            present_players=[player for player in self.players if player.is_present],
            innings=self.innings,
            pitcher_assignments={
                **distribute_across_innings(self.pitchers, self.innings),
                **self.pitcher_assignments,
            },
            catcher_assignments={
                **distribute_across_innings(self.catchers, self.innings),
                **self.catcher_assignments,
            },
            position_blocks=self.position_blocks,
            bench_priority=bench_priority if bench_priority is not None else self.bench_priority,
        )


class GenerateLineupRequest(LineupRequest):
    options: int = Field(default=1, ge=1, le=10)
    best_of: int | None = Field(default=None, ge=1, le=25)


class LineupPayloadRequest(LineupRequest):
    lineup: Dict[int, Dict[Position, str]]


class RuleViolationResponse(BaseModel):
    rule: RuleId
    message: str
    inning: int | None = None
    player_id: str | None = None
    position: Position | None = None

    @classmethod
    def from_violation(cls, violation: RuleViolation) -> "RuleViolationResponse":
        return cls(
            rule=violation.rule,
            message=violation.message,
            inning=violation.inning,
            player_id=violation.player_id,
            position=violation.position,
        )


class LineupScoreResponse(BaseModel):
    total: float
    bench_equity: float
    infield_balance: float
    position_variety: float

    @classmethod
    def from_score(cls, score: LineupScore) -> "LineupScoreResponse":
        return cls(
            total=score.total,
            bench_equity=score.bench_equity,
            infield_balance=score.infield_balance,
            position_variety=score.position_variety,
        )


class LineupOptionResponse(BaseModel):
    lineup: Dict[int, Dict[Position, str]]
    attempt_count: int
    score: LineupScoreResponse | None = None


class GenerateLineupResponse(BaseModel):
    valid: bool
    options: List[LineupOptionResponse]
    errors: List[RuleViolationResponse] = Field(default_factory=list)
    attempt_count: int = 0

    @classmethod
    def failed(cls, result: LineupGenerationResult) -> "GenerateLineupResponse":
        return cls(
            valid=False,
            options=[],
            errors=[RuleViolationResponse.from_violation(error) for error in result.errors],
            attempt_count=result.attempt_count,
        )


class PreValidateResponse(BaseModel):
    feasible: bool
    errors: List[str]
    catcher_innings: Dict[str, int] = Field(default_factory=dict)


class ValidateLineupResponse(BaseModel):
    valid: bool
    errors: List[RuleViolationResponse]
