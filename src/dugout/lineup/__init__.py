"""Fielding lineup generation, rule validation and fairness scoring."""

from .generator import (
    EXHAUSTED_MESSAGE,
    attempt_build,
    distribute_across_innings,
    generate_best_lineup,
    generate_lineup,
    generate_multiple_lineups,
    lineups_meaningfully_different,
    pre_validate,
)
from .scorer import score_lineup
from .validator import validate_lineup

__all__ = [
    "EXHAUSTED_MESSAGE",
    "attempt_build",
    "distribute_across_innings",
    "generate_best_lineup",
    "generate_lineup",
    "generate_multiple_lineups",
    "lineups_meaningfully_different",
    "pre_validate",
    "score_lineup",
    "validate_lineup",
]
