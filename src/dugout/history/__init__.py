"""Finalized game history helpers."""

from .games import (
    batting_entry_from_game,
    bench_priority_from_history,
    compute_catcher_innings,
    compute_fielding_fairness,
    create_game_history_entry,
)

__all__ = [
    "batting_entry_from_game",
    "bench_priority_from_history",
    "compute_catcher_innings",
    "compute_fielding_fairness",
    "create_game_history_entry",
]
