"""Fairness scoring used to rank otherwise-valid lineups."""

from __future__ import annotations

import math
from statistics import fmean, pstdev
from typing import Mapping

from dugout.models import (
    FIELD_POSITION_COUNT,
    NON_BATTERY_INFIELD,
    NON_BATTERY_POSITIONS,
    GenerateLineupInput,
    InningAssignment,
    LineupScore,
    Position,
    playing_players,
)


BENCH_EQUITY_WEIGHT = 0.5
INFIELD_BALANCE_WEIGHT = 0.3
POSITION_VARIETY_WEIGHT = 0.2


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_tenth(value: float) -> float:
    # Half-up, not banker's rounding.
    return math.floor(value * 10 + 0.5) / 10


def _score_bench_equity(lineup: Mapping[int, InningAssignment], input: GenerateLineupInput) -> float:
    if len(input.present_players) <= FIELD_POSITION_COUNT:
        return 100.0

    bench_counts = {player_id: 0 for player_id in input.player_ids()}
    for inning in range(1, input.innings + 1):
        playing = playing_players(lineup.get(inning))
        for player_id in bench_counts:
            if player_id not in playing:
                bench_counts[player_id] += 1

    spread = max(bench_counts.values()) - min(bench_counts.values())
    if spread == 0:
        return 100.0
    return max(0.0, 100.0 * (1 - spread / input.innings))


def _score_infield_balance(lineup: Mapping[int, InningAssignment], input: GenerateLineupInput) -> float:
    infield_counts = {player_id: 0 for player_id in input.player_ids()}
    if not infield_counts:
        return 100.0

    for inning in range(1, input.innings + 1):
        assignment = lineup.get(inning) or {}
        for pos in NON_BATTERY_INFIELD:
            player_id = assignment.get(pos)
            if player_id in infield_counts:
                infield_counts[player_id] += 1

    std_dev = pstdev(infield_counts.values())
    if len(input.present_players) <= FIELD_POSITION_COUNT:
        max_std_dev = float(input.innings)
    else:
        max_std_dev = input.innings / 2
    if max_std_dev == 0:
        return 100.0
    return max(0.0, 100.0 * (1 - std_dev / max_std_dev))


def _score_position_variety(lineup: Mapping[int, InningAssignment], input: GenerateLineupInput) -> float:
    if not input.present_players:
        return 100.0

    distinct_counts: list[int] = []
    for player_id in input.player_ids():
        seen: set[Position] = set()
        for inning in range(1, input.innings + 1):
            assignment = lineup.get(inning) or {}
            for pos in NON_BATTERY_POSITIONS:
                if assignment.get(pos) == player_id:
                    seen.add(pos)
        distinct_counts.append(len(seen))

    max_possible = min(input.innings, len(NON_BATTERY_POSITIONS))
    if max_possible == 0:
        return 100.0
    return _clamp(100.0 * fmean(distinct_counts) / max_possible)


def score_lineup(lineup: Mapping[int, InningAssignment], input: GenerateLineupInput) -> LineupScore:
    """Score a lineup on bench equity, infield balance and position variety (0-100 each)."""

    bench_equity = _score_bench_equity(lineup, input)
    infield_balance = _score_infield_balance(lineup, input)
    position_variety = _score_position_variety(lineup, input)
    total = _round_tenth(
        bench_equity * BENCH_EQUITY_WEIGHT
        + infield_balance * INFIELD_BALANCE_WEIGHT
        + position_variety * POSITION_VARIETY_WEIGHT
    )
    return LineupScore(
        total=_clamp(total),
        bench_equity=bench_equity,
        infield_balance=infield_balance,
        position_variety=position_variety,
    )
