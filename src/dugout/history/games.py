"""Game history snapshots and the cross-game fairness inputs derived from them."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from dugout.models import (
    UNKNOWN_PLAYER_NAME,
    BattingHistoryEntry,
    FieldingFairness,
    GameHistoryEntry,
    InningAssignment,
    Player,
    PlayerGameSummary,
    Position,
    position_of,
)


def create_game_history_entry(
    lineup: Mapping[int, InningAssignment],
    batting_order: Sequence[str],
    innings: int,
    players: Sequence[Player],
    *,
    game_label: Optional[str] = None,
    pitcher_assignments: Optional[Mapping[int, str]] = None,
    catcher_assignments: Optional[Mapping[int, str]] = None,
) -> GameHistoryEntry:
    """Snapshot a finalized game for every present player.

    Each summary lists the player's fielding position per inning (bench
    innings are skipped and counted instead) and their 0-based spot in the
    batting order, ``-1`` if they did not bat.
    """

    names = {player.player_id: player.name for player in players}
    order = list(batting_order)
    summaries: List[PlayerGameSummary] = []
    for player in players:
        if not player.is_present:
            continue
        fielding: List[Position] = []
        bench_innings = 0
        for inning in range(1, innings + 1):
            pos = position_of(lineup.get(inning), player.player_id)
            if pos is None:
                bench_innings += 1
            else:
                fielding.append(pos)
        summaries.append(
            PlayerGameSummary(
                player_id=player.player_id,
                player_name=names.get(player.player_id, UNKNOWN_PLAYER_NAME),
                batting_position=order.index(player.player_id) if player.player_id in order else -1,
                fielding_positions=fielding,
                bench_innings=bench_innings,
            )
        )

    return GameHistoryEntry(
        entry_id=uuid4().hex,
        game_date=datetime.now(timezone.utc).isoformat(),
        innings=innings,
        lineup={inning: dict(assignment) for inning, assignment in lineup.items()},
        batting_order=order,
        player_summaries=summaries,
        game_label=game_label,
        pitcher_assignments=dict(pitcher_assignments) if pitcher_assignments else None,
        catcher_assignments=dict(catcher_assignments) if catcher_assignments else None,
        player_count=len(summaries),
    )


def compute_fielding_fairness(
    history: Iterable[GameHistoryEntry],
    present_player_ids: Sequence[str],
) -> Dict[str, FieldingFairness]:
    """Sum bench innings and collect positions played per present player."""

    bench: Dict[str, int] = {player_id: 0 for player_id in present_player_ids}
    positions: Dict[str, List[Position]] = {player_id: [] for player_id in present_player_ids}
    for game in history:
        for summary in game.player_summaries:
            if summary.player_id not in bench:
                continue
            bench[summary.player_id] += summary.bench_innings
            seen = positions[summary.player_id]
            for pos in summary.fielding_positions:
                if pos not in seen:
                    seen.append(pos)

    return {
        player_id: FieldingFairness(
            total_bench_innings=bench[player_id],
            positions_played=tuple(positions[player_id]),
        )
        for player_id in present_player_ids
    }


def compute_catcher_innings(
    history: Iterable[GameHistoryEntry],
    present_player_ids: Sequence[str],
) -> Dict[str, int]:
    """Total innings caught per present player across all games."""

    totals: Dict[str, int] = {player_id: 0 for player_id in present_player_ids}
    for game in history:
        for assignment in game.lineup.values():
            catcher = assignment.get("C")
            if catcher in totals:
                totals[catcher] += 1
    return totals


def bench_priority_from_history(
    history: Sequence[GameHistoryEntry],
    present_player_ids: Sequence[str],
) -> Optional[Dict[str, float]]:
    """Cumulative bench innings per present player, or ``None`` without history."""

    if not history:
        return None
    fairness = compute_fielding_fairness(history, present_player_ids)
    return {player_id: float(metrics.total_bench_innings) for player_id, metrics in fairness.items()}


def batting_entry_from_game(entry: GameHistoryEntry) -> BattingHistoryEntry:
    return BattingHistoryEntry(
        entry_id=entry.entry_id,
        game_date=entry.game_date,
        order=list(entry.batting_order),
    )
