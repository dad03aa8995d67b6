"""Batting order rotation driven by historical band placement."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from dugout.models import BattingBand, BattingHistoryEntry, Player


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerBandCounts:
    player_id: str
    top: int = 0
    middle: int = 0
    bottom: int = 0

    @property
    def fairness_score(self) -> int:
        return self.top - self.bottom


def band_sizes(total_players: int) -> Tuple[int, int, int]:
    """Return (top, middle, bottom) sizes; the remainder lands in middle/bottom."""

    top_end = total_players // 3
    middle_end = (2 * total_players) // 3
    return top_end, middle_end - top_end, total_players - middle_end


def get_band(position: int, total_players: int) -> BattingBand:
    """Band of a 0-based batting slot for a lineup of ``total_players``."""

    if position < total_players // 3:
        return "top"
    if position < (2 * total_players) // 3:
        return "middle"
    return "bottom"


def calculate_band_counts(
    present_player_ids: Sequence[str],
    history: Iterable[BattingHistoryEntry],
) -> List[PlayerBandCounts]:
    """Tally band placements per present player across every recorded game."""

    tallies = {player_id: {"top": 0, "middle": 0, "bottom": 0} for player_id in present_player_ids}
    for entry in history:
        roster_size = len(entry.order)
        for position, player_id in enumerate(entry.order):
            tally = tallies.get(player_id)
            if tally is None:
                continue
            tally[get_band(position, roster_size)] += 1

    return [
        PlayerBandCounts(player_id=player_id, **tallies[player_id])
        for player_id in present_player_ids
    ]


def generate_batting_order(
    present_players: Sequence[Player],
    history: Sequence[BattingHistoryEntry],
    *,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Return present player ids in batting order, rotating past top hitters down."""

    rng = rng or random.Random()
    player_ids = [player.player_id for player in present_players]
    if not history:
        rng.shuffle(player_ids)
        return player_ids

    counts = calculate_band_counts(player_ids, history)
    rng.shuffle(counts)
    # Stable sort after a shuffle gives random tie-breaks.
    ranked = sorted(counts, key=lambda item: item.fairness_score)

    top_size, middle_size, _ = band_sizes(len(ranked))
    groups = [
        ranked[:top_size],
        ranked[top_size : top_size + middle_size],
        ranked[top_size + middle_size :],
    ]

    order: List[str] = []
    for group in groups:
        ids = [item.player_id for item in group]
        rng.shuffle(ids)
        order.extend(ids)

    logger.debug("Batting order built from %s games of history", len(history))
    return order
