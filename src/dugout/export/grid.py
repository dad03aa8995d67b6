"""Printable lineup grid export."""

from __future__ import annotations

import csv
from io import StringIO
from typing import List, Mapping, Sequence

from dugout.models import InningAssignment, Player, position_of


BENCH_LABEL = "BENCH"


class GridExportError(RuntimeError):
    """Raised when a lineup cannot be rendered as a grid."""


def lineup_grid_rows(
    lineup: Mapping[int, InningAssignment],
    players: Sequence[Player],
    innings: int,
) -> List[List[str]]:
    """Header row plus one row per present player: name, then position or bench per inning."""

    if innings < 1:
        raise GridExportError(f"innings must be at least 1, got {innings}")
    missing = [inning for inning in range(1, innings + 1) if not lineup.get(inning)]
    if missing:
        raise GridExportError(f"Lineup has no assignments for inning(s) {', '.join(map(str, missing))}")

    rows: List[List[str]] = [["Player", *(f"Inning {inning}" for inning in range(1, innings + 1))]]
    for player in players:
        if not player.is_present:
            continue
        cells = [player.name]
        for inning in range(1, innings + 1):
            cells.append(position_of(lineup.get(inning), player.player_id) or BENCH_LABEL)
        rows.append(cells)
    return rows


def export_lineup_to_csv(
    lineup: Mapping[int, InningAssignment],
    players: Sequence[Player],
    innings: int,
) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerows(lineup_grid_rows(lineup, players, innings))
    return buffer.getvalue()


def format_grid(rows: Sequence[Sequence[str]]) -> str:
    """Fixed-width text rendering for terminals."""

    if not rows:
        return ""
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    return "\n".join(
        "  ".join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip()
        for row in rows
    )
