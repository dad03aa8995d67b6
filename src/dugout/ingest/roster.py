"""Helpers to load roster CSVs and emit canonical players."""

from __future__ import annotations

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Iterable, List

from dugout.models import Player


logger = logging.getLogger(__name__)

_HEADER_TOKENS = {"name", "player"}


def parse_roster_csv(text: str) -> List[str]:
    """Return player names from CSV text, skipping blanks and a name/player header.

    A plain roster has one name per line and keeps the whole line, commas
    included. Quoted lines are unescaped. A header such as ``name,number``
    marks a multi-column file, where only the first column is read.
    """

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    header = next(csv.reader([lines[0]]))
    multi_column = len(header) > 1 and header[0].strip().lower() in _HEADER_TOKENS
    if multi_column or lines[0].lower() in _HEADER_TOKENS:
        lines = lines[1:]

    names: List[str] = []
    for line in lines:
        if multi_column or line.startswith('"'):
            value = next(csv.reader([line]))[0].strip()
        else:
            value = line
        if value:
            names.append(value)
    return names


def export_roster_csv(players: Iterable[Player]) -> str:
    """Serialize player names with a ``name`` header."""

    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["name"])
    for player in players:
        writer.writerow([player.name])
    return buffer.getvalue().rstrip("\n")


def players_from_names(names: Iterable[str]) -> List[Player]:
    """Assign stable ``p1..pN`` ids in file order; everyone starts present."""

    return [
        Player(player_id=f"p{index}", name=name, is_present=True)
        for index, name in enumerate(names, start=1)
    ]


def load_roster_csv(path: Path) -> List[Player]:
    text = path.read_text(encoding="utf-8-sig")
    names = parse_roster_csv(text)
    if not names:
        logger.warning("Roster file %s contains no player names", path)
    else:
        logger.info("Loaded %s players from %s", len(names), path)
    return players_from_names(names)
