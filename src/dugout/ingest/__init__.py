"""Input adapters that normalize raw roster data."""

from .roster import export_roster_csv, load_roster_csv, parse_roster_csv, players_from_names

__all__ = [
    "export_roster_csv",
    "load_roster_csv",
    "parse_roster_csv",
    "players_from_names",
]
