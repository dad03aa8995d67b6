from pathlib import Path

from dugout.ingest import export_roster_csv, load_roster_csv, parse_roster_csv, players_from_names
from dugout.models import Player


def test_parse_roster_skips_header_and_blank_lines():
    text = "Name\nAva Lopez\n\n  Ben Ortiz  \n\"Cole, Jr.\"\n"

    assert parse_roster_csv(text) == ["Ava Lopez", "Ben Ortiz", "Cole, Jr."]


def test_parse_roster_without_header_keeps_first_line():
    assert parse_roster_csv("Dana\nEli") == ["Dana", "Eli"]


def test_parse_roster_keeps_commas_in_plain_lines():
    assert parse_roster_csv("Doe, Jane\nSmith, Al\n") == ["Doe, Jane", "Smith, Al"]


def test_parse_roster_multi_column_header_reads_first_column():
    assert parse_roster_csv("name,number\n\"Doe, Jane\",4\nAl,7") == ["Doe, Jane", "Al"]


def test_parse_roster_reads_first_column_only():
    assert parse_roster_csv("player,number\nFinn,7\nGus,12") == ["Finn", "Gus"]


def test_export_roster_escapes_names():
    players = [Player(player_id="p1", name="Ava Lopez"), Player(player_id="p2", name="Cole, Jr.")]

    assert export_roster_csv(players) == 'name\nAva Lopez\n"Cole, Jr."'


def test_exported_roster_parses_back():
    players = players_from_names(["Ava", 'Bo "Slugger" Park'])

    assert parse_roster_csv(export_roster_csv(players)) == ["Ava", 'Bo "Slugger" Park']


def test_load_roster_assigns_ids_in_file_order(tmp_path: Path):
    path = tmp_path / "roster.csv"
    path.write_text("\ufeffname\nAva\nBen\nCole\n", encoding="utf-8")

    players = load_roster_csv(path)

    assert [player.player_id for player in players] == ["p1", "p2", "p3"]
    assert [player.name for player in players] == ["Ava", "Ben", "Cole"]
    assert all(player.is_present for player in players)


def test_load_empty_roster(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("name\n\n", encoding="utf-8")

    assert load_roster_csv(path) == []
