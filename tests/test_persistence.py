import pytest

from dugout.history import create_game_history_entry
from dugout.models import POSITIONS, BattingHistoryEntry, Player
from dugout.persistence import HistoryStore


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.setenv("DUGOUT_DB_PATH", str(tmp_path / "history.sqlite"))
    return HistoryStore(tmp_path / "ignored.sqlite")


def _game():
    players = [Player(player_id=f"p{i}", name=f"Player {i}") for i in range(1, 10)]
    lineup = {1: dict(zip(POSITIONS, [player.player_id for player in players]))}
    return create_game_history_entry(lineup, [player.player_id for player in players], 1, players)


def test_env_path_wins(store, tmp_path):
    assert store.db_path == tmp_path / "history.sqlite"


def test_batting_history_round_trip(store):
    store.add_batting_entry(BattingHistoryEntry(entry_id="a", game_date="2026-04-01", order=["p1", "p2"]))
    store.add_batting_entry(BattingHistoryEntry(entry_id="b", game_date="2026-04-08", order=["p2", "p1"]))

    entries = store.list_batting_history()

    assert [entry.entry_id for entry in entries] == ["a", "b"]
    assert entries[1].order == ["p2", "p1"]
    assert [entry.entry_id for entry in store.list_batting_history(limit=1)] == ["b"]
    assert store.list_batting_history(limit=0) == []


def test_duplicate_batting_entry_raises(store):
    entry = BattingHistoryEntry(entry_id="a", game_date="2026-04-01", order=["p1"])
    store.add_batting_entry(entry)

    with pytest.raises(ValueError):
        store.add_batting_entry(entry)


def test_delete_batting_entry(store):
    store.add_batting_entry(BattingHistoryEntry(entry_id="a", game_date="2026-04-01", order=["p1"]))

    assert store.delete_batting_entry("a")
    assert not store.delete_batting_entry("a")
    assert store.list_batting_history() == []


def test_game_round_trip(store):
    game = _game()
    store.add_game(game)

    loaded = store.get_game(game.entry_id)

    assert loaded == game
    assert loaded.lineup[1]["P"] == "p1"
    assert [entry.entry_id for entry in store.list_games()] == [game.entry_id]
    assert store.get_game("missing") is None


def test_delete_game_and_clear(store):
    first, second = _game(), _game()
    store.add_game(first)
    store.add_game(second)

    assert store.delete_game(first.entry_id)
    assert [entry.entry_id for entry in store.list_games()] == [second.entry_id]

    store.clear()
    assert store.list_games() == []
