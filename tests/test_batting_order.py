import random

import pytest

from dugout.batting import band_sizes, calculate_band_counts, generate_batting_order, get_band
from dugout.models import BattingHistoryEntry, Player


def _players(count: int) -> list[Player]:
    return [Player(player_id=f"p{i}", name=f"Player {i}") for i in range(1, count + 1)]


def _entry(index: int, order: list[str]) -> BattingHistoryEntry:
    return BattingHistoryEntry(entry_id=f"g{index}", game_date=f"2026-04-0{index}", order=order)


@pytest.mark.parametrize(
    ("position", "total", "band"),
    [
        (0, 9, "top"),
        (2, 9, "top"),
        (3, 9, "middle"),
        (5, 9, "middle"),
        (6, 9, "bottom"),
        (2, 10, "top"),
        (5, 10, "middle"),
        (6, 10, "bottom"),
        (9, 10, "bottom"),
        (0, 2, "middle"),
        (1, 2, "bottom"),
    ],
)
def test_get_band(position, total, band):
    assert get_band(position, total) == band


def test_band_sizes_push_remainder_down():
    assert band_sizes(9) == (3, 3, 3)
    assert band_sizes(10) == (3, 3, 4)
    assert band_sizes(11) == (3, 4, 4)


def test_calculate_band_counts_uses_each_game_roster_size():
    history = [
        _entry(1, ["p1", "p2", "p3", "p4", "p5", "p6", "p7", "p8", "p9"]),
        _entry(2, ["p9", "p8", "p7"]),
    ]

    counts = {item.player_id: item for item in calculate_band_counts(["p1", "p7", "p9", "p10"], history)}

    assert (counts["p1"].top, counts["p1"].middle, counts["p1"].bottom) == (1, 0, 0)
    # Second game has three batters, one per band.
    assert (counts["p7"].top, counts["p7"].middle, counts["p7"].bottom) == (0, 0, 2)
    assert (counts["p9"].top, counts["p9"].middle, counts["p9"].bottom) == (1, 0, 1)
    assert counts["p9"].fairness_score == 0
    assert counts["p10"].fairness_score == 0


def test_counts_keep_present_player_order():
    counts = calculate_band_counts(["p3", "p1"], [])

    assert [item.player_id for item in counts] == ["p3", "p1"]


def test_empty_history_gives_a_permutation():
    players = _players(9)

    order = generate_batting_order(players, [], rng=random.Random(2))

    assert sorted(order) == sorted(player.player_id for player in players)
    assert len(order) == 9


def test_frequent_top_hitters_rotate_to_bottom():
    players = _players(9)
    history = [
        _entry(index, ["p1", "p2", "p3", "p4", "p5", "p6", "p7", "p8", "p9"])
        for index in range(1, 4)
    ]

    for seed in range(5):
        order = generate_batting_order(players, history, rng=random.Random(seed))
        assert set(order[:3]) == {"p7", "p8", "p9"}
        assert set(order[3:6]) == {"p4", "p5", "p6"}
        assert set(order[6:]) == {"p1", "p2", "p3"}


def test_absent_history_players_are_ignored():
    players = _players(4)
    history = [_entry(1, ["p9", "p1", "p2", "p3", "p4"])]

    order = generate_batting_order(players, history, rng=random.Random(0))

    assert sorted(order) == ["p1", "p2", "p3", "p4"]
