"""Command-line interface for generating fielding lineups from a roster CSV."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dugout.batting import generate_batting_order
from dugout.config import DEFAULT_INNINGS, get_game_config, iter_game_configs
from dugout.config_loader import LineupProfile
from dugout.export import export_lineup_to_csv, format_grid, lineup_grid_rows
from dugout.history import bench_priority_from_history, compute_catcher_innings
from dugout.ingest import load_roster_csv
from dugout.lineup import distribute_across_innings, generate_multiple_lineups, pre_validate, score_lineup
from dugout.models import POSITIONS, GenerateLineupInput
from dugout.persistence import HistoryStore


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate fair youth-baseball fielding lineups")
    parser.add_argument("roster", type=Path, help="Path to roster CSV (one name per line)")
    parser.add_argument(
        "--innings",
        type=int,
        default=DEFAULT_INNINGS,
        choices=sorted(config.innings for config in iter_game_configs()),
        help="Innings in the game",
    )
    parser.add_argument(
        "--absent",
        nargs="*",
        default=None,
        help="Player IDs (p1..pN in roster order) missing today",
    )
    parser.add_argument(
        "--pitchers",
        default="",
        help="Comma-separated pitcher IDs; each gets a block of consecutive innings",
    )
    parser.add_argument(
        "--catchers",
        default="",
        help="Comma-separated catcher IDs; each gets a block of consecutive innings",
    )
    parser.add_argument(
        "--pitcher",
        action="append",
        default=[],
        help="Pitcher pre-assignment as INNING=PLAYER_ID (repeatable)",
    )
    parser.add_argument(
        "--catcher",
        action="append",
        default=[],
        help="Catcher pre-assignment as INNING=PLAYER_ID (repeatable)",
    )
    parser.add_argument(
        "--block",
        action="append",
        default=[],
        help="Position block as PLAYER_ID=POS[,POS...] (repeatable)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load assignments/blocks JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save assignments/blocks JSON", default=None)
    parser.add_argument("--options", type=int, default=3, help="Number of distinct lineups to build")
    parser.add_argument("--output", type=Path, default=None, help="Write the best lineup grid to this CSV")
    parser.add_argument(
        "--history-db",
        type=Path,
        default=None,
        help="History database used for bench priority and batting order fairness",
    )
    parser.add_argument("--batting-order", action="store_true", help="Also print a fair batting order")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _parse_battery(entries: list[str]) -> dict[int, str]:
    mapping: dict[int, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid assignment entry '{entry}', expected INNING=PLAYER_ID")
        inning, player_id = entry.split("=", 1)
        if not inning.strip().isdigit():
            raise ValueError(f"Invalid inning in '{entry}'")
        mapping[int(inning)] = player_id.strip()
    return mapping


def _parse_blocks(entries: list[str]) -> dict[str, list[str]]:
    blocks: dict[str, list[str]] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid block entry '{entry}', expected PLAYER_ID=POS[,POS...]")
        player_id, raw_positions = entry.split("=", 1)
        positions = [pos.strip().upper() for pos in raw_positions.split(",") if pos.strip()]
        unknown = [pos for pos in positions if pos not in POSITIONS]
        if unknown:
            raise ValueError(f"Unknown position(s) {', '.join(unknown)} in '{entry}'")
        blocks.setdefault(player_id.strip(), []).extend(positions)
    return blocks


def _parse_rotation(raw: str, innings: int, limit: int, role: str) -> dict[int, str]:
    player_ids = [player_id.strip() for player_id in raw.split(",") if player_id.strip()]
    if len(player_ids) > limit:
        raise SystemExit(f"A {innings}-inning game uses at most {limit} {role}s, got {len(player_ids)}")
    return distribute_across_innings(player_ids, innings)


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    game = get_game_config(args.innings)
    profile = LineupProfile(
        pitcher_assignments={
            **_parse_rotation(args.pitchers, game.innings, game.pitchers_per_game, "pitcher"),
            **_parse_battery(args.pitcher),
        },
        catcher_assignments={
            **_parse_rotation(args.catchers, game.innings, game.catchers_per_game, "catcher"),
            **_parse_battery(args.catcher),
        },
        position_blocks=_parse_blocks(args.block),
    )
    if args.load_profile:
        profile = LineupProfile.load(args.load_profile).merged_with(profile)
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved lineup profile to {args.save_profile}")

    absent = set(args.absent or [])
    roster = [
        player.model_copy(update={"is_present": player.player_id not in absent})
        for player in load_roster_csv(args.roster)
    ]
    present = [player for player in roster if player.is_present]

    store = HistoryStore(args.history_db) if args.history_db else None
    games = store.list_games() if store else []
    if games:
        caught = compute_catcher_innings(games, [player.player_id for player in present])
        print(f"Catcher innings over {len(games)} recorded games:")
        for player in sorted(present, key=lambda item: caught[item.player_id], reverse=True):
            print(f"  {player.name}: {caught[player.player_id]}")

    lineup_input = GenerateLineupInput(
        present_players=present,
        innings=game.innings,
        pitcher_assignments=profile.pitcher_assignments,
        catcher_assignments=profile.catcher_assignments,
        position_blocks=profile.position_blocks,
        bench_priority=bench_priority_from_history(games, [player.player_id for player in present]),
    )

    problems = pre_validate(lineup_input)
    if problems:
        print("Cannot build a lineup:")
        for problem in problems:
            print(f"  - {problem}")
        raise SystemExit(1)

    options = generate_multiple_lineups(lineup_input, max(1, args.options))
    if not options:
        print("Could not generate a valid lineup. Try adjusting pitcher/catcher assignments or position blocks.")
        raise SystemExit(1)

    scored = sorted(
        ((score_lineup(option.lineup, lineup_input), option) for option in options),
        key=lambda item: item[0].total,
        reverse=True,
    )
    for index, (score, option) in enumerate(scored, start=1):
        print(
            f"Option {index}: fairness {score.total:.1f} "
            f"(bench {score.bench_equity:.0f}, infield {score.infield_balance:.0f}, "
            f"variety {score.position_variety:.0f}; {option.attempt_count} attempts)"
        )
        print(format_grid(lineup_grid_rows(option.lineup, present, game.innings)))
        print()

    best_score, best = scored[0]
    if args.output:
        args.output.write_text(export_lineup_to_csv(best.lineup, present, game.innings), encoding="utf-8")
        print(f"Wrote lineup grid (fairness {best_score.total:.1f}) to {args.output}")

    if args.batting_order:
        history = store.list_batting_history() if store else []
        names = {player.player_id: player.name for player in present}
        order = generate_batting_order(present, history)
        print("Batting order:")
        for slot, player_id in enumerate(order, start=1):
            print(f"  {slot:2d}. {names[player_id]}")


if __name__ == "__main__":
    main()
