"""Lightweight REST client for the dugout API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> dict:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the dugout REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV (one name per line)")
    parser.add_argument("--innings", type=int, default=6, help="Innings in the game")
    parser.add_argument("--options", type=int, default=1, help="Number of distinct lineups to request")
    parser.add_argument("--absent", nargs="*", default=[], help="Player IDs missing today")
    parser.add_argument("--pitchers", default="", help='JSON mapping of inning to pitcher id, e.g. {"1": "p1"}')
    parser.add_argument("--catchers", default="", help="JSON mapping of inning to catcher id")
    parser.add_argument("--rotate-pitchers", default="", help="Comma-separated pitcher IDs rotated in inning blocks")
    parser.add_argument("--rotate-catchers", default="", help="Comma-separated catcher IDs rotated in inning blocks")
    parser.add_argument("--blocks", default="", help='JSON mapping of player id to blocked positions')
    parser.add_argument("--use-history", action="store_true", help="Weight bench priority from stored games")
    parser.add_argument("--batting-order", action="store_true", help="Also request a batting order")
    parser.add_argument("--list-games", action="store_true", help="List recorded games and exit")
    parser.add_argument("--get-game", metavar="GAME_ID", help="Fetch a recorded game and exit")
    parser.add_argument("--export-path", type=Path, help="Write the first lineup grid CSV here")
    args = parser.parse_args()

    if args.list_games or args.get_game:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_games:
                resp = client.get("/history/games")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_game:
                resp = client.get(f"/history/games/{args.get_game}")
                if resp.status_code == 404:
                    raise SystemExit(f"game {args.get_game} not found")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
        return

    if args.roster is None:
        raise SystemExit("roster file is required unless using --list-games/--get-game")

    with httpx.Client(base_url=args.base_url) as client:
        resp = client.post(
            "/roster/import",
            files={"roster": (args.roster.name, args.roster.read_bytes(), "text/csv")},
        )
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "roster import failed"))
        resp.raise_for_status()
        absent = set(args.absent)
        players = [dict(player, is_present=player["player_id"] not in absent) for player in resp.json()]

        payload = {
            "players": players,
            "innings": args.innings,
            "pitcher_assignments": build_mapping(args.pitchers),
            "catcher_assignments": build_mapping(args.catchers),
            "pitchers": [pid.strip() for pid in args.rotate_pitchers.split(",") if pid.strip()],
            "catchers": [pid.strip() for pid in args.rotate_catchers.split(",") if pid.strip()],
            "position_blocks": build_mapping(args.blocks),
            "use_history": args.use_history,
        }

        resp = client.post("/lineups/prevalidate", json=payload)
        resp.raise_for_status()
        report = resp.json()
        if not report["feasible"]:
            print("Cannot build a lineup:")
            for error in report["errors"]:
                print(f"  - {error}")
            raise SystemExit(1)

        resp = client.post("/lineups/generate", json={**payload, "options": args.options}, timeout=60.0)
        resp.raise_for_status()
        result = resp.json()
        if not result["valid"]:
            for error in result["errors"]:
                print(f"  - {error['message']}")
            raise SystemExit(1)
        print(json.dumps(result["options"], indent=2))

        if args.export_path:
            first = result["options"][0]["lineup"]
            resp = client.post("/lineups/export.csv", json={**payload, "lineup": first})
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")

        if args.batting_order:
            resp = client.post("/batting-order", json={"players": players})
            resp.raise_for_status()
            print("Batting order:", json.dumps(resp.json()["order"]))


if __name__ == "__main__":
    main()
