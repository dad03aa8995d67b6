import pytest
from httpx import ASGITransport, AsyncClient

from dugout.api import create_app
from dugout.models import POSITIONS


@pytest.fixture(scope="module")
async def client():
    app = create_app()
    app.state.history_store.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client
    app.state.history_store.clear()


def _players(count: int) -> list[dict]:
    return [{"player_id": f"p{i}", "name": f"Player {i}", "is_present": True} for i in range(1, count + 1)]


def _rotation_lineup(innings: int = 6) -> dict:
    return {
        str(inning): {pos: f"p{(index + 2 * inning) % 9 + 1}" for index, pos in enumerate(POSITIONS)}
        for inning in range(1, innings + 1)
    }


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_roster_import(client: AsyncClient):
    files = {"roster": ("roster.csv", b"name\nAva\nBen\n\nCole\n", "text/csv")}
    resp = await client.post("/roster/import", files=files)
    assert resp.status_code == 200
    assert resp.json() == [
        {"player_id": "p1", "name": "Ava", "is_present": True},
        {"player_id": "p2", "name": "Ben", "is_present": True},
        {"player_id": "p3", "name": "Cole", "is_present": True},
    ]


@pytest.mark.anyio
async def test_roster_import_rejects_empty_file(client: AsyncClient):
    files = {"roster": ("roster.csv", b"name\n", "text/csv")}
    resp = await client.post("/roster/import", files=files)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_roster_export(client: AsyncClient):
    resp = await client.post("/roster/export.csv", json=_players(2))
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.text == "name\nPlayer 1\nPlayer 2"


@pytest.mark.anyio
async def test_prevalidate_reports_short_roster(client: AsyncClient):
    resp = await client.post("/lineups/prevalidate", json={"players": _players(8)})
    assert resp.status_code == 200
    body = resp.json()
    assert body["feasible"] is False
    assert any("9" in error and "8" in error for error in body["errors"])


@pytest.mark.anyio
async def test_absent_players_do_not_count(client: AsyncClient):
    players = _players(10)
    players[0]["is_present"] = False
    players[1]["is_present"] = False
    resp = await client.post("/lineups/prevalidate", json={"players": players})
    assert resp.json()["feasible"] is False


@pytest.mark.anyio
async def test_generate_single_lineup(client: AsyncClient):
    payload = {
        "players": _players(11),
        "innings": 6,
        "pitcher_assignments": {"1": "p1", "2": "p1", "3": "p2", "4": "p2", "5": "p3", "6": "p3"},
        "position_blocks": {"p4": ["1B", "SS"]},
    }
    resp = await client.post("/lineups/generate", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["errors"] == []
    assert len(body["options"]) == 1
    option = body["options"][0]
    assert option["lineup"]["1"]["P"] == "p1"
    assert option["lineup"]["6"]["P"] == "p3"
    assert 0 <= option["score"]["total"] <= 100
    for assignment in option["lineup"].values():
        assert assignment["1B"] != "p4"
        assert assignment["SS"] != "p4"


@pytest.mark.anyio
async def test_generate_rotates_chosen_pitchers(client: AsyncClient):
    payload = {"players": _players(11), "innings": 5, "pitchers": ["p1", "p2"], "catchers": ["p3"]}
    resp = await client.post("/lineups/generate", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    lineup = body["options"][0]["lineup"]
    assert [lineup[str(inning)]["P"] for inning in range(1, 6)] == ["p1", "p1", "p1", "p2", "p2"]
    assert {lineup[str(inning)]["C"] for inning in range(1, 6)} == {"p3"}


@pytest.mark.anyio
async def test_generate_multiple_options(client: AsyncClient):
    resp = await client.post("/lineups/generate", json={"players": _players(11), "options": 3})
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert 1 <= len(body["options"]) <= 3


@pytest.mark.anyio
async def test_generate_best_of(client: AsyncClient):
    resp = await client.post("/lineups/generate", json={"players": _players(10), "best_of": 3})
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert len(body["options"]) == 1


@pytest.mark.anyio
async def test_generate_infeasible_returns_errors(client: AsyncClient):
    resp = await client.post("/lineups/generate", json={"players": _players(8), "options": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is False
    assert body["options"] == []
    assert body["errors"][0]["rule"] == "GRID_COMPLETE"
    assert "Currently 8 present" in body["errors"][0]["message"]


@pytest.mark.anyio
async def test_generate_rejects_bad_position(client: AsyncClient):
    payload = {"players": _players(9), "position_blocks": {"p1": ["DH"]}}
    resp = await client.post("/lineups/generate", json=payload)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_validate_and_score_hand_edited_lineup(client: AsyncClient):
    lineup = _rotation_lineup()
    payload = {"players": _players(9), "lineup": lineup}

    resp = await client.post("/lineups/validate", json=payload)
    assert resp.json() == {"valid": True, "errors": []}

    lineup["2"]["RF"] = lineup["2"]["LF"]
    resp = await client.post("/lineups/validate", json=payload)
    body = resp.json()
    assert body["valid"] is False
    assert "NO_DUPLICATES" in {error["rule"] for error in body["errors"]}

    resp = await client.post("/lineups/score", json={"players": _players(9), "lineup": _rotation_lineup()})
    assert resp.status_code == 200
    assert resp.json()["bench_equity"] == 100.0


@pytest.mark.anyio
async def test_export_lineup_csv(client: AsyncClient):
    payload = {"players": _players(9), "innings": 2, "lineup": _rotation_lineup(2)}
    resp = await client.post("/lineups/export.csv", json=payload)
    assert resp.status_code == 200
    lines = resp.text.splitlines()
    assert lines[0] == "Player,Inning 1,Inning 2"
    assert len(lines) == 10


@pytest.mark.anyio
async def test_export_lineup_csv_rejects_missing_inning(client: AsyncClient):
    lineup = _rotation_lineup(2)
    del lineup["2"]
    payload = {"players": _players(9), "innings": 2, "lineup": lineup}
    resp = await client.post("/lineups/export.csv", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Lineup has no assignments for inning(s) 2"


@pytest.mark.anyio
async def test_batting_order_with_supplied_history(client: AsyncClient):
    history = [
        {"entry_id": f"h{i}", "game_date": "2026-04-01", "order": [f"p{n}" for n in range(1, 10)]}
        for i in range(3)
    ]
    resp = await client.post("/batting-order", json={"players": _players(9), "history": history})
    assert resp.status_code == 200
    body = resp.json()
    assert set(body["order"][:3]) == {"p7", "p8", "p9"}
    assert set(body["order"][6:]) == {"p1", "p2", "p3"}
    assert body["history_games"] == 3
    counts = {item["player_id"]: item for item in body["band_counts"]}
    assert counts["p1"]["top"] == 3


@pytest.mark.anyio
async def test_batting_history_endpoints(client: AsyncClient):
    entry = {"entry_id": "manual-1", "game_date": "2026-04-02", "order": ["p2", "p1"]}
    resp = await client.post("/history/batting", json=entry)
    assert resp.status_code == 201

    resp = await client.post("/history/batting", json=entry)
    assert resp.status_code == 409

    resp = await client.get("/history/batting")
    assert "manual-1" in {item["entry_id"] for item in resp.json()}

    resp = await client.delete("/history/batting/manual-1")
    assert resp.json() == {"entry_id": "manual-1", "deleted": True}

    resp = await client.delete("/history/batting/manual-1")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_record_game_feeds_history(client: AsyncClient):
    players = _players(9)
    order = [f"p{n}" for n in range(9, 0, -1)]
    payload = {
        "players": players,
        "innings": 6,
        "lineup": _rotation_lineup(),
        "batting_order": order,
        "game_label": "vs Cubs",
    }
    resp = await client.post("/history/games", json=payload)
    assert resp.status_code == 201
    game = resp.json()
    assert game["player_count"] == 9
    assert game["game_label"] == "vs Cubs"

    resp = await client.get(f"/history/games/{game['entry_id']}")
    assert resp.status_code == 200
    assert resp.json()["batting_order"] == order

    resp = await client.get("/history/batting")
    assert game["entry_id"] in {item["entry_id"] for item in resp.json()}

    resp = await client.post("/batting-order", json={"players": players})
    assert resp.json()["history_games"] >= 1

    resp = await client.post(
        "/lineups/generate",
        json={"players": _players(10), "use_history": True},
    )
    assert resp.json()["valid"] is True

    resp = await client.post("/lineups/prevalidate", json={"players": players})
    caught = resp.json()["catcher_innings"]
    assert caught == {"p1": 1, "p2": 0, "p3": 1, "p4": 1, "p5": 1, "p6": 1, "p7": 0, "p8": 1, "p9": 0}

    resp = await client.delete(f"/history/games/{game['entry_id']}")
    assert resp.json()["deleted"] is True

    resp = await client.get(f"/history/games/{game['entry_id']}")
    assert resp.status_code == 404
    resp = await client.delete(f"/history/games/{game['entry_id']}")
    assert resp.status_code == 404
