"""REST API for the lineup scheduler."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from dugout.api.schemas import (
    BandCountResponse,
    BattingOrderRequest,
    BattingOrderResponse,
    DeletedResponse,
    GameRecordRequest,
    GenerateLineupRequest,
    GenerateLineupResponse,
    LineupOptionResponse,
    LineupPayloadRequest,
    LineupRequest,
    LineupScoreResponse,
    PreValidateResponse,
    RuleViolationResponse,
    ValidateLineupResponse,
)
from dugout.batting import calculate_band_counts, generate_batting_order
from dugout.export import GridExportError, export_lineup_to_csv
from dugout.history import (
    batting_entry_from_game,
    bench_priority_from_history,
    compute_catcher_innings,
    create_game_history_entry,
)
from dugout.ingest import export_roster_csv, parse_roster_csv, players_from_names
from dugout.lineup import (
    EXHAUSTED_MESSAGE,
    generate_best_lineup,
    generate_lineup,
    generate_multiple_lineups,
    pre_validate,
    score_lineup,
    validate_lineup,
)
from dugout.models import (
    BattingHistoryEntry,
    GameHistoryEntry,
    GenerateLineupInput,
    LineupGenerationResult,
    Player,
)
from dugout.persistence import HistoryStore


logger = logging.getLogger("uvicorn.error")


def _option(result: LineupGenerationResult, lineup_input: GenerateLineupInput) -> LineupOptionResponse:
    return LineupOptionResponse(
        lineup=result.lineup,
        attempt_count=result.attempt_count,
        score=LineupScoreResponse.from_score(score_lineup(result.lineup, lineup_input)),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="dugout lineup scheduler")
    store = HistoryStore(Path(__file__).resolve().parent.parent / "dugout.sqlite")
    app.state.history_store = store

    def build_input(request: LineupRequest) -> GenerateLineupInput:
        bench_priority = None
        if request.use_history:
            present_ids = [player.player_id for player in request.players if player.is_present]
            bench_priority = bench_priority_from_history(store.list_games(), present_ids)
        return request.to_input(bench_priority)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/roster/import", response_model=list[Player])
    async def import_roster(roster: UploadFile = File(...)):
        contents = await roster.read()
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="Roster file must be UTF-8 text") from exc
        names = parse_roster_csv(text)
        if not names:
            raise HTTPException(status_code=400, detail="Roster file contains no player names")
        logger.info("Imported %s players from %s", len(names), roster.filename)
        return players_from_names(names)

    @app.post("/roster/export.csv")
    async def export_roster(players: list[Player]):
        return Response(
            content=export_roster_csv(players),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=roster.csv"},
        )

    @app.post("/lineups/prevalidate", response_model=PreValidateResponse)
    async def prevalidate(request: LineupRequest):
        lineup_input = build_input(request)
        errors = pre_validate(lineup_input)
        caught = compute_catcher_innings(store.list_games(), lineup_input.player_ids())
        return PreValidateResponse(feasible=not errors, errors=errors, catcher_innings=caught)

    @app.post("/lineups/generate", response_model=GenerateLineupResponse)
    async def generate(request: GenerateLineupRequest):
        lineup_input = build_input(request)

        if request.best_of is not None:
            result = generate_best_lineup(lineup_input, request.best_of)
        elif request.options == 1:
            result = generate_lineup(lineup_input)
        else:
            results = generate_multiple_lineups(lineup_input, request.options)
            if results:
                logger.info("Generated %s/%s lineup options", len(results), request.options)
                return GenerateLineupResponse(
                    valid=True,
                    options=[_option(item, lineup_input) for item in results],
                    attempt_count=sum(item.attempt_count for item in results),
                )
            problems = pre_validate(lineup_input)
            messages = problems or [EXHAUSTED_MESSAGE]
            return GenerateLineupResponse(
                valid=False,
                options=[],
                errors=[RuleViolationResponse(rule="GRID_COMPLETE", message=message) for message in messages],
            )

        if not result.valid:
            return GenerateLineupResponse.failed(result)
        return GenerateLineupResponse(
            valid=True,
            options=[_option(result, lineup_input)],
            attempt_count=result.attempt_count,
        )

    @app.post("/lineups/validate", response_model=ValidateLineupResponse)
    async def validate(request: LineupPayloadRequest):
        violations = validate_lineup(request.lineup, request.to_input())
        return ValidateLineupResponse(
            valid=not violations,
            errors=[RuleViolationResponse.from_violation(item) for item in violations],
        )

    @app.post("/lineups/score", response_model=LineupScoreResponse)
    async def score(request: LineupPayloadRequest):
        return LineupScoreResponse.from_score(score_lineup(request.lineup, request.to_input()))

    @app.post("/lineups/export.csv")
    async def export_csv(request: LineupPayloadRequest):
        try:
            csv_text = export_lineup_to_csv(request.lineup, request.players, request.innings)
        except GridExportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=lineup.csv"},
        )

    @app.post("/batting-order", response_model=BattingOrderResponse)
    async def batting_order(request: BattingOrderRequest):
        present = [player for player in request.players if player.is_present]
        history = request.history if request.history is not None else store.list_batting_history()
        order = generate_batting_order(present, history)
        counts = calculate_band_counts([player.player_id for player in present], history)
        return BattingOrderResponse(
            order=order,
            band_counts=[
                BandCountResponse(player_id=item.player_id, top=item.top, middle=item.middle, bottom=item.bottom)
                for item in counts
            ],
            history_games=len(history),
        )

    @app.get("/history/batting", response_model=list[BattingHistoryEntry])
    async def list_batting_history(limit: int | None = None):
        return store.list_batting_history(limit=limit)

    @app.post("/history/batting", response_model=BattingHistoryEntry, status_code=201)
    async def add_batting_entry(entry: BattingHistoryEntry):
        try:
            return store.add_batting_entry(entry)
        except ValueError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.delete("/history/batting/{entry_id}", response_model=DeletedResponse)
    async def delete_batting_entry(entry_id: str):
        if not store.delete_batting_entry(entry_id):
            raise HTTPException(status_code=404, detail="Batting entry not found")
        return DeletedResponse(entry_id=entry_id, deleted=True)

    @app.get("/history/games", response_model=list[GameHistoryEntry])
    async def list_games(limit: int | None = None):
        return store.list_games(limit=limit)

    @app.post("/history/games", response_model=GameHistoryEntry, status_code=201)
    async def record_game(request: GameRecordRequest):
        entry = create_game_history_entry(
            request.lineup,
            request.batting_order,
            request.innings,
            request.players,
            game_label=request.game_label,
            pitcher_assignments=request.pitcher_assignments,
            catcher_assignments=request.catcher_assignments,
        )
        store.add_game(entry)
        store.add_batting_entry(batting_entry_from_game(entry))
        logger.info("Recorded game %s with %s players", entry.entry_id, entry.player_count)
        return entry

    @app.get("/history/games/{entry_id}", response_model=GameHistoryEntry)
    async def get_game(entry_id: str):
        entry = store.get_game(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Game not found")
        return entry

    @app.delete("/history/games/{entry_id}", response_model=DeletedResponse)
    async def delete_game(entry_id: str):
        if not store.delete_game(entry_id):
            raise HTTPException(status_code=404, detail="Game not found")
        store.delete_batting_entry(entry_id)
        return DeletedResponse(entry_id=entry_id, deleted=True)

    return app
