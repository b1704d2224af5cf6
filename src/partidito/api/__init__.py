"""REST API for the partidito team balancer."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from partidito.api.schemas import (
    GenerateRequest,
    GenerateResponse,
    MatchResponse,
    PlayerPayload,
    PlayerResponse,
    RosterImportResponse,
    SavedMatchResponse,
    ScoreUpdate,
    ShareResponse,
)
from partidito.balancer import generate_balanced_teams
from partidito.config import api_host, api_port, default_labels, get_labels, history_limit
from partidito.ingest import RosterImportError, load_records_from_csv
from partidito.models import MatchResult, PlayerRecord, SavedMatch
from partidito.persistence import MatchStore
from partidito.report import export_match_to_csv, export_matches_to_csv, format_match_summary


logger = logging.getLogger("uvicorn.error")


def _player_response(record: PlayerRecord) -> PlayerResponse:
    return PlayerResponse.model_validate(record.model_dump())


def _match_response(result: MatchResult) -> MatchResponse:
    return MatchResponse.model_validate(result.model_dump())


def _saved_match_response(saved: SavedMatch) -> SavedMatchResponse:
    return SavedMatchResponse.model_validate(saved.model_dump())


def _payload_to_record(payload: PlayerPayload, *, player_id: str | None = None) -> PlayerRecord:
    try:
        return PlayerRecord(
            player_id=player_id or payload.player_id or uuid4().hex,
            name=payload.name,
            position_skills=payload.position_skills,
            stamina=payload.stamina,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        parsed = json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(parsed, dict) or not all(isinstance(value, str) for value in parsed.values()):
        raise HTTPException(status_code=400, detail="Mapping must be an object of column names")
    return parsed


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def create_app(store: MatchStore | None = None) -> FastAPI:
    app = FastAPI(title="partidito team balancer")
    store = store or MatchStore()
    app.state.match_store = store

    def _fetch_player_or_404(player_id: str) -> PlayerRecord:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    def _fetch_match_or_404(match_id: str) -> SavedMatch:
        saved = store.get_match(match_id)
        if saved is None:
            raise HTTPException(status_code=404, detail="Match not found")
        return saved

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=list[PlayerResponse])
    async def list_players():
        return [_player_response(player) for player in store.list_players()]

    @app.post("/players", response_model=PlayerResponse)
    async def create_player(payload: PlayerPayload):
        record = _payload_to_record(payload)
        store.save_player(record)
        return _player_response(record)

    @app.post("/players/import", response_model=RosterImportResponse)
    async def import_players(
        roster: UploadFile = File(...),
        roster_mapping: str | None = Form(None),
    ):
        roster_path = await _write_temp(roster)
        if roster_path is None:
            raise HTTPException(status_code=400, detail="roster file is empty")
        try:
            records = load_records_from_csv(roster_path, mapping=_parse_mapping(roster_mapping) or None)
        except RosterImportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            roster_path.unlink(missing_ok=True)

        for record in records:
            store.save_player(record)
        logger.info("Imported %d players from %s", len(records), roster.filename)
        return RosterImportResponse(
            imported=len(records),
            players=[_player_response(record) for record in records],
        )

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str):
        return _player_response(_fetch_player_or_404(player_id))

    @app.put("/players/{player_id}", response_model=PlayerResponse)
    async def update_player(player_id: str, payload: PlayerPayload):
        _fetch_player_or_404(player_id)
        record = _payload_to_record(payload, player_id=player_id)
        store.save_player(record)
        return _player_response(record)

    @app.delete("/players/{player_id}")
    async def delete_player(player_id: str):
        if not store.delete_player(player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        return {"player_id": player_id, "deleted": True}

    @app.post("/matches/generate", response_model=GenerateResponse)
    async def generate(request: GenerateRequest):
        pool = [_fetch_player_or_404(player_id) for player_id in request.player_ids]
        pool.extend(_payload_to_record(payload) for payload in request.players)

        seen: set[str] = set()
        duplicates: set[str] = set()
        for player in pool:
            if player.player_id in seen:
                duplicates.add(player.player_id)
            seen.add(player.player_id)
        if duplicates:
            raise HTTPException(status_code=400, detail=f"Duplicate player ids: {', '.join(sorted(duplicates))}")

        try:
            labels = get_labels(request.team_labels) if request.team_labels else default_labels()
        except (KeyError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        result = generate_balanced_teams(pool, request.use_stamina, team_names=labels.as_tuple())
        match_id = None
        if request.save:
            match_id = store.save_match(result).match_id
        return GenerateResponse(result=_match_response(result), match_id=match_id)

    @app.get("/matches", response_model=list[SavedMatchResponse])
    async def list_matches(limit: int | None = Query(None, ge=1)):
        matches = store.list_matches(limit=limit if limit is not None else history_limit())
        return [_saved_match_response(saved) for saved in matches]

    @app.get("/matches/export.csv")
    async def export_history_csv(limit: int | None = Query(None, ge=1)):
        matches = store.list_matches(limit=limit if limit is not None else history_limit())
        csv_text = export_matches_to_csv(
            [saved.result for saved in matches],
            entry_names=[saved.match_id for saved in matches],
        )
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=history.csv"},
        )

    @app.get("/matches/{match_id}", response_model=SavedMatchResponse)
    async def get_match(match_id: str):
        return _saved_match_response(_fetch_match_or_404(match_id))

    @app.put("/matches/{match_id}/score", response_model=SavedMatchResponse)
    async def update_score(match_id: str, payload: ScoreUpdate):
        _fetch_match_or_404(match_id)
        updated = store.update_score(match_id, payload.score_a, payload.score_b)
        return _saved_match_response(updated)

    @app.delete("/matches/{match_id}")
    async def delete_match(match_id: str):
        if not store.delete_match(match_id):
            raise HTTPException(status_code=404, detail="Match not found")
        return {"match_id": match_id, "deleted": True}

    @app.get("/matches/{match_id}/export.csv")
    async def export_csv(match_id: str):
        saved = _fetch_match_or_404(match_id)
        return Response(
            content=export_match_to_csv(saved.result),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={match_id}.csv"},
        )

    @app.get("/matches/{match_id}/summary.txt", response_class=PlainTextResponse)
    async def match_summary(match_id: str):
        saved = _fetch_match_or_404(match_id)
        return PlainTextResponse(format_match_summary(saved.result))

    @app.post("/matches/{match_id}/share", response_model=ShareResponse)
    async def share_match(match_id: str):
        saved = _fetch_match_or_404(match_id)
        return ShareResponse(share_id=store.share_match(saved.result))

    @app.get("/share/{share_id}", response_model=MatchResponse)
    async def get_shared(share_id: str):
        result = store.get_shared_match(share_id)
        if result is None:
            raise HTTPException(status_code=404, detail="Shared match not found")
        return _match_response(result)

    return app


def run() -> None:
    """Serve the API with uvicorn (PARTIDITO_HOST / PARTIDITO_PORT)."""

    import uvicorn

    uvicorn.run(create_app(), host=api_host(), port=api_port())
