from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from partidito.api import create_app
from partidito.persistence import MatchStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client(tmp_path: Path):
    app = create_app(MatchStore(tmp_path / "api.sqlite"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _payload(pid: str, name: str, gk: float, df: float, md: float, fw: float, stamina: float | None = None) -> dict:
    return {
        "player_id": pid,
        "name": name,
        "position_skills": {"GK": gk, "DEF": df, "MID": md, "FWD": fw},
        "stamina": stamina,
    }


def _scenario_payloads() -> list[dict]:
    return [
        _payload("p1", "Ana", 9, 8, 7.5, 7.5),
        _payload("p2", "Beto", 8, 5.5, 5.5, 5),
        _payload("p3", "Caro", 2, 6, 6, 6),
        _payload("p4", "Dani", 1, 5, 5, 5),
    ]


def _sample_roster() -> str:
    return """id,name,GK,DEF,MID,FWD,stamina
1,Ana,8,4,5,6,7
2,Beto,2,7,7,8,
3,Caro,5,5,5,5,9
"""


async def _seed(client: AsyncClient) -> None:
    for payload in _scenario_payloads():
        resp = await client.post("/players", json=payload)
        assert resp.status_code == 200


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_player_crud(client: AsyncClient):
    resp = await client.post("/players", json=_payload("p1", "Lucía", 1, 5, 7, 3))
    assert resp.status_code == 200
    body = resp.json()
    assert body["skill"] == 4.0
    assert body["positions"] == ["MID"]

    resp = await client.put("/players/p1", json=_payload("ignored", "Lucía M", 1, 5, 7, 9))
    assert resp.status_code == 200
    assert resp.json()["player_id"] == "p1"
    assert resp.json()["positions"] == ["FWD"]

    resp = await client.get("/players")
    assert [p["name"] for p in resp.json()] == ["Lucía M"]

    resp = await client.delete("/players/p1")
    assert resp.status_code == 200
    resp = await client.get("/players/p1")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_create_player_requires_all_ratings(client: AsyncClient):
    resp = await client.post(
        "/players",
        json={"name": "Partial", "position_skills": {"GK": 5, "DEF": 5}},
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_update_missing_player_404(client: AsyncClient):
    resp = await client.put("/players/ghost", json=_payload("ghost", "Ghost", 1, 1, 1, 1))
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_import_roster_csv(client: AsyncClient):
    files = {"roster": ("roster.csv", _sample_roster(), "text/csv")}
    resp = await client.post("/players/import", files=files)
    assert resp.status_code == 200
    assert resp.json()["imported"] == 3

    resp = await client.get("/players")
    assert {p["player_id"] for p in resp.json()} == {"1", "2", "3"}


@pytest.mark.anyio
async def test_import_roster_with_mapping(client: AsyncClient):
    roster = "Nombre,Arquero,Defensa,Medio,Ofensa\nAna,8,4,5,6\n"
    files = {"roster": ("roster.csv", roster, "text/csv")}
    data = {
        "roster_mapping": '{"name": "Nombre", "goalkeeper": "Arquero", "defender": "Defensa", '
        '"midfielder": "Medio", "forward": "Ofensa"}'
    }
    resp = await client.post("/players/import", files=files, data=data)
    assert resp.status_code == 200
    [player] = resp.json()["players"]
    assert player["name"] == "Ana"
    assert player["position_skills"]["GK"] == 8.0


@pytest.mark.anyio
async def test_import_roster_bad_rating(client: AsyncClient):
    roster = "id,name,GK,DEF,MID,FWD\n1,Ana,eight,4,5,6\n"
    files = {"roster": ("roster.csv", roster, "text/csv")}
    resp = await client.post("/players/import", files=files)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_generate_from_stored_players(client: AsyncClient):
    await _seed(client)

    resp = await client.post("/matches/generate", json={"player_ids": ["p1", "p2", "p3", "p4"]})
    assert resp.status_code == 200
    body = resp.json()
    result = body["result"]
    assert [p["player_id"] for p in result["team_a"]["players"]] == ["p1", "p4"]
    assert [p["player_id"] for p in result["team_b"]["players"]] == ["p2", "p3"]
    assert result["skill_difference"] == 1.0
    assert body["match_id"] is None


@pytest.mark.anyio
async def test_generate_inline_players_with_labels(client: AsyncClient):
    resp = await client.post(
        "/matches/generate",
        json={"players": _scenario_payloads(), "team_labels": "colors"},
    )
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["team_a"]["name"] == "Equipo Verde"
    assert result["team_b"]["name"] == "Equipo Blanco"


@pytest.mark.anyio
async def test_generate_with_stamina_changes_assignment(client: AsyncClient):
    players = [
        _payload("ka", "Keeper A", 10, 5, 5, 4, stamina=10),
        _payload("kb", "Keeper B", 9, 6, 6, 5),
        _payload("f", "Field", 1, 7, 7, 7),
    ]
    plain = (await client.post("/matches/generate", json={"players": players})).json()["result"]
    blended = (
        await client.post("/matches/generate", json={"players": players, "use_stamina": True})
    ).json()["result"]

    assert [p["player_id"] for p in plain["team_a"]["players"]] == ["ka", "f"]
    assert [p["player_id"] for p in blended["team_b"]["players"]] == ["kb", "f"]


@pytest.mark.anyio
async def test_generate_empty_pool(client: AsyncClient):
    resp = await client.post("/matches/generate", json={})
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["team_a"]["players"] == []
    assert result["team_b"]["players"] == []
    assert result["skill_difference"] == 0


@pytest.mark.anyio
async def test_generate_errors(client: AsyncClient):
    await _seed(client)

    resp = await client.post("/matches/generate", json={"player_ids": ["p1", "ghost"]})
    assert resp.status_code == 404

    resp = await client.post("/matches/generate", json={"player_ids": ["p1"], "team_labels": "rainbow"})
    assert resp.status_code == 400

    resp = await client.post(
        "/matches/generate",
        json={"player_ids": ["p1"], "players": [_payload("p1", "Again", 1, 1, 1, 1)]},
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_history_score_share_flow(client: AsyncClient):
    await _seed(client)

    resp = await client.post("/matches/generate", json={"player_ids": ["p1", "p2", "p3", "p4"], "save": True})
    match_id = resp.json()["match_id"]
    assert match_id

    resp = await client.get("/matches")
    assert [m["match_id"] for m in resp.json()] == [match_id]

    resp = await client.put(f"/matches/{match_id}/score", json={"score_a": 3, "score_b": 2})
    assert resp.status_code == 200
    assert (resp.json()["score_a"], resp.json()["score_b"]) == (3, 2)

    resp = await client.get(f"/matches/{match_id}/export.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.text.splitlines()[0] == "team,player_id,name,skill,goalkeeper"

    resp = await client.get("/matches/export.csv")
    assert resp.status_code == 200
    assert len(resp.text.splitlines()) == 5

    resp = await client.get(f"/matches/{match_id}/summary.txt")
    assert "Skill difference: 1.0" in resp.text

    resp = await client.post(f"/matches/{match_id}/share")
    share_id = resp.json()["share_id"]
    resp = await client.get(f"/share/{share_id}")
    assert resp.status_code == 200
    assert resp.json()["skill_difference"] == 1.0

    resp = await client.delete(f"/matches/{match_id}")
    assert resp.status_code == 200
    resp = await client.get(f"/matches/{match_id}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_missing_share_and_match(client: AsyncClient):
    assert (await client.get("/share/nope")).status_code == 404
    assert (await client.put("/matches/nope/score", json={"score_a": 1})).status_code == 404
    assert (await client.delete("/matches/nope")).status_code == 404


@pytest.mark.anyio
@pytest.mark.parametrize("mapping", ["[1]", '{"name": 5}'])
async def test_import_roster_mapping_wrong_shape(client: AsyncClient, mapping: str):
    files = {"roster": ("roster.csv", _sample_roster(), "text/csv")}
    resp = await client.post("/players/import", files=files, data={"roster_mapping": mapping})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_history_limit_must_be_positive(client: AsyncClient):
    await _seed(client)
    for _ in range(3):
        resp = await client.post("/matches/generate", json={"player_ids": ["p1", "p2", "p3", "p4"], "save": True})
        assert resp.status_code == 200

    resp = await client.get("/matches", params={"limit": 2})
    assert len(resp.json()) == 2

    for limit in (0, -1):
        assert (await client.get("/matches", params={"limit": limit})).status_code == 422
        assert (await client.get("/matches/export.csv", params={"limit": limit})).status_code == 422
