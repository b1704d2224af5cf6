"""Persistence layer for the roster, match history and shared matches."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from partidito.config import db_path as configured_db_path
from partidito.models import MatchResult, PlayerRecord, SavedMatch


class MatchStore:
    """Simple SQLite-backed store for players and generated matches."""

    def __init__(self, db_path: Path | str | None = None):
        raw = db_path if db_path is not None else configured_db_path()
        if isinstance(raw, str) and raw.startswith("file:"):
            self.db_path: Path | str = raw
            self._use_uri = True
        else:
            self.db_path = Path(raw)
            self._use_uri = False
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    player_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS matches (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    result_json TEXT NOT NULL,
                    score_a INTEGER,
                    score_b INTEGER
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS shared_matches (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    result_json TEXT NOT NULL
                )
                """
            )
            conn.commit()

    # Players

    def save_player(self, player: PlayerRecord) -> PlayerRecord:
        """Insert the player, or replace it if the id already exists."""

        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO players (id, name, player_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    player_json = excluded.player_json,
                    updated_at = excluded.updated_at
                """,
                (player.player_id, player.name, player.model_dump_json(), now, now),
            )
            conn.commit()
        return player

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT player_json FROM players WHERE id = ?", (player_id,)).fetchone()
            if row is None:
                return None
            return PlayerRecord.model_validate_json(row["player_json"])

    def list_players(self) -> List[PlayerRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT player_json FROM players ORDER BY datetime(created_at) DESC, rowid DESC"
            ).fetchall()
        return [PlayerRecord.model_validate_json(row["player_json"]) for row in rows]

    def delete_player(self, player_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            conn.commit()
            return cursor.rowcount > 0

    # History

    def save_match(
        self,
        result: MatchResult,
        *,
        match_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        score_a: Optional[int] = None,
        score_b: Optional[int] = None,
    ) -> SavedMatch:
        saved = SavedMatch(
            match_id=match_id or uuid4().hex,
            created_at=created_at or datetime.now(timezone.utc),
            result=result,
            score_a=score_a,
            score_b=score_b,
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO matches (id, created_at, result_json, score_a, score_b)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    saved.match_id,
                    saved.created_at.isoformat(),
                    result.model_dump_json(),
                    score_a,
                    score_b,
                ),
            )
            conn.commit()
        return saved

    def get_match(self, match_id: str) -> Optional[SavedMatch]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM matches WHERE id = ?", (match_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_match(row)

    def list_matches(self, limit: int = 50) -> List[SavedMatch]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM matches ORDER BY datetime(created_at) DESC, rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_match(row) for row in rows]

    def update_score(self, match_id: str, score_a: Optional[int], score_b: Optional[int]) -> SavedMatch:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE matches SET score_a = ?, score_b = ? WHERE id = ?",
                (score_a, score_b, match_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise KeyError(f"Match {match_id} not found")
        updated = self.get_match(match_id)
        if updated is None:  # pragma: no cover
            raise KeyError(f"Match {match_id} not found after update")
        return updated

    def delete_match(self, match_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM matches WHERE id = ?", (match_id,))
            conn.commit()
            return cursor.rowcount > 0

    # Sharing

    def share_match(self, result: MatchResult) -> str:
        share_id = uuid4().hex
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO shared_matches (id, created_at, result_json) VALUES (?, ?, ?)",
                (share_id, datetime.now(timezone.utc).isoformat(), result.model_dump_json()),
            )
            conn.commit()
        return share_id

    def get_shared_match(self, share_id: str) -> Optional[MatchResult]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT result_json FROM shared_matches WHERE id = ?",
                (share_id,),
            ).fetchone()
            if row is None:
                return None
            return MatchResult.model_validate_json(row["result_json"])

    def _row_to_match(self, row: sqlite3.Row) -> SavedMatch:
        return SavedMatch(
            match_id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            result=MatchResult.model_validate_json(row["result_json"]),
            score_a=row["score_a"],
            score_b=row["score_b"],
        )


__all__ = ["MatchStore"]
