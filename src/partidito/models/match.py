"""Team and match result models produced by the balancer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import PlayerRecord


class TeamRecord(BaseModel):
    """One side of a generated match."""

    name: str
    players: Tuple[PlayerRecord, ...] = ()
    total_skill: float = 0.0
    average_skill: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return tuple(player.player_id for player in self.players)


class MatchResult(BaseModel):
    team_a: TeamRecord
    team_b: TeamRecord
    skill_difference: float = 0.0

    model_config = ConfigDict(frozen=True)


class SavedMatch(BaseModel):
    """A match result kept in history, optionally with the final score."""

    match_id: str
    created_at: datetime
    result: MatchResult
    score_a: Optional[int] = Field(default=None, ge=0)
    score_b: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)
