from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from .player import PlayerPayload, PlayerResponse


class GenerateRequest(BaseModel):
    player_ids: List[str] = Field(default_factory=list)
    players: List[PlayerPayload] = Field(default_factory=list)
    use_stamina: bool = False
    team_labels: str | None = None
    save: bool = False


class TeamResponse(BaseModel):
    name: str
    players: List[PlayerResponse]
    total_skill: float
    average_skill: float


class MatchResponse(BaseModel):
    team_a: TeamResponse
    team_b: TeamResponse
    skill_difference: float


class SavedMatchResponse(BaseModel):
    match_id: str
    created_at: datetime
    result: MatchResponse
    score_a: int | None = None
    score_b: int | None = None


class GenerateResponse(BaseModel):
    result: MatchResponse
    match_id: str | None = None


class ScoreUpdate(BaseModel):
    score_a: int | None = Field(default=None, ge=0)
    score_b: int | None = Field(default=None, ge=0)


class ShareResponse(BaseModel):
    share_id: str
