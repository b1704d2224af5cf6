from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from partidito.models import Position


class PlayerPayload(BaseModel):
    """Create/update body; ratings use position codes (GK, DEF, MID, FWD)."""

    player_id: str | None = None
    name: str = Field(..., min_length=1)
    position_skills: Dict[Position, float]
    stamina: float | None = Field(default=None, ge=0.0, le=10.0)


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    skill: float
    positions: List[Position]
    position_skills: Dict[Position, float]
    stamina: float | None


class RosterImportResponse(BaseModel):
    imported: int
    players: List[PlayerResponse]
