"""Pydantic models for API I/O."""

from .match import (
    GenerateRequest,
    GenerateResponse,
    MatchResponse,
    SavedMatchResponse,
    ScoreUpdate,
    ShareResponse,
    TeamResponse,
)
from .player import PlayerPayload, PlayerResponse, RosterImportResponse

__all__ = [
    "GenerateRequest",
    "GenerateResponse",
    "MatchResponse",
    "PlayerPayload",
    "PlayerResponse",
    "RosterImportResponse",
    "SavedMatchResponse",
    "ScoreUpdate",
    "ShareResponse",
    "TeamResponse",
]
