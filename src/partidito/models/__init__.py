"""Shared pydantic models."""

from .match import MatchResult, SavedMatch, TeamRecord
from .player import FIELD_POSITIONS, MAX_RATING, MIN_RATING, PlayerRecord, Position

__all__ = [
    "FIELD_POSITIONS",
    "MAX_RATING",
    "MIN_RATING",
    "MatchResult",
    "PlayerRecord",
    "Position",
    "SavedMatch",
    "TeamRecord",
]
