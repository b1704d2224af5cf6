"""Canonical player model shared across ingestion, balancing and storage."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.config import ConfigDict


MIN_RATING = 0.0
MAX_RATING = 10.0


class Position(str, Enum):
    GOALKEEPER = "GK"
    DEFENDER = "DEF"
    MIDFIELDER = "MID"
    FORWARD = "FWD"


FIELD_POSITIONS = (Position.DEFENDER, Position.MIDFIELDER, Position.FORWARD)


class PlayerRecord(BaseModel):
    """Player available for selection, with one rating per position."""

    player_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    position_skills: Dict[Position, float]
    stamina: Optional[float] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)

    model_config = ConfigDict(frozen=True)

    @field_validator("position_skills")
    @classmethod
    def _check_position_skills(cls, value: Dict[Position, float]) -> Dict[Position, float]:
        missing = [pos.value for pos in Position if pos not in value]
        if missing:
            raise ValueError(f"missing position ratings: {', '.join(missing)}")
        for pos, rating in value.items():
            if not MIN_RATING <= rating <= MAX_RATING:
                raise ValueError(f"{pos.value} rating {rating} outside [{MIN_RATING:g}, {MAX_RATING:g}]")
        # Keep a stable Position ordering regardless of input ordering.
        return {pos: float(value[pos]) for pos in Position}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skill(self) -> float:
        ratings = self.position_skills.values()
        return round(sum(ratings) / len(Position), 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def positions(self) -> List[Position]:
        best = max(self.position_skills.values())
        return [pos for pos in Position if self.position_skills[pos] == best]
