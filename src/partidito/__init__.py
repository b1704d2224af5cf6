"""Balanced two-team generator for pickup games."""

from partidito.balancer import generate_balanced_teams
from partidito.models import MatchResult, PlayerRecord, Position, TeamRecord

__version__ = "0.1.0"

__all__ = ["MatchResult", "PlayerRecord", "Position", "TeamRecord", "generate_balanced_teams"]
