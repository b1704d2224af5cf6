"""Two-team balancing engine."""

from .service import (
    allocate_goalkeepers,
    balance_field_players,
    calculate_team_stats,
    effective_skill,
    field_skill,
    generate_balanced_teams,
)

__all__ = [
    "allocate_goalkeepers",
    "balance_field_players",
    "calculate_team_stats",
    "effective_skill",
    "field_skill",
    "generate_balanced_teams",
]
