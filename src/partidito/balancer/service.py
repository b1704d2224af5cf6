"""Greedy two-team balancing for a pool of rated players."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from partidito.config import default_labels
from partidito.models import FIELD_POSITIONS, MatchResult, PlayerRecord, Position, TeamRecord


logger = logging.getLogger(__name__)

SKILL_WEIGHT = 0.7
STAMINA_WEIGHT = 0.3
KEEPER_SLOTS = 2


@dataclass
class _RunningTeam:
    """Members and running effective-skill total for one side during a pass."""

    players: List[PlayerRecord] = field(default_factory=list)
    effective_total: float = 0.0

    def add(self, player: PlayerRecord, use_stamina: bool) -> None:
        self.players.append(player)
        self.effective_total += effective_skill(player, use_stamina)

    @property
    def count(self) -> int:
        return len(self.players)


def calculate_team_stats(players: Sequence[PlayerRecord], name: str) -> TeamRecord:
    """Summarize a side: total skill and per-player average, both to 2 decimals."""

    members = tuple(players)
    total = round(sum(player.skill for player in members), 2)
    average = round(total / len(members), 2) if members else 0.0
    return TeamRecord(
        name=name,
        players=members,
        total_skill=total,
        average_skill=average,
    )


def effective_skill(player: PlayerRecord, use_stamina: bool = False) -> float:
    """Rating used for balancing comparisons; never shown as the player's skill."""

    if not use_stamina or player.stamina is None:
        return player.skill
    return SKILL_WEIGHT * player.skill + STAMINA_WEIGHT * player.stamina


def field_skill(player: PlayerRecord) -> float:
    """Mean of the three outfield ratings."""

    return sum(player.position_skills[pos] for pos in FIELD_POSITIONS) / len(FIELD_POSITIONS)


def allocate_goalkeepers(
    players: Sequence[PlayerRecord],
) -> Tuple[List[PlayerRecord], List[PlayerRecord], List[PlayerRecord]]:
    """Seed each side with one of the two best goalkeeping ratings.

    Returns ``(team_a, team_b, field_players)``. The sort is stable so equal
    goalkeeper ratings keep their input order. A player's listed best position
    is not consulted: whoever rates highest in goal is seeded.
    """

    ranked = sorted(players, key=lambda p: p.position_skills[Position.GOALKEEPER], reverse=True)
    keepers = ranked[:KEEPER_SLOTS]
    field_players = ranked[KEEPER_SLOTS:]

    team_a = keepers[:1]
    team_b = keepers[1:2]
    return team_a, team_b, field_players


def balance_field_players(
    field_players: Sequence[PlayerRecord],
    team_a: Sequence[PlayerRecord],
    team_b: Sequence[PlayerRecord],
    use_stamina: bool = False,
) -> Tuple[List[PlayerRecord], List[PlayerRecord]]:
    """Place field players one at a time, strongest first, without backtracking.

    The smaller side always takes the next player. When sizes match, the side
    with the lower running effective skill takes it, and Team A wins exact ties.
    """

    side_a = _RunningTeam()
    side_b = _RunningTeam()
    for player in team_a:
        side_a.add(player, use_stamina)
    for player in team_b:
        side_b.add(player, use_stamina)

    ordered = sorted(field_players, key=field_skill, reverse=True)
    for player in ordered:
        if side_a.count != side_b.count:
            target = side_a if side_a.count < side_b.count else side_b
        elif side_a.effective_total <= side_b.effective_total:
            target = side_a
        else:
            target = side_b
        target.add(player, use_stamina)
        logger.debug(
            "Placed %s on %s (A=%.2f/%d, B=%.2f/%d)",
            player.player_id,
            "A" if target is side_a else "B",
            side_a.effective_total,
            side_a.count,
            side_b.effective_total,
            side_b.count,
        )

    return side_a.players, side_b.players


def generate_balanced_teams(
    available_players: Sequence[PlayerRecord],
    use_stamina: bool = False,
    *,
    team_names: Optional[Tuple[str, str]] = None,
) -> MatchResult:
    """Split the pool into two sides of similar total skill.

    Every player's ``position_skills`` must hold all four ratings; records are
    read, never validated or repaired here.
    """

    name_a, name_b = team_names or default_labels().as_tuple()

    if not available_players:
        return MatchResult(
            team_a=calculate_team_stats([], name_a),
            team_b=calculate_team_stats([], name_b),
            skill_difference=0.0,
        )

    keepers_a, keepers_b, field_players = allocate_goalkeepers(available_players)
    players_a, players_b = balance_field_players(field_players, keepers_a, keepers_b, use_stamina)

    team_a = calculate_team_stats(players_a, name_a)
    team_b = calculate_team_stats(players_b, name_b)
    difference = round(abs(team_a.total_skill - team_b.total_skill), 2)

    logger.info(
        "Balanced %d players into %d/%d (difference %.2f, stamina=%s)",
        len(available_players),
        len(players_a),
        len(players_b),
        difference,
        use_stamina,
    )
    return MatchResult(team_a=team_a, team_b=team_b, skill_difference=difference)
