"""CSV and plain-text export helpers for generated matches."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from partidito.models import MatchResult, TeamRecord


class MatchExportError(RuntimeError):
    """Raised when a match cannot be exported as requested."""


CSV_HEADERS = ("team", "player_id", "name", "skill", "goalkeeper")


def _team_rows(team: TeamRecord) -> list[list[str]]:
    rows: list[list[str]] = []
    for index, player in enumerate(team.players):
        rows.append([
            team.name,
            player.player_id,
            player.name,
            f"{player.skill:.1f}",
            "yes" if index == 0 else "no",
        ])
    return rows


def export_match_to_csv(result: MatchResult) -> str:
    """One row per player; the first player listed on each side is its keeper."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for team in (result.team_a, result.team_b):
        writer.writerows(_team_rows(team))
    return buffer.getvalue()


def export_matches_to_csv(results: Sequence[MatchResult], *, entry_names: Sequence[str]) -> str:
    """Export several matches into one CSV, prefixing each row with its entry label."""

    if len(entry_names) != len(results):
        raise MatchExportError("entry_names length must match results length")

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(("entry", *CSV_HEADERS))
    for entry, result in zip(entry_names, results):
        for team in (result.team_a, result.team_b):
            for row in _team_rows(team):
                writer.writerow([entry, *row])
    return buffer.getvalue()


def _format_team(team: TeamRecord) -> list[str]:
    lines = [f"{team.name} (total {team.total_skill:.1f}, avg {team.average_skill:.2f})"]
    for index, player in enumerate(team.players):
        marker = " [GK]" if index == 0 else ""
        lines.append(f"  - {player.name}{marker}")
    if not team.players:
        lines.append("  (no players)")
    return lines


def format_match_summary(result: MatchResult) -> str:
    """Plain-text message suitable for pasting into a group chat."""

    lines = _format_team(result.team_a)
    lines.append("")
    lines.extend(_format_team(result.team_b))
    lines.append("")
    lines.append(f"Skill difference: {result.skill_difference:.1f}")
    return "\n".join(lines)


__all__ = [
    "MatchExportError",
    "export_match_to_csv",
    "export_matches_to_csv",
    "format_match_summary",
]
