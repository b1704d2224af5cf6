import csv
from io import StringIO

import pytest

from partidito.balancer import generate_balanced_teams
from partidito.models import PlayerRecord, Position
from partidito.report import MatchExportError, export_match_to_csv, export_matches_to_csv, format_match_summary


def _player(pid: str, name: str, gk: float, field: float) -> PlayerRecord:
    return PlayerRecord(
        player_id=pid,
        name=name,
        position_skills={
            Position.GOALKEEPER: gk,
            Position.DEFENDER: field,
            Position.MIDFIELDER: field,
            Position.FORWARD: field,
        },
    )


def _result():
    return generate_balanced_teams(
        [
            _player("p1", "Ana", 9, 7.5),
            _player("p2", "Beto", 8, 5.5),
            _player("p3", "Caro", 2, 6),
            _player("p4", "Dani", 1, 5),
        ]
    )


def test_export_match_to_csv_marks_keepers():
    rows = list(csv.reader(StringIO(export_match_to_csv(_result()))))

    assert rows[0] == ["team", "player_id", "name", "skill", "goalkeeper"]
    assert len(rows) == 5
    keepers = [row[1] for row in rows[1:] if row[4] == "yes"]
    assert keepers == ["p1", "p2"]
    assert {row[0] for row in rows[1:]} == {"Team 1", "Team 2"}


def test_export_matches_to_csv_prefixes_entries():
    result = _result()
    text = export_matches_to_csv([result, result], entry_names=["m1", "m2"])
    rows = list(csv.reader(StringIO(text)))

    assert rows[0][0] == "entry"
    assert len(rows) == 9
    assert {row[0] for row in rows[1:]} == {"m1", "m2"}


def test_export_matches_to_csv_length_mismatch():
    with pytest.raises(MatchExportError):
        export_matches_to_csv([_result()], entry_names=[])


def test_format_match_summary_lists_both_sides():
    summary = format_match_summary(_result())

    assert "Team 1" in summary
    assert "Team 2" in summary
    assert "Ana [GK]" in summary
    assert "Beto [GK]" in summary
    assert "Dani" in summary
    assert summary.endswith("Skill difference: 0.8")


def test_format_match_summary_empty_side():
    summary = format_match_summary(generate_balanced_teams([_player("solo", "Solo", 3, 3)]))
    assert "(no players)" in summary
