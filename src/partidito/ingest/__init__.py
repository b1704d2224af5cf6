"""Input adapters that normalize raw roster data."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    MIN_POSITION_SKILL,
    RosterImportError,
    RosterRow,
    load_records,
    load_records_from_csv,
    load_records_from_json,
    load_roster_csv,
    normalize_player_payload,
    rows_to_records,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "MIN_POSITION_SKILL",
    "RosterImportError",
    "RosterRow",
    "load_records",
    "load_records_from_csv",
    "load_records_from_json",
    "load_roster_csv",
    "normalize_player_payload",
    "rows_to_records",
]
