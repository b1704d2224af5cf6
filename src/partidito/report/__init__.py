"""Match export utilities (CSV, share text)."""

from .export import MatchExportError, export_match_to_csv, export_matches_to_csv, format_match_summary

__all__ = [
    "MatchExportError",
    "export_match_to_csv",
    "export_matches_to_csv",
    "format_match_summary",
]
