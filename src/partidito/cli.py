"""Command-line interface for splitting a roster into two balanced teams."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from partidito.balancer import generate_balanced_teams
from partidito.config import LABEL_CHOICES, default_labels, get_labels
from partidito.config_loader import RosterMappingProfile
from partidito.ingest import RosterImportError, load_records
from partidito.persistence import MatchStore
from partidito.report import export_match_to_csv, format_match_summary


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a roster into two balanced teams")
    parser.add_argument("roster", type=Path, help="Path to roster CSV or JSON")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument(
        "--select",
        nargs="*",
        default=None,
        help="Player IDs available for this match (default: whole roster)",
    )
    parser.add_argument("--stamina", action="store_true", help="Blend stamina into balancing decisions")
    parser.add_argument(
        "--labels",
        default=None,
        help=f"Team label preset ({', '.join(LABEL_CHOICES)})",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional CSV path for the teams")
    parser.add_argument("--json", dest="json_path", type=Path, default=None, help="Optional JSON path for the result")
    parser.add_argument("--save", action="store_true", help="Store the result in match history")
    parser.add_argument("--db", type=Path, default=None, help="SQLite path used with --save")
    parser.add_argument("--verbose", action="store_true", help="Log each placement decision")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    roster_mapping = _parse_mapping(args.column)
    labels_key = args.labels
    if args.load_profile:
        profile = RosterMappingProfile.load(args.load_profile)
        roster_mapping = profile.roster_mapping | roster_mapping
        labels_key = labels_key or profile.team_labels
    if args.save_profile:
        RosterMappingProfile(roster_mapping, labels_key).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    try:
        labels = get_labels(labels_key) if labels_key else default_labels()
    except (KeyError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        records = load_records(args.roster, mapping=roster_mapping or None)
    except RosterImportError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.select is not None:
        wanted = set(args.select)
        missing = wanted - {record.player_id for record in records}
        if missing:
            print(f"error: unknown player ids: {', '.join(sorted(missing))}", file=sys.stderr)
            return 1
        records = [record for record in records if record.player_id in wanted]

    result = generate_balanced_teams(records, args.stamina, team_names=labels.as_tuple())
    print(format_match_summary(result))

    if args.output:
        args.output.write_text(export_match_to_csv(result), encoding="utf-8")
        print(f"Wrote teams to {args.output}")
    if args.json_path:
        args.json_path.write_text(json.dumps(result.model_dump(mode="json"), indent=2), encoding="utf-8")
        print(f"Wrote result to {args.json_path}")
    if args.save:
        store = MatchStore(args.db) if args.db else MatchStore()
        saved = store.save_match(result)
        print(f"Saved match {saved.match_id}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
