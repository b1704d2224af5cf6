"""Lightweight REST client for the partidito API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(name: str) -> dict[str, str]:
    if not name:
        return {}
    try:
        return json.loads(name)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the partidito REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV to import before generating")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--select", nargs="*", default=None, help="Player IDs to balance (default: all)")
    parser.add_argument("--stamina", action="store_true", help="Blend stamina into balancing")
    parser.add_argument("--save", action="store_true", help="Keep the result in match history")
    parser.add_argument("--list-matches", action="store_true", help="List recent matches and exit")
    parser.add_argument("--get-match", metavar="MATCH_ID", help="Fetch a specific match and exit")
    parser.add_argument("--export-match", metavar="MATCH_ID", help="Download team CSV for a match")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.list_matches or args.get_match or args.export_match:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_matches:
                resp = client.get("/matches")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_match:
                resp = client.get(f"/matches/{args.get_match}")
                if resp.status_code == 404:
                    raise SystemExit(f"match {args.get_match} not found")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.export_match:
                resp = client.get(f"/matches/{args.export_match}/export.csv")
                if resp.status_code == 404:
                    raise SystemExit(f"match {args.export_match} not found")
                resp.raise_for_status()
                if args.export_path:
                    args.export_path.write_text(resp.text)
                    print(f"CSV export saved to {args.export_path}")
                else:
                    print(resp.text)
        return

    with httpx.Client(base_url=args.base_url) as client:
        if args.roster is not None:
            build_mapping(args.roster_mapping)
            files = {"roster": (args.roster.name, args.roster.read_bytes(), "text/csv")}
            data = {"roster_mapping": args.roster_mapping or None}
            resp = client.post("/players/import", files=files, data=data)
            resp.raise_for_status()
            print(f"Imported {resp.json()['imported']} players")

        player_ids = args.select
        if player_ids is None:
            resp = client.get("/players")
            resp.raise_for_status()
            player_ids = [player["player_id"] for player in resp.json()]

        request = {"player_ids": player_ids, "use_stamina": args.stamina, "save": args.save}
        resp = client.post("/matches/generate", json=request)
        resp.raise_for_status()
        payload = resp.json()
        if payload.get("match_id"):
            print(f"Saved match {payload['match_id']}")
        print(json.dumps(payload["result"], indent=2))


if __name__ == "__main__":
    main()
