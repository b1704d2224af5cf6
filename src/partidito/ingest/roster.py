"""Helpers to load roster exports and emit canonical player records."""

from __future__ import annotations

import csv
import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from partidito.models import MAX_RATING, MIN_RATING, PlayerRecord, Position


logger = logging.getLogger(__name__)

MIN_POSITION_SKILL = 1.0

POSITION_ALIASES: dict[Position, list[str]] = {
    Position.GOALKEEPER: ["GK", "GOALKEEPER", "KEEPER", "ARQUERO"],
    Position.DEFENDER: ["DEF", "DEFENDER", "DEFENSA"],
    Position.MIDFIELDER: ["MID", "MIDFIELDER", "MEDIO"],
    Position.FORWARD: ["FWD", "FORWARD", "OFENSA"],
}


class RosterImportError(ValueError):
    """Raised when a roster row cannot be turned into a player record."""


def _position_token(value: str) -> str:
    return re.sub(r"[^A-Z]", "", value.upper())


def _build_alias_lookup() -> dict[str, Position]:
    lookup: dict[str, Position] = {}
    for position, variants in POSITION_ALIASES.items():
        for variant in variants:
            lookup.setdefault(_position_token(variant), position)
    return lookup


POSITION_LOOKUP = _build_alias_lookup()


def resolve_position(value: Any) -> Position:
    if isinstance(value, Position):
        return value
    token = _position_token(str(value))
    if token not in POSITION_LOOKUP:
        raise RosterImportError(f"Unknown position {value!r}")
    return POSITION_LOOKUP[token]


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_goalkeeper: Optional[str] = None
    raw_defender: Optional[str] = None
    raw_midfielder: Optional[str] = None
    raw_forward: Optional[str] = None
    raw_stamina: Optional[str] = None
    raw_skill: Optional[str] = None
    raw_positions: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key)
            if spec is None:
                return None
            if "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id")),
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_goalkeeper=extract(parse_spec("goalkeeper")),
            raw_defender=extract(parse_spec("defender")),
            raw_midfielder=extract(parse_spec("midfielder")),
            raw_forward=extract(parse_spec("forward")),
            raw_stamina=extract(parse_spec("stamina")),
            raw_skill=extract(parse_spec("skill")),
            raw_positions=extract(parse_spec("positions")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "player_id": self.raw_id,
            "name": self.raw_name,
            "position_skills": {
                Position.GOALKEEPER: self.raw_goalkeeper,
                Position.DEFENDER: self.raw_defender,
                Position.MIDFIELDER: self.raw_midfielder,
                Position.FORWARD: self.raw_forward,
            },
            "stamina": self.raw_stamina,
            "skill": self.raw_skill,
            "positions": self.raw_positions,
        }


DEFAULT_ROSTER_MAPPING = {
    "player_id": "id",
    "name": "name",
    "goalkeeper": "GK",
    "defender": "DEF",
    "midfielder": "MID",
    "forward": "FWD",
    "stamina": "stamina",
    "skill": "skill",
    "positions": "positions",
}


def _parse_rating(raw: Any, *, label: str, context: str) -> Optional[float]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise RosterImportError(f"{context}: {label} rating {raw!r} is not a number") from exc
    if math.isnan(value):
        raise RosterImportError(f"{context}: {label} rating is NaN")
    value = max(MIN_RATING, min(MAX_RATING, value))
    return round(value * 2) / 2


def _parse_positions(raw: Any) -> List[Position]:
    if raw is None:
        return []
    if isinstance(raw, str):
        tokens = [part for part in re.split(r"[/,;]", raw) if part.strip()]
    else:
        tokens = list(raw)
    return [resolve_position(token) for token in tokens]


def normalize_player_payload(payload: Mapping[str, Any]) -> PlayerRecord:
    """Build a PlayerRecord from a loosely shaped roster entry.

    Accepts camelCase keys, position aliases and legacy entries that only
    carry an overall ``skill`` with a ``position``/``positions`` list. Any
    rating still missing afterwards is set to ``MIN_POSITION_SKILL``.
    """

    name = str(payload.get("name") or "").strip()
    context = f"player {name or payload.get('player_id') or payload.get('id') or '?'}"
    if not name:
        raise RosterImportError(f"{context}: name is required")

    player_id = payload.get("player_id") or payload.get("id")
    player_id = str(player_id).strip() if player_id else uuid4().hex

    raw_skills = payload.get("position_skills")
    if raw_skills is None:
        raw_skills = payload.get("positionSkills")
    skills: dict[Position, float] = {}
    for key, raw in dict(raw_skills or {}).items():
        position = resolve_position(key)
        rating = _parse_rating(raw, label=position.value, context=context)
        if rating is not None:
            skills[position] = rating

    if not skills:
        legacy_skill = _parse_rating(payload.get("skill"), label="skill", context=context)
        legacy_positions = _parse_positions(payload.get("positions") or payload.get("position"))
        if legacy_skill is not None:
            for position in legacy_positions or [Position.MIDFIELDER]:
                skills[position] = legacy_skill

    for position in Position:
        skills.setdefault(position, MIN_POSITION_SKILL)

    stamina = _parse_rating(payload.get("stamina"), label="stamina", context=context)

    try:
        return PlayerRecord(
            player_id=player_id,
            name=name,
            position_skills=skills,
            stamina=stamina,
        )
    except ValidationError as exc:
        raise RosterImportError(f"{context}: {exc}") from exc


def rows_to_records(rows: Iterable[RosterRow | Mapping[str, Any]]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    seen: set[str] = set()
    for row in rows:
        payload = row.to_payload() if isinstance(row, RosterRow) else row
        if not isinstance(payload, Mapping):
            raise RosterImportError(f"roster entry must be an object, got {type(payload).__name__}")
        record = normalize_player_payload(payload)
        if record.player_id in seen:
            logger.warning("Dropping duplicate player id %s (%s)", record.player_id, record.name)
            continue
        seen.add(record.player_id)
        records.append(record)
    return records


def load_roster_csv(path: Path, mapping: Optional[Mapping[str, str]] = None) -> List[RosterRow]:
    mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    blank = [row for row in rows if not row.raw_name]
    if blank:
        logger.warning("Skipping %d roster rows without a name in %s", len(blank), path)
    return [row for row in rows if row.raw_name]


def load_records_from_csv(path: Path, mapping: Optional[Mapping[str, str]] = None) -> List[PlayerRecord]:
    return rows_to_records(load_roster_csv(path, mapping=mapping))


def load_records_from_json(path: Path) -> List[PlayerRecord]:
    """Load a JSON roster: a list of players or an object with a ``players`` list."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RosterImportError(f"{path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("players", [])
    if not isinstance(data, list):
        raise RosterImportError(f"{path}: expected a list of players")
    return rows_to_records(data)


def load_records(path: Path, mapping: Optional[Mapping[str, str]] = None) -> List[PlayerRecord]:
    if path.suffix.lower() == ".json":
        return load_records_from_json(path)
    return load_records_from_csv(path, mapping=mapping)
