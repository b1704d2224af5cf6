"""Persist and load CLI roster column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict


@dataclass
class RosterMappingProfile:
    roster_mapping: Dict[str, str] = field(default_factory=dict)
    team_labels: str | None = None

    @classmethod
    def load(cls, path: Path) -> "RosterMappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            roster_mapping=data.get("roster_mapping", {}),
            team_labels=data.get("team_labels"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "roster_mapping": self.roster_mapping,
            "team_labels": self.team_labels,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
