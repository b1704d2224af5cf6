"""Team label presets used when naming the two generated sides."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class TeamLabels:
    key: str
    team_a: str
    team_b: str

    def as_tuple(self) -> Tuple[str, str]:
        return self.team_a, self.team_b


DEFAULT_LABELS_KEY = "DEFAULT"

_TEAM_LABELS: Dict[str, TeamLabels] = {
    "DEFAULT": TeamLabels(key="DEFAULT", team_a="Team 1", team_b="Team 2"),
    "ES": TeamLabels(key="ES", team_a="Equipo 1", team_b="Equipo 2"),
    "COLORS": TeamLabels(key="COLORS", team_a="Equipo Verde", team_b="Equipo Blanco"),
}


def iter_labels() -> Iterable[TeamLabels]:
    """Return an iterator of all configured label presets."""

    return _TEAM_LABELS.values()


def get_labels(key: str) -> TeamLabels:
    """Fetch a preset by key, raising KeyError if missing."""

    if not isinstance(key, str) or not key.strip():
        raise ValueError(f"label preset key must be a non-empty string, got {key!r}")
    normalized = key.strip().upper()
    if normalized not in _TEAM_LABELS:
        raise KeyError(f"No team labels configured for key={key!r}")
    return _TEAM_LABELS[normalized]


# Read-only view for callers that just want the names.
LABEL_CHOICES: Mapping[str, Tuple[str, str]] = {
    key: labels.as_tuple() for key, labels in _TEAM_LABELS.items()
}
