"""Configuration helpers for team labels and runtime settings."""

from .settings import api_host, api_port, db_path, default_labels, history_limit
from .teams import DEFAULT_LABELS_KEY, LABEL_CHOICES, TeamLabels, get_labels, iter_labels

__all__ = [
    "DEFAULT_LABELS_KEY",
    "LABEL_CHOICES",
    "TeamLabels",
    "api_host",
    "api_port",
    "db_path",
    "default_labels",
    "get_labels",
    "history_limit",
    "iter_labels",
]
