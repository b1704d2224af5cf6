"""Environment-driven settings."""

from __future__ import annotations

import logging
import os

from .teams import DEFAULT_LABELS_KEY, TeamLabels, get_labels


logger = logging.getLogger(__name__)

DB_PATH_ENV = "PARTIDITO_DB_PATH"
TEAM_LABELS_ENV = "PARTIDITO_TEAM_LABELS"
HISTORY_LIMIT_ENV = "PARTIDITO_HISTORY_LIMIT"
HOST_ENV = "PARTIDITO_HOST"
PORT_ENV = "PARTIDITO_PORT"

DEFAULT_DB_PATH = "data/partidito.sqlite"
HISTORY_LIMIT_DEFAULT = 50
PORT_DEFAULT = 8000


def env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def db_path() -> str:
    return os.getenv(DB_PATH_ENV) or DEFAULT_DB_PATH


def history_limit() -> int:
    return env_int(HISTORY_LIMIT_ENV, HISTORY_LIMIT_DEFAULT, min_value=1)


def default_labels() -> TeamLabels:
    """Return the preset named by PARTIDITO_TEAM_LABELS, or the built-in default."""

    raw = os.getenv(TEAM_LABELS_ENV)
    if not raw:
        return get_labels(DEFAULT_LABELS_KEY)
    try:
        return get_labels(raw)
    except (KeyError, ValueError):
        logger.warning("Unknown team label preset %s=%s; using %s", TEAM_LABELS_ENV, raw, DEFAULT_LABELS_KEY)
        return get_labels(DEFAULT_LABELS_KEY)


def api_host() -> str:
    return os.getenv(HOST_ENV) or "127.0.0.1"


def api_port() -> int:
    return env_int(PORT_ENV, PORT_DEFAULT, min_value=1)
