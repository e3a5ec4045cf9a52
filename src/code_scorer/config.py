"""Settings lookup.

Settings are read at call time so edits take effect on the next save without a
restart. Each key is namespaced as ``codeScorer.<name>`` and resolved from the
environment first, then from ``settings.json`` in the data directory.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.expanduser("~/.code-scorer")
SETTINGS_FILE = "settings.json"

API_KEY_SETTING = "codeScorer.apiKey"

# Setting key -> environment variable override.
ENV_OVERRIDES = {
    API_KEY_SETTING: "CODE_SCORER_API_KEY",
}

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


def get_data_dir() -> Path:
    """Get the data directory. It is not created; a missing one means no settings file."""
    return Path(os.environ.get("CODE_SCORER_DATA_DIR", DEFAULT_DATA_DIR))


def get_settings_path() -> Path:
    return get_data_dir() / SETTINGS_FILE


def _load_settings_file() -> dict:
    path = get_settings_path()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("Could not read settings file %s: %s", path, exc)
        return {}

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("Ignoring invalid settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def get_setting(key: str) -> Optional[str]:
    """Resolve a namespaced setting. Returns None when it is not set anywhere."""
    env_name = ENV_OVERRIDES.get(key)
    if env_name and env_name in os.environ:
        return os.environ[env_name]

    value = _load_settings_file().get(key)
    if value is None:
        return None
    return str(value)


def get_api_key() -> Optional[str]:
    """The OpenAI API key, or None/'' when unset. Never cached."""
    return get_setting(API_KEY_SETTING)


def get_poll_interval() -> float:
    value = os.environ.get("CODE_SCORER_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL_SECONDS))
    try:
        interval = float(value)
    except ValueError:
        raise ValueError(f"Invalid CODE_SCORER_POLL_INTERVAL: {value!r}. Use a number of seconds, e.g. '1.5'.")
    if interval <= 0:
        raise ValueError(f"CODE_SCORER_POLL_INTERVAL must be positive, got {value!r}")
    return interval


def get_watch_paths() -> list[Path]:
    """Paths from ``CODE_SCORER_WATCH_PATHS``, separated by ``os.pathsep``."""
    raw = os.environ.get("CODE_SCORER_WATCH_PATHS", "")
    return [Path(os.path.expanduser(p)) for p in raw.split(os.pathsep) if p.strip()]
