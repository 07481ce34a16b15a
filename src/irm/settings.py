"""JSON-backed user settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from irm.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "irm"
_SETTINGS_FILE = "settings.json"

DEFAULTS: dict[str, Any] = {
    "defaults": {"force": False},
    "progress": {"enabled": True},
}


class Settings:
    """Persistent settings backed by a JSON file.

    Uses dot-notation keys for nested access, falling back to ``DEFAULTS``:
        settings.get("defaults.force")  # reads data["defaults"]["force"]
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        for source in (self._data, DEFAULTS):
            found, value = _lookup(source, key)
            if found:
                return value
        return default

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: expected a JSON object", self._path)
            return
        self._data = data


def _lookup(node: Any, key: str) -> tuple[bool, Any]:
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node
