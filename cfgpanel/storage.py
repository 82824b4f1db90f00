"""
Persistence of settings value stores.

The panel core never persists anything itself; hosts hand a
``SettingsStorage`` to the session, which loads on open and saves on edits
and teardown.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Protocol

from cfgpanel.logging import get_logger
from cfgpanel.paths import get_global_folder

logger = get_logger(__name__)


class SettingsStorage(Protocol):
    """Key-addressed persistence for value stores."""

    def load(self, key: str) -> Optional[dict[str, Any]]:
        """Return the stored data, or ``None`` when nothing is stored."""
        ...

    def save(self, key: str, data: dict[str, Any]) -> bool:
        """Persist ``data``; returns whether it was stored."""
        ...

    def remove(self, key: str) -> bool:
        """Delete stored data; returns whether anything was removed."""
        ...


@dataclass
class JsonFileStorage:
    """
    Store each key as a JSON file inside ``folder``.

    Writes go to a temporary file first and are moved into place, so a crash
    never leaves a half-written file. Unreadable files are copied aside as
    ``<name>.bak.<timestamp>`` and treated as absent.
    """

    folder: Path = field(default_factory=get_global_folder)

    def __post_init__(self) -> None:
        self.folder = Path(self.folder).expanduser()

    def path(self, key: str) -> Path:
        return self.folder / key

    def load(self, key: str) -> Optional[dict[str, Any]]:
        path = self.path(key)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{path.name} root is not an object")
        except ValueError as exc:
            backup = self._backup(path)
            logger.warning("Ignoring unreadable settings file %s (%s); backup at %s", path, exc, backup)
            return None
        return data

    def save(self, key: str, data: dict[str, Any]) -> bool:
        self.folder.mkdir(parents=True, exist_ok=True)
        path = self.path(key)
        tmp = path.with_name(path.name + ".tmp")

        text = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True)
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
        logger.debug("Saved settings to %s", path)
        return True

    def remove(self, key: str) -> bool:
        path = self.path(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Removed settings file %s", path)
        return True

    @staticmethod
    def _backup(path: Path) -> Optional[Path]:
        ts = time.strftime("%Y%m%d_%H%M%S")
        backup = path.with_name(f"{path.name}.bak.{ts}")
        try:
            backup.write_bytes(path.read_bytes())
        except OSError as exc:
            logger.warning("Could not back up %s: %s", path, exc)
            return None
        return backup


class MemoryStorage:
    """In-memory ``SettingsStorage`` for hosts without a file system."""

    def __init__(self, initial: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._data: dict[str, dict[str, Any]] = {
            key: json.loads(json.dumps(value)) for key, value in (initial or {}).items()
        }

    def load(self, key: str) -> Optional[dict[str, Any]]:
        value = self._data.get(key)
        return None if value is None else json.loads(json.dumps(value))

    def save(self, key: str, data: dict[str, Any]) -> bool:
        # Round-trip through JSON so saved data matches what a file would hold.
        self._data[key] = json.loads(json.dumps(data))
        return True

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
