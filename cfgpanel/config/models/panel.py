"""
Panel configuration model.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cfgpanel.paths import get_global_folder

from .constants import DEFAULT_LOG_LEVEL, DEFAULT_STORAGE_KEY

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class PanelConfig:
    """
    Host-side configuration of a settings panel session.
    """

    storage_folder: Optional[Path] = None
    """Folder holding persisted setting values. Defaults to the global folder."""

    storage_key: str = DEFAULT_STORAGE_KEY
    """Key (file name) under which the value store is persisted."""

    initial_group: Optional[str] = None
    """Group shown when the panel first opens. ``None`` selects the first group."""

    log_level: str = DEFAULT_LOG_LEVEL
    """Log level passed to ``setup_logging``."""

    log_file: Optional[str] = None
    """Optional log file path."""

    groups_file: Optional[Path] = None
    """Optional YAML/JSON file with declarative group definitions."""

    def __post_init__(self) -> None:
        self.storage_folder = get_global_folder(self.storage_folder)
        self.storage_key = str(self.storage_key or "").strip() or DEFAULT_STORAGE_KEY
        self.log_level = str(self.log_level or DEFAULT_LOG_LEVEL).strip().upper()
        if self.initial_group is not None:
            self.initial_group = str(self.initial_group).strip() or None
        if self.groups_file is not None:
            self.groups_file = Path(self.groups_file).expanduser()

    def validate(self) -> None:
        """Validate panel configuration."""
        if "/" in self.storage_key or "\\" in self.storage_key:
            raise ValueError("storage_key must be a plain file name")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got '{self.log_level}'")
