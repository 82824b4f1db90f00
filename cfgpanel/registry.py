"""
Settings group registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Optional

from cfgpanel.config.loader import load_groups_from_file
from cfgpanel.config.models import SettingGroup, SettingItem
from cfgpanel.logging import get_logger

logger = get_logger(__name__)


class SettingsRegistry:
    """
    Ordered, append-only collection of settings groups.

    Features register their groups at startup; render and bind read them
    afterwards. Keys and group names are not deduplicated: features keep to
    their own key prefixes by convention.
    """

    def __init__(self) -> None:
        self._groups: list[SettingGroup] = []

    def register_group(self, group: SettingGroup) -> None:
        self._groups.append(group)
        logger.debug("Registered settings group '%s' (%d items)", group.name, len(group.items))

    def register_groups_from_file(self, path: Path | str) -> int:
        """Register every group declared in a YAML/JSON file, in file order."""
        groups = load_groups_from_file(path)
        for group in groups:
            self.register_group(group)
        return len(groups)

    def list_groups(self) -> tuple[SettingGroup, ...]:
        """Return all groups in registration order."""
        return tuple(self._groups)

    def get_group(self, name: str) -> Optional[SettingGroup]:
        for group in self._groups:
            if group.name == name:
                return group
        return None

    def iter_items(self) -> Iterator[tuple[SettingGroup, SettingItem]]:
        for group in self._groups:
            for item in group.items:
                yield group, item

    def default_values(self) -> dict[str, Any]:
        """Build a fresh value store holding every item's default."""
        values: dict[str, Any] = {}
        for _group, item in self.iter_items():
            if not item.stores_value:
                continue
            default = item.default_store_value()
            if default is not None:
                values[item.key] = default
        return values

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[SettingGroup]:
        return iter(tuple(self._groups))
