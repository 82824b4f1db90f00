"""
Active-group navigation for the settings panel.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from cfgpanel.config.models import SettingGroup
from cfgpanel.logging import get_logger
from cfgpanel.ui.host import ControlEvent, HostContainer
from cfgpanel.ui.markup import (
    FOCUS_CLASS,
    HIDDEN_CLASS,
    TAB_CONTAINER_ATTR,
    TAB_CONTAINER_SELECTOR,
    TAB_ITEM_ATTR,
    TAB_ITEM_SELECTOR,
)

logger = get_logger(__name__)

GroupChangeCallback = Callable[[str], None]


def switch_group(container: HostContainer, group_name: str) -> None:
    """Focus ``group_name``'s list entry and reveal only its content region."""
    for entry in container.query_selector_all(TAB_ITEM_SELECTOR):
        if entry.get_attribute(TAB_ITEM_ATTR) == group_name:
            entry.add_class(FOCUS_CLASS)
        else:
            entry.remove_class(FOCUS_CLASS)

    for region in container.query_selector_all(TAB_CONTAINER_SELECTOR):
        if region.get_attribute(TAB_CONTAINER_ATTR) == group_name:
            region.remove_class(HIDDEN_CLASS)
        else:
            region.add_class(HIDDEN_CLASS)


def bind_group_navigation(container: HostContainer, on_group_change: GroupChangeCallback) -> int:
    """
    Make every group list entry switch groups on click.

    ``on_group_change`` receives the new group name so the host can keep it
    across re-renders. Returns the number of entries bound.
    """
    entries = container.query_selector_all(TAB_ITEM_SELECTOR)
    for entry in entries:

        def _on_click(event: ControlEvent) -> None:
            group_name = event.target.get_attribute(TAB_ITEM_ATTR)
            if not group_name:
                return
            switch_group(container, group_name)
            on_group_change(group_name)

        entry.add_event_listener("click", _on_click)
    return len(entries)


class NavigationState:
    """
    Remembers which group is active.

    Starts with no selection; ``resolve`` falls back to the first group so a
    panel always opens on something.
    """

    def __init__(self, active_group: Optional[str] = None) -> None:
        self._active_group = active_group

    @property
    def active_group(self) -> Optional[str]:
        return self._active_group

    def activate(self, group_name: str) -> None:
        if group_name != self._active_group:
            logger.debug("Active settings group: %s -> %s", self._active_group, group_name)
        self._active_group = group_name

    def resolve(self, groups: Sequence[SettingGroup]) -> Optional[str]:
        """Return the active group if it is still registered, else the first group."""
        names = [group.name for group in groups]
        if self._active_group in names:
            return self._active_group
        return names[0] if names else None
