"""
Event binding for rendered settings markup.

Listeners write user edits straight into the host's value store. Binding the
same live markup twice attaches every listener twice; hosts rebind only after
replacing the container markup, which drops the old listeners.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Optional, Protocol, Sequence, Union

from cfgpanel.config.models import (
    ButtonItem,
    CheckboxItem,
    SelectItem,
    SettingGroup,
    SettingItem,
    SwitchText,
    TextareaItem,
    TextItem,
    TextWithSwitchItem,
    is_switch_text_entry,
)
from cfgpanel.config.models.constants import SWITCH_ENABLED_FIELD, SWITCH_TEXT_FIELD
from cfgpanel.logging import get_logger
from cfgpanel.ui.host import ControlEvent, Element, HostContainer
from cfgpanel.ui.markup import control_id, switch_text_ids

logger = get_logger(__name__)

ButtonAction = Callable[[], None]
ChangeCallback = Callable[[], None]


class ButtonActionResolver(Protocol):
    """Maps a button item key to its action, or ``None`` when there is none."""

    def __call__(self, key: str) -> Optional[ButtonAction]:
        ...


ButtonActions = Union[Mapping[str, ButtonAction], ButtonActionResolver]


def resolver_from_mapping(actions: Mapping[str, ButtonAction]) -> ButtonActionResolver:
    """Adapt a ``{key: action}`` mapping to a resolver."""

    def _resolve(key: str) -> Optional[ButtonAction]:
        return actions.get(key)

    return _resolve


def _no_actions(key: str) -> Optional[ButtonAction]:
    return None


def _as_resolver(actions: Optional[ButtonActions]) -> ButtonActionResolver:
    if actions is None:
        return _no_actions
    if isinstance(actions, Mapping):
        return resolver_from_mapping(actions)
    return actions


def resolve_button_action(
    item: ButtonItem,
    resolver: ButtonActionResolver,
) -> Optional[ButtonAction]:
    """Host-registered action first, then the item's own ``on_click``."""
    action = resolver(item.key)
    if action is not None:
        return action
    return item.on_click


def ensure_switch_text_entry(item: TextWithSwitchItem, store: MutableMapping[str, Any]) -> dict[str, Any]:
    """
    Return the composite store entry for ``item``, repairing it in place.

    An entry that is missing, not a mapping, or lacks either field is replaced
    by the item's default (or empty text with the switch off). A valid entry is
    never touched.
    """
    entry = store.get(item.key)
    if is_switch_text_entry(entry):
        return entry
    default = item.default_value or SwitchText()
    repaired = {
        SWITCH_TEXT_FIELD: default.text or "",
        SWITCH_ENABLED_FIELD: default.enabled or False,
    }
    if entry is not None:
        logger.debug("Repairing malformed value for '%s': %r", item.key, entry)
    store[item.key] = repaired
    return repaired


def _find_control(container: HostContainer, element_id: str, item: SettingItem) -> Optional[Element]:
    element = container.get_element_by_id(element_id)
    if element is None:
        logger.warning("No control '%s' found for settings item '%s'; skipping", element_id, item.key)
    return element


def _notify(on_change: Optional[ChangeCallback]) -> None:
    if on_change is not None:
        on_change()


def _bind_value_control(
    container: HostContainer,
    item: SettingItem,
    store: MutableMapping[str, Any],
    event_type: str,
    on_change: Optional[ChangeCallback],
) -> int:
    element = _find_control(container, control_id(item.key), item)
    if element is None:
        return 0

    def _on_value(event: ControlEvent) -> None:
        store[item.key] = event.target.value
        _notify(on_change)

    element.add_event_listener(event_type, _on_value)
    return 1


def _bind_checkbox(
    container: HostContainer,
    item: CheckboxItem,
    store: MutableMapping[str, Any],
    on_change: Optional[ChangeCallback],
) -> int:
    element = _find_control(container, control_id(item.key), item)
    if element is None:
        return 0

    def _on_toggle(event: ControlEvent) -> None:
        store[item.key] = bool(event.target.checked)
        _notify(on_change)

    element.add_event_listener("change", _on_toggle)
    return 1


def _bind_text_with_switch(
    container: HostContainer,
    item: TextWithSwitchItem,
    store: MutableMapping[str, Any],
    on_change: Optional[ChangeCallback],
) -> int:
    ensure_switch_text_entry(item, store)
    text_id, switch_id = switch_text_ids(item.key)
    bound = 0

    text_element = _find_control(container, text_id, item)
    if text_element is not None:

        def _on_text(event: ControlEvent) -> None:
            ensure_switch_text_entry(item, store)[SWITCH_TEXT_FIELD] = event.target.value
            _notify(on_change)

        text_element.add_event_listener("input", _on_text)
        bound += 1

    switch_element = _find_control(container, switch_id, item)
    if switch_element is not None:

        def _on_switch(event: ControlEvent) -> None:
            ensure_switch_text_entry(item, store)[SWITCH_ENABLED_FIELD] = bool(event.target.checked)
            _notify(on_change)

        switch_element.add_event_listener("change", _on_switch)
        bound += 1

    return bound


def _bind_button(
    container: HostContainer,
    item: ButtonItem,
    resolver: ButtonActionResolver,
) -> int:
    element = _find_control(container, control_id(item.key), item)
    if element is None:
        return 0

    def _on_click(event: ControlEvent) -> None:
        action = resolve_button_action(item, resolver)
        if action is None:
            logger.debug("Button '%s' has no action", item.key)
            return
        action()

    element.add_event_listener("click", _on_click)
    return 1


def bind_item(
    container: HostContainer,
    item: SettingItem,
    store: MutableMapping[str, Any],
    resolver: ButtonActionResolver = _no_actions,
    on_change: Optional[ChangeCallback] = None,
) -> int:
    """Attach listeners for one item. Returns the number of listeners attached."""
    if isinstance(item, (TextItem, TextareaItem)):
        return _bind_value_control(container, item, store, "input", on_change)
    if isinstance(item, SelectItem):
        return _bind_value_control(container, item, store, "change", on_change)
    if isinstance(item, CheckboxItem):
        return _bind_checkbox(container, item, store, on_change)
    if isinstance(item, TextWithSwitchItem):
        return _bind_text_with_switch(container, item, store, on_change)
    if isinstance(item, ButtonItem):
        return _bind_button(container, item, resolver)
    # Headers and unknown kinds have nothing to bind.
    return 0


def bind_settings(
    container: HostContainer,
    groups: Sequence[SettingGroup],
    store: MutableMapping[str, Any],
    button_actions: Optional[ButtonActions] = None,
    on_change: Optional[ChangeCallback] = None,
) -> int:
    """
    Attach listeners for every item of every group.

    Args:
        container: Container holding markup produced by ``render``
        groups: Groups that were rendered into ``container``
        store: Value store mutated by the listeners
        button_actions: ``{key: action}`` mapping or key resolver for buttons
        on_change: Called after every value edit

    Returns:
        Number of listeners attached
    """
    resolver = _as_resolver(button_actions)
    bound = 0
    for group in groups:
        for item in group.items:
            bound += bind_item(container, item, store, resolver, on_change)
    logger.debug("Bound %d settings listeners across %d groups", bound, len(groups))
    return bound
