"""
Settings panel rendering, hosting, binding and navigation.
"""

from .binder import (
    ButtonActionResolver,
    bind_item,
    bind_settings,
    ensure_switch_text_entry,
    resolve_button_action,
    resolver_from_mapping,
)
from .host import ControlEvent, Element, HostContainer
from .markup import control_id, switch_text_ids
from .navigation import NavigationState, bind_group_navigation, switch_group
from .renderer import build_panel, effective_value, render, render_item

__all__ = [
    "ButtonActionResolver",
    "ControlEvent",
    "Element",
    "HostContainer",
    "NavigationState",
    "bind_group_navigation",
    "bind_item",
    "bind_settings",
    "build_panel",
    "control_id",
    "effective_value",
    "ensure_switch_text_entry",
    "render",
    "render_item",
    "resolve_button_action",
    "resolver_from_mapping",
    "switch_group",
    "switch_text_ids",
]
