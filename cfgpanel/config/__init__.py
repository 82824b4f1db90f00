"""
Configuration management for cfgpanel.

This package provides typed settings models and loaders for panel
configuration and declarative settings groups.
"""

from .models import PanelConfig, SettingGroup, SettingItem, SwitchText
from .loader import (
    group_from_raw,
    item_from_raw,
    load_config_from_file,
    load_groups_from_file,
)

__all__ = [
    "PanelConfig",
    "SettingGroup",
    "SettingItem",
    "SwitchText",
    "group_from_raw",
    "item_from_raw",
    "load_config_from_file",
    "load_groups_from_file",
]
