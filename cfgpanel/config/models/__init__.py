"""
Configuration data models for cfgpanel.

This package provides the typed settings item variants, groups and the panel
configuration.
"""

from .constants import (
    DEFAULT_BUTTON_TEXT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STORAGE_KEY,
    DEFAULT_TEXTAREA_ROWS,
    KIND_BUTTON,
    KIND_CHECKBOX,
    KIND_HEADER,
    KIND_SELECT,
    KIND_TEXT,
    KIND_TEXT_WITH_SWITCH,
    KIND_TEXTAREA,
    KNOWN_KINDS,
    SWITCH_ENABLED_FIELD,
    SWITCH_TEXT_FIELD,
)
from .items import (
    ITEM_CLASSES,
    AnySettingItem,
    ButtonItem,
    CheckboxItem,
    HeaderItem,
    SelectItem,
    SelectOption,
    SettingGroup,
    SettingItem,
    SwitchText,
    TextareaItem,
    TextItem,
    TextWithSwitchItem,
    is_switch_text_entry,
)
from .panel import PanelConfig
