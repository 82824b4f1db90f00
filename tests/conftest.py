"""
Shared pytest fixtures for cfgpanel tests.

Provides a registry with one group per navigation scenario plus temporary
storage folders.
"""

from pathlib import Path

import pytest

from cfgpanel.config.models import (
    ButtonItem,
    CheckboxItem,
    HeaderItem,
    SelectItem,
    SelectOption,
    SettingGroup,
    SwitchText,
    TextareaItem,
    TextItem,
    TextWithSwitchItem,
)
from cfgpanel.registry import SettingsRegistry
from cfgpanel.storage import JsonFileStorage


# -----------------------------------------------------------------------------
# Group Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def basic_group() -> SettingGroup:
    return SettingGroup(
        name="基础设置",
        label="基础设置",
        items=(
            HeaderItem(key="basic_header", title="General", description="Everyday options"),
            TextItem(key="nickname", title="Nickname", description="Shown in the title", default_value="anon",
                     placeholder="your name"),
            TextareaItem(key="notes", title="Notes", rows=3),
            CheckboxItem(key="autosave", title="Autosave", description="Save on every edit", default_value=True),
            SelectItem(
                key="theme",
                title="Theme",
                default_value="light",
                options=(SelectOption("Light", "light"), SelectOption("Dark", "dark")),
            ),
            TextWithSwitchItem(
                key="calloutNote",
                title="Note",
                default_value=SwitchText(text="注意", enabled=False),
                placeholder="title",
            ),
        ),
    )


@pytest.fixture
def advanced_group() -> SettingGroup:
    return SettingGroup(
        name="高级设置",
        label="高级设置",
        items=(
            CheckboxItem(key="debug", title="Debug", default_value=False),
            ButtonItem(key="clear_cache", title="Clear cache", button_text="Clear"),
        ),
    )


@pytest.fixture
def registry(basic_group: SettingGroup, advanced_group: SettingGroup) -> SettingsRegistry:
    reg = SettingsRegistry()
    reg.register_group(basic_group)
    reg.register_group(advanced_group)
    return reg


# -----------------------------------------------------------------------------
# Storage Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def storage_folder(tmp_path: Path) -> Path:
    return tmp_path / "cfgpanel-home"


@pytest.fixture
def file_storage(storage_folder: Path) -> JsonFileStorage:
    return JsonFileStorage(storage_folder)
