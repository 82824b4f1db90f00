"""
About group: plugin housekeeping actions.
"""

from __future__ import annotations

from cfgpanel.config.models import ButtonItem, SettingGroup
from cfgpanel.registry import SettingsRegistry
from cfgpanel.session import SettingsSession

ABOUT_GROUP_NAME = "关于"
DELETE_CONFIG_KEY = "about_delete_config"


def register_about_settings(registry: SettingsRegistry) -> None:
    """Register the about group with its delete-configuration button."""
    registry.register_group(
        SettingGroup(
            name=ABOUT_GROUP_NAME,
            label=ABOUT_GROUP_NAME,
            items=(
                ButtonItem(
                    key=DELETE_CONFIG_KEY,
                    title="删除插件配置文件",
                    description="删除插件的所有配置数据，此操作不可恢复",
                    button_text="删除配置",
                ),
            ),
        )
    )


def install_about_actions(session: SettingsSession) -> None:
    """Wire the delete-configuration button to the session's reset flow."""
    session.register_action(DELETE_CONFIG_KEY, session.reset)
