from cfgpanel.features.about import (
    ABOUT_GROUP_NAME,
    DELETE_CONFIG_KEY,
    install_about_actions,
    register_about_settings,
)
from cfgpanel.features.callout import register_callout_settings
from cfgpanel.registry import SettingsRegistry
from cfgpanel.session import SettingsSession
from cfgpanel.storage import MemoryStorage
from cfgpanel.ui.host import HostContainer


def test_register_about_settings() -> None:
    registry = SettingsRegistry()
    register_about_settings(registry)

    group = registry.get_group(ABOUT_GROUP_NAME)
    assert [item.key for item in group.items] == [DELETE_CONFIG_KEY]
    assert registry.default_values() == {}


def test_delete_button_resets_configuration() -> None:
    registry = SettingsRegistry()
    register_callout_settings(registry)
    register_about_settings(registry)
    storage = MemoryStorage({"config.json": {"callout_NOTE": {"text": "Custom", "switch": True}}})

    session = SettingsSession(registry, storage, initial_group=ABOUT_GROUP_NAME)
    install_about_actions(session)
    container = session.mount(HostContainer())

    container.get_element_by_id(f"setting_{DELETE_CONFIG_KEY}").click()

    assert storage.load("config.json") is None
    assert session.store["callout_NOTE"] == {"text": "注意", "switch": False}
    assert container.get_element_by_id("setting_callout_NOTE_text").value == "注意"
    focused = container.query_selector(".b3-list-item--focus")
    assert focused.get_attribute("data-tab") == ABOUT_GROUP_NAME
