from __future__ import annotations

import pytest

from cfgpanel.config.models import (
    ButtonItem,
    SettingGroup,
    SettingItem,
    SwitchText,
    TextItem,
    TextWithSwitchItem,
)
from cfgpanel.registry import SettingsRegistry
from cfgpanel.ui.binder import (
    bind_item,
    bind_settings,
    ensure_switch_text_entry,
    resolve_button_action,
    resolver_from_mapping,
)
from cfgpanel.ui.host import HostContainer
from cfgpanel.ui.renderer import render


@pytest.fixture
def mounted(registry: SettingsRegistry):
    store: dict = {}
    groups = registry.list_groups()
    container = HostContainer(render(groups, "基础设置", store))
    changes = []
    bound = bind_settings(container, groups, store, on_change=lambda: changes.append(dict(store)))
    return container, store, changes, bound


def test_bind_settings_counts_listeners(mounted) -> None:
    container, store, changes, bound = mounted
    # nickname, notes, autosave, theme, composite text + switch, debug, clear_cache
    assert bound == 8
    assert container.listener_count() == 8


def test_text_input_writes_unescaped_value(mounted) -> None:
    container, store, changes, _ = mounted
    raw = '<b>"quoted" & \'single\'</b>'

    container.get_element_by_id("setting_nickname").type_text(raw)

    assert store["nickname"] == raw
    assert len(changes) == 1


def test_textarea_select_and_checkbox_edits(mounted) -> None:
    container, store, changes, _ = mounted

    container.get_element_by_id("setting_notes").type_text("multi\nline")
    container.get_element_by_id("setting_theme").choose("dark")
    container.get_element_by_id("setting_autosave").set_checked(False)

    assert store["notes"] == "multi\nline"
    assert store["theme"] == "dark"
    assert store["autosave"] is False
    assert len(changes) == 3


def test_composite_entry_seeded_at_bind_time(mounted) -> None:
    _, store, _, _ = mounted
    assert store["calloutNote"] == {"text": "注意", "switch": False}


def test_composite_sub_controls_are_independent(mounted) -> None:
    container, store, _, _ = mounted

    container.get_element_by_id("setting_calloutNote_switch").set_checked(True)
    assert store["calloutNote"] == {"text": "注意", "switch": True}

    container.get_element_by_id("setting_calloutNote_text").type_text("Note!")
    assert store["calloutNote"] == {"text": "Note!", "switch": True}


def test_composite_repairs_malformed_entry_on_edit(mounted) -> None:
    container, store, _, _ = mounted
    store["calloutNote"] = "broken"

    container.get_element_by_id("setting_calloutNote_switch").set_checked(True)

    assert store["calloutNote"] == {"text": "注意", "switch": True}


def test_ensure_switch_text_entry_is_idempotent() -> None:
    item = TextWithSwitchItem(key="w", default_value=SwitchText("t", True))
    store: dict = {}

    first = ensure_switch_text_entry(item, store)
    second = ensure_switch_text_entry(item, store)

    assert first is second
    assert store == {"w": {"text": "t", "switch": True}}


def test_ensure_switch_text_entry_keeps_valid_entry() -> None:
    item = TextWithSwitchItem(key="w", default_value=SwitchText("t", True))
    entry = {"text": "mine", "switch": False}
    store = {"w": entry}

    assert ensure_switch_text_entry(item, store) is entry
    assert store["w"] == {"text": "mine", "switch": False}


def test_ensure_switch_text_entry_without_default() -> None:
    item = TextWithSwitchItem(key="w")
    store = {"w": {"text": "only text"}}

    assert ensure_switch_text_entry(item, store) == {"text": "", "switch": False}


def test_missing_control_is_skipped(caplog) -> None:
    caplog.set_level("WARNING", logger="cfgpanel")
    group = SettingGroup(name="A", label="A", items=(TextItem(key="gone"), TextItem(key="here")))
    container = HostContainer('<input id="setting_here" value="">')
    store: dict = {}

    assert bind_settings(container, [group], store) == 1
    container.get_element_by_id("setting_here").type_text("x")
    assert store == {"here": "x"}
    assert "setting_gone" in caplog.text


def test_unknown_kind_and_header_bind_nothing() -> None:
    container = HostContainer('<input id="setting_v">')
    assert bind_item(container, SettingItem(key="v", kind="slider"), {}) == 0
    assert container.listener_count() == 0


def test_button_runs_host_action_first() -> None:
    calls = []
    item = ButtonItem(key="go", on_click=lambda: calls.append("item"))
    group = SettingGroup(name="A", label="A", items=(item,))
    store: dict = {}
    container = HostContainer(render([group], "A", store))

    bind_settings(container, [group], store, {"go": lambda: calls.append("host")})
    container.get_element_by_id("setting_go").click()

    assert calls == ["host"]
    assert store == {}


def test_button_falls_back_to_item_action() -> None:
    calls = []
    item = ButtonItem(key="go", on_click=lambda: calls.append("item"))
    assert resolve_button_action(item, resolver_from_mapping({}))() is None
    assert calls == ["item"]


def test_button_without_action_is_noop() -> None:
    item = ButtonItem(key="go")
    group = SettingGroup(name="A", label="A", items=(item,))
    changes = []
    container = HostContainer(render([group], "A", {}))

    bind_settings(container, [group], {}, on_change=lambda: changes.append(1))
    container.get_element_by_id("setting_go").click()

    assert changes == []


def test_rebinding_live_markup_duplicates_listeners(mounted, registry: SettingsRegistry) -> None:
    container, store, _, bound = mounted
    bind_settings(container, registry.list_groups(), store)
    assert container.listener_count() == bound * 2

    container.set_markup(render(registry.list_groups(), "基础设置", store))
    bind_settings(container, registry.list_groups(), store)
    assert container.listener_count() == bound


def test_subclassed_item_is_rendered_and_bound() -> None:
    class LabelItem(TextItem):
        pass

    group = SettingGroup(name="A", label="A", items=(LabelItem(key="x"),))
    store: dict = {}
    container = HostContainer(render([group], "A", store))

    assert bind_settings(container, [group], store) == 1
    container.get_element_by_id("setting_x").type_text("typed")
    assert store == {"x": "typed"}


def test_binding_again_keeps_edited_composite(registry: SettingsRegistry) -> None:
    groups = registry.list_groups()
    store: dict = {}
    container = HostContainer(render(groups, "基础设置", store))
    bind_settings(container, groups, store)

    container.get_element_by_id("setting_calloutNote_text").type_text("edited")
    container.get_element_by_id("setting_calloutNote_switch").set_checked(True)
    container.set_markup(render(groups, "基础设置", store))
    bind_settings(container, groups, store)

    assert store["calloutNote"] == {"text": "edited", "switch": True}
    assert container.get_element_by_id("setting_calloutNote_text").value == "edited"
