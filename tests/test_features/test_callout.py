from cfgpanel.features.callout import (
    CALLOUT_GROUP_NAME,
    CALLOUT_TYPES,
    STYLE_ELEMENT_ID,
    apply_callout_title_styles,
    escape_css_string,
    generate_callout_title_css,
    register_callout_settings,
    remove_callout_title_styles,
)
from cfgpanel.registry import SettingsRegistry
from cfgpanel.ui.host import HostContainer


def test_register_callout_settings() -> None:
    registry = SettingsRegistry()
    register_callout_settings(registry)

    group = registry.get_group(CALLOUT_GROUP_NAME)
    keys = [item.key for item in group.items]
    assert keys == ["callout_header", "callout_NOTE", "callout_TIP", "callout_IMPORTANT", "callout_WARNING",
                    "callout_CAUTION"]
    assert registry.default_values()["callout_TIP"] == {"text": "提示", "switch": False}


def test_no_css_when_nothing_enabled() -> None:
    registry = SettingsRegistry()
    register_callout_settings(registry)
    assert generate_callout_title_css(registry.default_values()) == ""


def test_css_for_enabled_entries_only() -> None:
    store = {
        "callout_NOTE": {"text": "Heads up", "switch": True},
        "callout_TIP": {"text": "Hint", "switch": False},
        "callout_WARNING": "malformed",
    }
    css = generate_callout_title_css(store)

    assert 'content: "Heads up";' in css
    assert 'data-subtype="NOTE"' in css
    assert 'data-id="calloutNote"' in css
    assert "Hint" not in css
    assert "WARNING" not in css


def test_empty_text_falls_back_to_default_title() -> None:
    css = generate_callout_title_css({"callout_CAUTION": {"text": "", "switch": True}})
    assert 'content: "谨慎";' in css


def test_escape_css_string() -> None:
    assert escape_css_string('say "hi"\\now\nplease') == 'say \\"hi\\"\\\\now please'


def test_apply_and_remove_styles() -> None:
    container = HostContainer()
    store = {CALLOUT_TYPES[0].setting_key: {"text": "A", "switch": True}}

    assert apply_callout_title_styles(container, store) == STYLE_ELEMENT_ID
    store[CALLOUT_TYPES[0].setting_key] = {"text": "B", "switch": True}
    apply_callout_title_styles(container, store)

    styles = container.query_selector_all("style")
    assert len(styles) == 1
    assert 'content: "B";' in styles[0].text

    remove_callout_title_styles(container)
    assert container.get_element_by_id(STYLE_ELEMENT_ID) is None
    remove_callout_title_styles(container)
