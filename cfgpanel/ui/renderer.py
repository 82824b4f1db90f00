"""
Settings panel renderer.

Maps (groups, active group, value store) to markup. Rendering is pure: the
same inputs always produce byte-identical output, and the value store is only
read.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Sequence

from bs4 import Tag

from cfgpanel.config.models import (
    ButtonItem,
    CheckboxItem,
    HeaderItem,
    SelectItem,
    SettingGroup,
    SettingItem,
    SwitchText,
    TextareaItem,
    TextItem,
    TextWithSwitchItem,
)
from cfgpanel.logging import get_logger
from cfgpanel.ui.markup import (
    FOCUS_CLASS,
    HIDDEN_CLASS,
    TAB_CONTAINER_ATTR,
    TAB_CONTAINER_CLASS,
    TAB_ITEM_ATTR,
    TAB_ITEM_CLASS,
    MarkupBuilder,
    class_names,
    control_id,
    serialize,
    switch_text_ids,
)

logger = get_logger(__name__)


def effective_value(item: SettingItem, store: Mapping[str, Any]) -> Any:
    """Stored value for ``item``, or its default when the store has none."""
    value = store.get(item.key)
    return item.default_value if value is None else value


def _display_text(value: Any) -> str:
    return "" if value is None else str(value)


def _same_choice(value: Any, option_value: Any) -> bool:
    # Select controls hand back strings, so "2" must still select option 2.
    if value is None:
        return False
    return value == option_value or str(value) == str(option_value)


def resolve_switch_text(item: TextWithSwitchItem, value: Any) -> SwitchText:
    """
    Resolve a composite value from its store form.

    Entries the binder would repair (missing, partial or malformed) resolve to
    the item default, so the rendered controls match the repaired store.
    """
    if isinstance(value, SwitchText):
        return value
    return SwitchText.from_store(value) or item.default_value or SwitchText()


# ---------------------------------------------------------------------------
# Per-kind controls
# ---------------------------------------------------------------------------


def _text_control(b: MarkupBuilder, item: TextItem, value: Any) -> Tag:
    return b.tag(
        "div",
        b.tag(
            "input",
            classes="b3-text-field fn__block",
            attrs={
                "id": control_id(item.key),
                "placeholder": item.placeholder or "",
                "value": _display_text(value),
            },
        ),
        classes="fn__block",
    )


def _textarea_control(b: MarkupBuilder, item: TextareaItem, value: Any) -> Tag:
    return b.tag(
        "div",
        b.tag(
            "textarea",
            _display_text(value),
            classes="b3-text-field fn__block",
            attrs={
                "id": control_id(item.key),
                "placeholder": item.placeholder or "",
                "rows": str(item.rows),
            },
        ),
        classes="fn__block",
    )


def _checkbox_control(b: MarkupBuilder, item: CheckboxItem, value: Any) -> Tag:
    attrs = {"type": "checkbox", "id": control_id(item.key)}
    if value:
        attrs["checked"] = ""
    return b.tag(
        "div",
        b.tag("input", classes="b3-switch", attrs=attrs),
        b.tag("span", classes="fn__space"),
        b.tag("span", item.description or ""),
        classes="fn__flex",
    )


def _select_control(b: MarkupBuilder, item: SelectItem, value: Any) -> Tag:
    options = []
    for option in item.options:
        attrs = {"value": _display_text(option.value)}
        if _same_choice(value, option.value):
            attrs["selected"] = ""
        options.append(b.tag("option", option.label, attrs=attrs))
    return b.tag(
        "div",
        b.tag("select", *options, classes="b3-select fn__block", attrs={"id": control_id(item.key)}),
        classes="fn__block",
    )


def _button_control(b: MarkupBuilder, item: ButtonItem, value: Any) -> Tag:
    return b.tag(
        "div",
        b.tag(
            "button",
            item.label,
            classes="b3-button b3-button--outline fn__flex-center fn__size200",
            attrs={"id": control_id(item.key)},
        ),
        classes="fn__block",
    )


def _text_with_switch_control(b: MarkupBuilder, item: TextWithSwitchItem, value: Any) -> Tag:
    current = resolve_switch_text(item, value)
    text_id, switch_id = switch_text_ids(item.key)
    switch_attrs = {"type": "checkbox", "id": switch_id}
    if current.enabled:
        switch_attrs["checked"] = ""
    return b.tag(
        "div",
        b.tag(
            "input",
            classes="b3-text-field fn__flex-1",
            attrs={"id": text_id, "placeholder": item.placeholder or "", "value": current.text},
        ),
        b.tag("input", classes="b3-switch", attrs=switch_attrs),
        classes="fn__flex fn__flex-center",
        attrs={"style": "gap: 8px;"},
    )


def _header_block(b: MarkupBuilder, item: HeaderItem) -> Tag:
    return b.tag(
        "div",
        b.tag("div", b.tag("div", item.title, classes="fn__flex-1"), classes="fn__flex b3-label__text"),
        b.tag("div", item.description, classes="b3-label__text") if item.description else None,
        b.tag("div", classes="fn__hr"),
        classes="b3-label",
    )


_CONTROL_BUILDERS: dict[type, Callable[[MarkupBuilder, Any, Any], Tag]] = {
    TextItem: _text_control,
    TextareaItem: _textarea_control,
    CheckboxItem: _checkbox_control,
    SelectItem: _select_control,
    ButtonItem: _button_control,
    TextWithSwitchItem: _text_with_switch_control,
}


def _control_builder(item: SettingItem) -> Optional[Callable[[MarkupBuilder, Any, Any], Tag]]:
    # Subclasses of a known kind render like their base.
    for cls in type(item).__mro__:
        if cls in _CONTROL_BUILDERS:
            return _CONTROL_BUILDERS[cls]
    return None


def _item_block(b: MarkupBuilder, item: SettingItem, store: Mapping[str, Any]) -> Optional[Tag]:
    if isinstance(item, HeaderItem):
        return _header_block(b, item)

    build_control = _control_builder(item)
    if build_control is None:
        logger.warning("Skipping settings item '%s' with unknown kind '%s'", item.key, item.kind)
        return None

    control = build_control(b, item, effective_value(item, store))
    # Checkbox descriptions sit beside the toggle instead of under the title.
    show_description = bool(item.description) and not isinstance(item, CheckboxItem)
    return b.tag(
        "div",
        b.tag("div", b.tag("div", item.title, classes="fn__flex-1"), classes="fn__flex b3-label__text"),
        b.tag("div", item.description, classes="b3-label__text") if show_description else None,
        b.tag("div", classes="fn__hr"),
        control,
        classes="b3-label",
    )


def render_item(item: SettingItem, value: Any) -> str:
    """
    Render a single item with an already-resolved value.

    Unknown kinds render to an empty string.
    """
    b = MarkupBuilder()
    return serialize(_item_block(b, item, {item.key: value}))


# ---------------------------------------------------------------------------
# Groups and panel
# ---------------------------------------------------------------------------


def _group_container(
    b: MarkupBuilder,
    group: SettingGroup,
    active_group: Optional[str],
    store: Mapping[str, Any],
) -> Tag:
    hidden = None if group.name == active_group else HIDDEN_CLASS
    return b.tag(
        "div",
        *(_item_block(b, item, store) for item in group.items),
        classes=class_names(TAB_CONTAINER_CLASS, hidden),
        attrs={TAB_CONTAINER_ATTR: group.name},
    )


def _group_list(b: MarkupBuilder, groups: Sequence[SettingGroup], active_group: Optional[str]) -> Tag:
    entries = []
    for group in groups:
        focus = FOCUS_CLASS if group.name == active_group else None
        entries.append(
            b.tag(
                "li",
                b.tag("span", group.label, classes="b3-list-item__text"),
                classes=class_names(TAB_ITEM_CLASS, focus),
                attrs={TAB_ITEM_ATTR: group.name},
            )
        )
    return b.tag("ul", *entries, classes="b3-tab-bar b3-list b3-list--background")


def build_panel(
    groups: Sequence[SettingGroup],
    active_group: Optional[str],
    store: Mapping[str, Any],
) -> Tag:
    """
    Build the panel tag tree: the group list and one content region per group.

    Every group is rendered; groups other than ``active_group`` carry the
    hidden marker.
    """
    b = MarkupBuilder()
    return b.tag(
        "div",
        _group_list(b, groups, active_group),
        b.tag(
            "div",
            *(_group_container(b, group, active_group, store) for group in groups),
            classes="config__tab-wrap fn__flex-1",
        ),
        classes="fn__flex-1 fn__flex config__panel",
    )


def render(
    groups: Sequence[SettingGroup],
    active_group: Optional[str],
    store: Mapping[str, Any],
) -> str:
    """Render the whole settings panel to markup."""
    return serialize(build_panel(groups, active_group, store))
