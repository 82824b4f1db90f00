"""
Callout title overrides.

Registers one text-with-switch item per callout type and turns the enabled
entries into CSS that replaces the built-in callout titles.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from cfgpanel.config.models import HeaderItem, SettingGroup, SwitchText, TextWithSwitchItem
from cfgpanel.config.models.constants import SWITCH_ENABLED_FIELD, SWITCH_TEXT_FIELD
from cfgpanel.logging import get_logger
from cfgpanel.registry import SettingsRegistry
from cfgpanel.ui.host import HostContainer

logger = get_logger(__name__)

CALLOUT_GROUP_NAME = "原生 Callout"
CALLOUT_KEY_PREFIX = "callout_"
STYLE_ELEMENT_ID = "snippetCSS-callout-title-styles"


@dataclass(frozen=True)
class CalloutType:
    """Built-in callout type whose title can be overridden."""

    subtype: str
    label: str
    default_title: str
    default_title_zh: str
    color_var: str
    slash_menu_id: str

    @property
    def setting_key(self) -> str:
        return f"{CALLOUT_KEY_PREFIX}{self.subtype}"


CALLOUT_TYPES: tuple[CalloutType, ...] = (
    CalloutType("NOTE", "Note", "Note", "注意", "var(--b3-callout-note)", "calloutNote"),
    CalloutType("TIP", "Tip", "Tip", "提示", "var(--b3-callout-tip)", "calloutTip"),
    CalloutType("IMPORTANT", "Important", "Important", "重要", "var(--b3-callout-important)", "calloutImportant"),
    CalloutType("WARNING", "Warning", "Warning", "警告", "var(--b3-callout-warning)", "calloutWarning"),
    CalloutType("CAUTION", "Caution", "Caution", "谨慎", "var(--b3-callout-caution)", "calloutCaution"),
)


def register_callout_settings(registry: SettingsRegistry) -> None:
    """Register the callout title group: a header plus one item per type."""
    items = [
        HeaderItem(
            key="callout_header",
            title="原生 Callout 固定标题文本",
            description="注意，固定标题文本会覆盖自定义标题",
        )
    ]
    for callout in CALLOUT_TYPES:
        items.append(
            TextWithSwitchItem(
                key=callout.setting_key,
                title=callout.label,
                default_value=SwitchText(text=callout.default_title_zh, enabled=False),
                placeholder=f"请输入 {callout.label} 的标题文本",
            )
        )
    registry.register_group(
        SettingGroup(name=CALLOUT_GROUP_NAME, label="原生 Callout 固定标题文本", items=tuple(items))
    )


def escape_css_string(text: str) -> str:
    """Escape text for a double-quoted CSS ``content`` string."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", " ")
        .replace("\r", "")
    )


def _title_override(callout: CalloutType, entry: Any) -> Optional[str]:
    if not isinstance(entry, Mapping) or SWITCH_ENABLED_FIELD not in entry:
        return None
    if entry.get(SWITCH_ENABLED_FIELD) is not True:
        return None
    return str(entry.get(SWITCH_TEXT_FIELD) or "") or callout.default_title_zh


def generate_callout_title_css(store: Mapping[str, Any]) -> str:
    """Build CSS rules overriding the titles of every enabled callout type."""
    rules: list[str] = []
    for callout in CALLOUT_TYPES:
        title = _title_override(callout, store.get(callout.setting_key))
        if not title:
            continue
        escaped = escape_css_string(title)
        block = f'.callout[data-subtype="{callout.subtype}"]'
        menu = f'.hint--menu button[data-id="{callout.slash_menu_id}"] .b3-list-item__text span'
        rules.append(
            f"{block} .callout-title {{\n"
            f"  color: transparent;\n"
            f"  width: 0;\n"
            f"  line-height: 0;\n"
            f"}}\n"
            f"{block} .callout-title::before {{\n"
            f'  content: "{escaped}";\n'
            f"  color: {callout.color_var};\n"
            f"  white-space: nowrap;\n"
            f"}}"
        )
        rules.append(
            f"{menu} {{\n"
            f"  color: transparent !important;\n"
            f"}}\n"
            f"{menu}::before {{\n"
            f'  content: "{escaped}";\n'
            f"  color: {callout.color_var};\n"
            f"}}"
        )
    return "\n".join(rules)


def apply_callout_title_styles(container: HostContainer, store: Mapping[str, Any]) -> str:
    """Create or refresh the callout title style element. Returns its id."""
    css = generate_callout_title_css(store)
    element = container.get_element_by_id(STYLE_ELEMENT_ID)
    if element is None:
        element = container.append_element("style", attrs={"id": STYLE_ELEMENT_ID})
    element.text = css
    logger.debug("Applied callout title styles (%d chars)", len(css))
    return STYLE_ELEMENT_ID


def remove_callout_title_styles(container: HostContainer) -> None:
    element = container.get_element_by_id(STYLE_ELEMENT_ID)
    if element is not None:
        element.remove()
