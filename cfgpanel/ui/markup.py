"""
Markup tree building for the settings panel.

Markup is assembled as a BeautifulSoup tag tree and serialized once, so text
and attribute values are always escaped by the serializer instead of being
interpolated into strings.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

HTML_PARSER = "html.parser"
FORMATTER = "minimal"

CONTROL_ID_PREFIX = "setting_"
TEXT_SUFFIX = "_text"
SWITCH_SUFFIX = "_switch"

HIDDEN_CLASS = "fn__none"
FOCUS_CLASS = "b3-list-item--focus"
TAB_ITEM_CLASS = "b3-list-item"
TAB_CONTAINER_CLASS = "config__tab-container"
TAB_ITEM_ATTR = "data-tab"
TAB_CONTAINER_ATTR = "data-name"

TAB_ITEM_SELECTOR = f".{TAB_ITEM_CLASS}[{TAB_ITEM_ATTR}]"
TAB_CONTAINER_SELECTOR = f".{TAB_CONTAINER_CLASS}"

Child = Union[Tag, str, None]


def control_id(key: str) -> str:
    """Element id of the control bound to ``key``."""
    return f"{CONTROL_ID_PREFIX}{key}"


def switch_text_ids(key: str) -> tuple[str, str]:
    """Element ids of a composite item's text and switch sub-controls."""
    return control_id(f"{key}{TEXT_SUFFIX}"), control_id(f"{key}{SWITCH_SUFFIX}")


def class_names(*names: Optional[str]) -> str:
    return " ".join(name for name in names if name)


class MarkupBuilder:
    """Creates tags against a single soup document."""

    def __init__(self) -> None:
        self.soup = BeautifulSoup("", HTML_PARSER)

    def tag(
        self,
        name: str,
        *children: Child,
        classes: Optional[str] = None,
        attrs: Optional[dict[str, str]] = None,
    ) -> Tag:
        """
        Create a tag with optional class string, attributes and children.

        ``str`` children become text nodes; ``None`` children are skipped.
        """
        tag_attrs: dict[str, str] = {}
        if classes:
            tag_attrs["class"] = classes
        tag_attrs.update(attrs or {})
        element = self.soup.new_tag(name, attrs=tag_attrs)
        self.extend(element, children)
        return element

    def extend(self, parent: Tag, children: Iterable[Child]) -> Tag:
        for child in children:
            if child is None:
                continue
            if isinstance(child, str):
                parent.append(NavigableString(child))
            else:
                parent.append(child)
        return parent


def serialize(node: Optional[Tag]) -> str:
    """Serialize a tag tree with escaped text and attributes."""
    if node is None:
        return ""
    return node.decode(formatter=FORMATTER)


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse a markup fragment into a soup document."""
    return BeautifulSoup(markup or "", HTML_PARSER)
