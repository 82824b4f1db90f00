"""
In-process host container for rendered settings markup.

``HostContainer`` plays the part of the dialog element a host embeds the
panel into: it parses markup, answers id and selector lookups, keeps control
state (values, checked flags, class lists) and dispatches events to attached
listeners. Replacing the markup discards every listener.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, NavigableString, Script, Stylesheet

from cfgpanel.logging import get_logger
from cfgpanel.ui.markup import MarkupBuilder, parse_fragment, serialize

logger = get_logger(__name__)

# Text of these elements is raw CSS or script and is never entity-escaped.
_RAW_TEXT_STRINGS = {"style": Stylesheet, "script": Script}


@dataclass(frozen=True)
class ControlEvent:
    """Event delivered to listeners."""

    type: str
    target: "Element"


Listener = Callable[[ControlEvent], None]


class Element:
    """View over one element of a ``HostContainer``."""

    def __init__(self, container: "HostContainer", tag: Tag) -> None:
        self._container = container
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<Element {self.tag_name} id={self.id!r}>"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def tag_name(self) -> str:
        return self._tag.name

    @property
    def id(self) -> Optional[str]:
        return self.get_attribute("id")

    @property
    def text(self) -> str:
        return "".join(
            str(node)
            for node in self._tag.descendants
            if isinstance(node, NavigableString) and not isinstance(node, Comment)
        )

    @text.setter
    def text(self, value: str) -> None:
        string_class = _RAW_TEXT_STRINGS.get(self.tag_name, NavigableString)
        self._tag.string = string_class(value)

    def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    # -- class list ----------------------------------------------------
    @property
    def classes(self) -> list[str]:
        value = self._tag.get("class") or []
        if isinstance(value, str):
            value = value.split()
        return list(value)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        classes = self.classes
        if name not in classes:
            classes.append(name)
        self._tag["class"] = classes

    def remove_class(self, name: str) -> None:
        classes = [value for value in self.classes if value != name]
        if classes:
            self._tag["class"] = classes
        elif "class" in self._tag.attrs:
            del self._tag["class"]

    # -- control state -------------------------------------------------
    @property
    def value(self) -> str:
        if self.tag_name == "textarea":
            return self._tag.get_text()
        if self.tag_name == "select":
            option = self._selected_option()
            if option is None:
                return ""
            return str(option.get("value", option.get_text()))
        return str(self._tag.get("value", ""))

    @value.setter
    def value(self, new_value: str) -> None:
        if self.tag_name == "textarea":
            self._tag.string = new_value
        elif self.tag_name == "select":
            for option in self._tag.find_all("option"):
                if str(option.get("value", option.get_text())) == new_value:
                    option["selected"] = ""
                elif "selected" in option.attrs:
                    del option["selected"]
        else:
            self._tag["value"] = new_value

    @property
    def checked(self) -> bool:
        return "checked" in self._tag.attrs

    @checked.setter
    def checked(self, state: bool) -> None:
        if state:
            self._tag["checked"] = ""
        elif "checked" in self._tag.attrs:
            del self._tag["checked"]

    def _selected_option(self) -> Optional[Tag]:
        options = self._tag.find_all("option")
        for option in options:
            if "selected" in option.attrs:
                return option
        return options[0] if options else None

    # -- events --------------------------------------------------------
    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._container._add_listener(self._tag, event_type, listener)

    def listener_count(self, event_type: Optional[str] = None) -> int:
        return self._container._listener_count(self._tag, event_type)

    def dispatch_event(self, event_type: str) -> None:
        self._container._dispatch(self, event_type)

    def type_text(self, text: str) -> None:
        """Simulate the user typing ``text`` into an input or textarea."""
        self.value = text
        self.dispatch_event("input")

    def set_checked(self, state: bool) -> None:
        """Simulate the user toggling a checkbox."""
        self.checked = state
        self.dispatch_event("change")

    def choose(self, option_value: str) -> None:
        """Simulate the user picking an option of a select."""
        self.value = option_value
        self.dispatch_event("change")

    def click(self) -> None:
        self.dispatch_event("click")

    def remove(self) -> None:
        self._container._forget(self._tag)
        self._tag.decompose()


class HostContainer:
    """DOM-like container that holds panel markup and its listeners."""

    def __init__(self, markup: str = "") -> None:
        self._soup: BeautifulSoup = parse_fragment("")
        self._listeners: dict[int, dict[str, list[Listener]]] = {}
        self.set_markup(markup)

    @property
    def markup(self) -> str:
        """Serialize the current element state."""
        return serialize(self._soup)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def set_markup(self, markup: str) -> None:
        """Replace the container content, dropping all attached listeners."""
        self._soup = parse_fragment(markup)
        self._listeners = {}

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        tag = self._soup.find(id=element_id)
        return Element(self, tag) if isinstance(tag, Tag) else None

    def query_selector(self, selector: str) -> Optional[Element]:
        tag = self._soup.select_one(selector)
        return Element(self, tag) if tag is not None else None

    def query_selector_all(self, selector: str) -> list[Element]:
        return [Element(self, tag) for tag in self._soup.select(selector)]

    def append_element(
        self,
        name: str,
        text: Optional[str] = None,
        attrs: Optional[dict[str, str]] = None,
    ) -> Element:
        """Append a new element at the container's top level."""
        tag = MarkupBuilder().tag(name, attrs=attrs)
        self._soup.append(tag)
        element = Element(self, tag)
        if text is not None:
            element.text = text
        return element

    def listener_count(self) -> int:
        """Total number of listeners attached inside the container."""
        return sum(
            len(listeners)
            for by_type in self._listeners.values()
            for listeners in by_type.values()
        )

    def _add_listener(self, tag: Tag, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(id(tag), {}).setdefault(event_type, []).append(listener)

    def _listener_count(self, tag: Tag, event_type: Optional[str]) -> int:
        by_type = self._listeners.get(id(tag), {})
        if event_type is not None:
            return len(by_type.get(event_type, []))
        return sum(len(listeners) for listeners in by_type.values())

    def _forget(self, tag: Tag) -> None:
        self._listeners.pop(id(tag), None)

    def _dispatch(self, target: Element, event_type: str) -> None:
        listeners = list(self._listeners.get(id(target.tag), {}).get(event_type, []))
        event = ControlEvent(type=event_type, target=target)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                # One failing listener must not keep the others from running.
                logger.exception("Listener for '%s' on %r failed", event_type, target)
