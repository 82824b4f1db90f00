"""
Settings item variants.

Every item kind is its own dataclass so the shape of ``default_value`` is
fixed per kind. Items are immutable once registered; the live values belong
to the host's value store, never to the item.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Mapping, Optional, Union

from .constants import (
    DEFAULT_BUTTON_TEXT,
    DEFAULT_TEXTAREA_ROWS,
    KIND_BUTTON,
    KIND_CHECKBOX,
    KIND_HEADER,
    KIND_SELECT,
    KIND_TEXT,
    KIND_TEXT_WITH_SWITCH,
    KIND_TEXTAREA,
    SWITCH_ENABLED_FIELD,
    SWITCH_TEXT_FIELD,
)


@dataclass(frozen=True)
class SwitchText:
    """Composite value pairing free text with an on/off toggle."""

    text: str = ""
    enabled: bool = False

    @classmethod
    def from_store(cls, raw: Any) -> Optional["SwitchText"]:
        """
        Read a composite value from its value-store form.

        Returns ``None`` unless ``raw`` is a mapping holding both fields.
        """
        if not is_switch_text_entry(raw):
            return None
        return cls(
            text="" if raw[SWITCH_TEXT_FIELD] is None else str(raw[SWITCH_TEXT_FIELD]),
            enabled=raw[SWITCH_ENABLED_FIELD] is True,
        )

    def to_store(self) -> dict[str, Any]:
        """Return the value-store form ``{"text": ..., "switch": ...}``."""
        return {SWITCH_TEXT_FIELD: self.text, SWITCH_ENABLED_FIELD: self.enabled}


def is_switch_text_entry(raw: Any) -> bool:
    """True when ``raw`` is a mapping carrying both composite fields."""
    return isinstance(raw, Mapping) and SWITCH_TEXT_FIELD in raw and SWITCH_ENABLED_FIELD in raw


@dataclass(frozen=True)
class SelectOption:
    """One label/value choice of a select item."""

    label: str
    value: Any


@dataclass(frozen=True)
class SettingItem:
    """
    Base settings item.

    Instantiated directly only for kinds the renderer does not know; such
    items render to nothing and are never bound.
    """

    key: str
    title: str = ""
    description: Optional[str] = None
    kind: str = ""

    stores_value: ClassVar[bool] = False
    """Whether the item reads and writes the value store."""

    @property
    def default_value(self) -> Any:
        return None

    def default_store_value(self) -> Any:
        """Value used to seed a fresh store, or ``None`` when there is none."""
        return self.default_value


@dataclass(frozen=True)
class TextItem(SettingItem):
    """Single-line text input."""

    kind: str = field(default=KIND_TEXT, init=False)
    default_value: Optional[str] = None
    placeholder: str = ""

    stores_value: ClassVar[bool] = True


@dataclass(frozen=True)
class TextareaItem(SettingItem):
    """Multi-line text input."""

    kind: str = field(default=KIND_TEXTAREA, init=False)
    default_value: Optional[str] = None
    placeholder: str = ""
    rows: int = DEFAULT_TEXTAREA_ROWS

    stores_value: ClassVar[bool] = True


@dataclass(frozen=True)
class CheckboxItem(SettingItem):
    """Boolean toggle; its description is shown beside the control."""

    kind: str = field(default=KIND_CHECKBOX, init=False)
    default_value: Optional[bool] = None

    stores_value: ClassVar[bool] = True


@dataclass(frozen=True)
class SelectItem(SettingItem):
    """Choice among ``options``."""

    kind: str = field(default=KIND_SELECT, init=False)
    default_value: Any = None
    options: tuple[SelectOption, ...] = ()

    stores_value: ClassVar[bool] = True


@dataclass(frozen=True)
class ButtonItem(SettingItem):
    """Clickable action; carries no value."""

    kind: str = field(default=KIND_BUTTON, init=False)
    button_text: Optional[str] = None
    on_click: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)

    @property
    def label(self) -> str:
        return self.button_text or DEFAULT_BUTTON_TEXT


@dataclass(frozen=True)
class TextWithSwitchItem(SettingItem):
    """Text input with an adjacent toggle, stored as one composite value."""

    kind: str = field(default=KIND_TEXT_WITH_SWITCH, init=False)
    default_value: Optional[SwitchText] = None
    placeholder: str = ""

    stores_value: ClassVar[bool] = True

    def default_store_value(self) -> dict[str, Any]:
        return (self.default_value or SwitchText()).to_store()


@dataclass(frozen=True)
class HeaderItem(SettingItem):
    """Non-interactive title/description separator."""

    kind: str = field(default=KIND_HEADER, init=False)


AnySettingItem = Union[
    TextItem,
    TextareaItem,
    CheckboxItem,
    SelectItem,
    ButtonItem,
    TextWithSwitchItem,
    HeaderItem,
    SettingItem,
]


@dataclass(frozen=True)
class SettingGroup:
    """
    Named, ordered collection of items rendered as one selectable tab.

    ``name`` is the identity used by navigation; ``label`` is display text.
    """

    name: str
    label: str
    items: tuple[SettingItem, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of items while keeping the group hashable.
        object.__setattr__(self, "items", tuple(self.items))


ITEM_CLASSES: dict[str, type[SettingItem]] = {
    KIND_TEXT: TextItem,
    KIND_TEXTAREA: TextareaItem,
    KIND_CHECKBOX: CheckboxItem,
    KIND_SELECT: SelectItem,
    KIND_BUTTON: ButtonItem,
    KIND_TEXT_WITH_SWITCH: TextWithSwitchItem,
    KIND_HEADER: HeaderItem,
}
