"""
Configuration loader for cfgpanel.

Handles loading the panel configuration and declarative settings groups from
JSON/YAML files and converting them to typed dataclass models.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from cfgpanel.logging import get_logger

from .models import (
    ITEM_CLASSES,
    KIND_BUTTON,
    KIND_CHECKBOX,
    KIND_HEADER,
    KIND_SELECT,
    KIND_TEXT,
    KIND_TEXT_WITH_SWITCH,
    KIND_TEXTAREA,
    SWITCH_ENABLED_FIELD,
    SWITCH_TEXT_FIELD,
    DEFAULT_TEXTAREA_ROWS,
    PanelConfig,
    SelectOption,
    SettingGroup,
    SettingItem,
    SwitchText,
)

logger = get_logger(__name__)


def load_raw_config(path: Path) -> Dict[str, Any]:
    """
    Load raw configuration from JSON or YAML file.

    Also loads environment variables from .env file if present.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Dictionary with raw configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        json.JSONDecodeError: If JSON is invalid
        yaml.YAMLError: If YAML is invalid
    """
    load_dotenv()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        config = yaml.safe_load(content) or {}
    elif suffix == ".json":
        config = json.loads(content)
    else:
        raise ValueError(
            f"Unsupported config format: {suffix}. "
            f"Use .json, .yaml, or .yml"
        )

    return config


def build_config_from_raw(raw: Dict[str, Any], path: Path | None = None) -> PanelConfig:
    """
    Build PanelConfig from raw configuration.

    Relative ``groups_file`` entries resolve against the config file's folder.
    """
    if not isinstance(raw, dict):
        raise ValueError("Panel config root must be a mapping")

    groups_file = raw.get("groups_file")
    if groups_file and path is not None:
        candidate = Path(groups_file).expanduser()
        if not candidate.is_absolute():
            groups_file = path.parent / candidate

    config = PanelConfig(
        storage_folder=raw.get("storage_folder"),
        storage_key=raw.get("storage_key", ""),
        initial_group=raw.get("initial_group"),
        log_level=raw.get("log_level", ""),
        log_file=raw.get("log_file"),
        groups_file=groups_file,
    )
    config.validate()
    return config


def load_config_from_file(path: Path | str) -> PanelConfig:
    """
    Load and validate panel configuration from a file.

    Args:
        path: Path to config file

    Returns:
        Validated PanelConfig instance
    """
    if isinstance(path, str):
        path = Path(path)
    path = path.expanduser().resolve()
    raw = load_raw_config(path)
    return build_config_from_raw(raw, path)


def config_to_raw(config: PanelConfig) -> Dict[str, Any]:
    """
    Serialize PanelConfig into a JSON/YAML-friendly dict.
    """
    return {
        "storage_folder": str(config.storage_folder) if config.storage_folder else None,
        "storage_key": config.storage_key,
        "initial_group": config.initial_group,
        "log_level": config.log_level,
        "log_file": config.log_file,
        "groups_file": str(config.groups_file) if config.groups_file else None,
    }


def save_config_to_file(config: PanelConfig, path: Path | str) -> None:
    """
    Serialize and save panel configuration to JSON/YAML file.
    """
    if isinstance(path, str):
        path = Path(path)

    path = path.expanduser().resolve()
    raw = config_to_raw(config)

    suffix = path.suffix.lower()
    if suffix == ".json":
        path.write_text(json.dumps(raw, indent=2, ensure_ascii=False), encoding="utf-8")
    elif suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
    else:
        raise ValueError(
            f"Unsupported config format: {suffix}. "
            f"Use .json, .yaml, or .yml"
        )


# ---------------------------------------------------------------------------
# Declarative settings groups
# ---------------------------------------------------------------------------


def _pick(raw: Dict[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in raw:
            return raw[name]
    return default


def build_switch_text(raw: Any) -> SwitchText | None:
    """Build a composite default from ``{"text": ..., "switch": ...}``."""
    if raw is None:
        return None
    if isinstance(raw, SwitchText):
        return raw
    if not isinstance(raw, dict):
        raise ValueError("textWithSwitch defaultValue must be a mapping with 'text' and 'switch'")
    text = raw.get(SWITCH_TEXT_FIELD)
    enabled = raw.get(SWITCH_ENABLED_FIELD, raw.get("enabled", False))
    if not isinstance(enabled, bool):
        raise ValueError(f"textWithSwitch 'switch' must be true or false, got {enabled!r}")
    return SwitchText(text="" if text is None else str(text), enabled=enabled)


def build_select_options(raw: Any) -> tuple[SelectOption, ...]:
    """Build select options from a list of ``{label, value}`` mappings."""
    options: list[SelectOption] = []
    for entry in raw or []:
        if isinstance(entry, SelectOption):
            options.append(entry)
            continue
        if not isinstance(entry, dict) or "value" not in entry:
            raise ValueError("Each select option must be a mapping with 'value'")
        value = entry["value"]
        label = entry.get("label")
        options.append(SelectOption(label=str(value if label is None else label), value=value))
    return tuple(options)


def item_from_raw(raw: Dict[str, Any]) -> SettingItem:
    """
    Build a settings item from a declarative mapping.

    Field names follow the registration format used by plugins
    (``type``, ``defaultValue``, ``buttonText``). An unrecognised ``type``
    yields a plain ``SettingItem`` that renders to nothing.

    Raises:
        ValueError: If a valued item has no ``key``
    """
    if not isinstance(raw, dict):
        raise ValueError("Each settings item must be a mapping")

    kind = str(_pick(raw, "type", "kind", default="") or "").strip()
    key = str(raw.get("key") or "").strip()
    if not key and kind != KIND_HEADER:
        raise ValueError(f"Settings item of type '{kind or '?'}' is missing 'key'")

    title = str(raw.get("title") or "")
    description = raw.get("description")
    if description is not None:
        description = str(description)
    default = _pick(raw, "defaultValue", "default_value", "default")
    placeholder = str(raw.get("placeholder") or "")

    common = {"key": key, "title": title, "description": description}
    if kind in (KIND_TEXT, KIND_TEXTAREA):
        extra: Dict[str, Any] = {
            "default_value": None if default is None else str(default),
            "placeholder": placeholder,
        }
        if kind == KIND_TEXTAREA:
            extra["rows"] = int(raw.get("rows") or DEFAULT_TEXTAREA_ROWS)
        return ITEM_CLASSES[kind](**common, **extra)
    if kind == KIND_CHECKBOX:
        if default is not None and not isinstance(default, bool):
            raise ValueError(f"checkbox '{key}' defaultValue must be true or false, got {default!r}")
        return ITEM_CLASSES[kind](**common, default_value=default)
    if kind == KIND_SELECT:
        return ITEM_CLASSES[kind](
            **common,
            default_value=default,
            options=build_select_options(raw.get("options")),
        )
    if kind == KIND_BUTTON:
        return ITEM_CLASSES[kind](
            **common,
            button_text=_pick(raw, "buttonText", "button_text"),
        )
    if kind == KIND_TEXT_WITH_SWITCH:
        return ITEM_CLASSES[kind](
            **common,
            default_value=build_switch_text(default),
            placeholder=placeholder,
        )
    if kind == KIND_HEADER:
        return ITEM_CLASSES[kind](**common)

    logger.warning("Settings item '%s' has unknown type '%s'; it will not be rendered", key, kind)
    return SettingItem(**common, kind=kind)


def group_from_raw(raw: Dict[str, Any]) -> SettingGroup:
    """
    Build a settings group from ``{name, label, items}``.

    Raises:
        ValueError: If the group has no ``name``
    """
    if not isinstance(raw, dict):
        raise ValueError("Each settings group must be a mapping")
    name = str(raw.get("name") or "").strip()
    if not name:
        raise ValueError("Settings group is missing 'name'")
    label = str(raw.get("label") or name)
    items = tuple(item_from_raw(entry) for entry in raw.get("items") or [])
    return SettingGroup(name=name, label=label, items=items)


def load_groups_from_file(path: Path | str) -> list[SettingGroup]:
    """
    Load declarative settings groups from a JSON/YAML file.

    The file holds either a list of groups or a mapping with a ``groups`` list.
    """
    if isinstance(path, str):
        path = Path(path)
    raw = load_raw_config(path.expanduser().resolve())
    entries = raw.get("groups") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ValueError(f"Groups file must contain a list of groups: {path}")
    return [group_from_raw(entry) for entry in entries]
