from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

_LAZY_EXPORTS = {
    "SettingsRegistry": ("cfgpanel.registry", "SettingsRegistry"),
    "SettingsSession": ("cfgpanel.session", "SettingsSession"),
    "render": ("cfgpanel.ui.renderer", "render"),
    "bind_settings": ("cfgpanel.ui.binder", "bind_settings"),
}

__all__ = ["__version__", "SettingsRegistry", "SettingsSession", "render", "bind_settings"]


def __getattr__(name: str) -> Any:
    if name in _LAZY_EXPORTS:
        module_name, attr_name = _LAZY_EXPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'cfgpanel' has no attribute '{name}'")
