"""
Settings editing session.

A session is the host-side composition root for one editing dialog: it seeds
the value store from storage (or defaults), mounts rendered markup into a
host container, binds listeners and navigation, saves edits, and runs the
reset flow that re-renders the panel from defaults.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from cfgpanel.config.models import DEFAULT_STORAGE_KEY, PanelConfig
from cfgpanel.logging import exception_exc_info, format_exception_summary, get_logger, setup_logging
from cfgpanel.registry import SettingsRegistry
from cfgpanel.storage import JsonFileStorage, SettingsStorage
from cfgpanel.ui.binder import ButtonAction, bind_settings
from cfgpanel.ui.host import HostContainer
from cfgpanel.ui.navigation import NavigationState, bind_group_navigation
from cfgpanel.ui.renderer import render

logger = get_logger(__name__)

# Storage failures a session recovers from instead of propagating
_STORAGE_ERRORS = (OSError, TypeError, ValueError)


class SettingsSession:
    """Own the value store and panel state for one settings dialog."""

    def __init__(
        self,
        registry: SettingsRegistry,
        storage: SettingsStorage,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        initial_group: Optional[str] = None,
        autosave: bool = True,
        on_change: Optional[Callable[[dict[str, Any]], None]] = None,
    ) -> None:
        self.registry = registry
        self.storage = storage
        self.storage_key = storage_key
        self.autosave = autosave
        self.navigation = NavigationState(initial_group)
        self.store: dict[str, Any] = {}
        self._on_change = on_change
        self._actions: dict[str, ButtonAction] = {}
        self._container: Optional[HostContainer] = None
        self._opened = False

    @classmethod
    def from_config(
        cls,
        config: PanelConfig,
        registry: SettingsRegistry,
        *,
        configure_logging: bool = True,
        **kwargs: Any,
    ) -> "SettingsSession":
        """
        Build a session backed by JSON files under ``config.storage_folder``.

        Groups declared in ``config.groups_file`` are registered after any
        groups already in ``registry``. Unless ``configure_logging`` is false,
        the config's log level and file are applied first.
        """
        if configure_logging:
            setup_logging(level=config.log_level, log_file=config.log_file)
        if config.groups_file is not None:
            count = registry.register_groups_from_file(config.groups_file)
            logger.info("Registered %d settings groups from %s", count, config.groups_file)
        return cls(
            registry,
            JsonFileStorage(config.storage_folder),
            storage_key=config.storage_key,
            initial_group=config.initial_group,
            **kwargs,
        )

    @property
    def container(self) -> Optional[HostContainer]:
        return self._container

    @property
    def active_group(self) -> Optional[str]:
        return self.navigation.resolve(self.registry.list_groups())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> dict[str, Any]:
        """Seed the value store from storage, or from defaults when absent."""
        data = None
        try:
            data = self.storage.load(self.storage_key)
        except _STORAGE_ERRORS as exc:
            logger.warning(
                "Failed to load settings '%s', using defaults: %s",
                self.storage_key,
                format_exception_summary(exc),
            )

        self.store.clear()
        self.store.update(self.registry.default_values() if data is None else data)
        self._opened = True
        return self.store

    def mount(self, container: HostContainer) -> HostContainer:
        """
        Render into ``container`` and bind it.

        The markup is replaced before binding, so mounting the same container
        again never duplicates listeners.
        """
        if not self._opened:
            self.open()

        groups = self.registry.list_groups()
        active = self.navigation.resolve(groups)
        if active is not None:
            self.navigation.activate(active)

        container.set_markup(render(groups, active, self.store))
        bind_settings(container, groups, self.store, self.resolve_action, self._handle_change)
        bind_group_navigation(container, self.navigation.activate)
        self._container = container
        return container

    def close(self) -> bool:
        """Save on dialog teardown and release the container."""
        saved = self.save()
        self._container = None
        return saved

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def register_action(self, key: str, action: ButtonAction) -> None:
        """Attach ``action`` to the button item with ``key``."""
        self._actions[key] = action

    def resolve_action(self, key: str) -> Optional[ButtonAction]:
        return self._actions.get(key)

    def save(self) -> bool:
        """Persist the value store. Failures are logged and reported as ``False``."""
        try:
            return bool(self.storage.save(self.storage_key, self.store))
        except _STORAGE_ERRORS as exc:
            logger.error(
                "Failed to save settings '%s': %s",
                self.storage_key,
                format_exception_summary(exc),
                exc_info=exception_exc_info(exc),
            )
            return False

    def reset(self) -> dict[str, Any]:
        """
        Drop persisted data and return every setting to its default.

        A mounted panel is re-rendered and rebound on the active group.
        """
        try:
            self.storage.remove(self.storage_key)
        except _STORAGE_ERRORS as exc:
            logger.warning(
                "Failed to remove settings '%s': %s",
                self.storage_key,
                format_exception_summary(exc),
            )

        self.store.clear()
        self.store.update(self.registry.default_values())
        self._opened = True
        logger.info("Settings '%s' reset to defaults", self.storage_key)

        if self._container is not None:
            self.mount(self._container)
        if self._on_change is not None:
            self._on_change(self.store)
        return self.store

    def _handle_change(self) -> None:
        if self.autosave:
            self.save()
        if self._on_change is not None:
            self._on_change(self.store)
