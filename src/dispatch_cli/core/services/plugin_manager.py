"""Plugin loading and lifecycle management."""

from __future__ import annotations

from collections.abc import Iterable
from importlib import metadata

from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.common.exceptions import ConfigurationError
from dispatch_cli.core.interfaces.plugin_interface import IPlugin
from dispatch_cli.core.services.event_emitter import CliEvent

PLUGIN_ENTRY_POINT_GROUP = "dispatch_cli.plugins"


def iter_entry_points(
    group: str = PLUGIN_ENTRY_POINT_GROUP,
) -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=group)


class PluginManager:
    """
    Loads and unloads plugins against a shared application context.

    Initialization and shutdown failures are logged and re-raised to the
    caller: a plugin that cannot start is a setup-time fatal condition.
    """

    def __init__(self, context: ApplicationContext) -> None:
        self._context = context
        self._logger = context.logger
        self._loaded: dict[str, IPlugin] = {}

    async def load_plugin(self, name: str, plugin: IPlugin) -> None:
        """Initialize ``plugin`` and record it under ``name``.

        Raises:
            Exception: whatever ``plugin.initialize`` raised; the plugin is
                not recorded as loaded in that case.
        """
        if name in self._loaded:
            self._logger.warning("Replacing already loaded plugin", plugin=name)

        self._logger.info("Loading plugin", plugin=name)
        try:
            await plugin.initialize(self._context)
        except Exception as exc:
            self._logger.error(
                "Failed to load plugin", plugin=name, error=str(exc), exc_info=True
            )
            raise

        self._loaded[name] = plugin
        self._logger.info("Plugin loaded", plugin=name)
        self._context.event_emitter.emit(CliEvent.PLUGIN_LOADED, {"plugin_name": name})

    async def unload_plugin(self, name: str) -> None:
        """Shut ``name`` down and forget it; unknown names only log a warning."""
        plugin = self._loaded.get(name)
        if plugin is None:
            self._logger.warning("Plugin not found", plugin=name)
            return

        self._logger.info("Unloading plugin", plugin=name)
        try:
            await plugin.shutdown()
        except Exception as exc:
            self._logger.error(
                "Failed to unload plugin", plugin=name, error=str(exc), exc_info=True
            )
            raise

        del self._loaded[name]
        self._logger.info("Plugin unloaded", plugin=name)
        self._context.event_emitter.emit(
            CliEvent.PLUGIN_UNLOADED, {"plugin_name": name}
        )

    async def unload_all(self) -> None:
        """Unload every plugin, most recently loaded first."""
        for name in reversed(self.get_loaded_plugins()):
            await self.unload_plugin(name)

    async def load_entry_point_plugins(
        self, group: str = PLUGIN_ENTRY_POINT_GROUP
    ) -> list[str]:
        """Load plugins published by installed distributions.

        Each entry point may reference a plugin class or a ready instance.

        Returns:
            Names of the plugins that were loaded
        """
        loaded: list[str] = []
        for entry_point in iter_entry_points(group):
            target = entry_point.load()
            plugin = target() if isinstance(target, type) else target
            if not callable(getattr(plugin, "initialize", None)):
                raise ConfigurationError(
                    f"Entry point '{entry_point.name}' does not provide a plugin",
                    cause=f"{entry_point.value} has no initialize() method",
                )
            await self.load_plugin(entry_point.name, plugin)
            loaded.append(entry_point.name)
        return loaded

    def get_loaded_plugins(self) -> list[str]:
        return list(self._loaded)

    def is_plugin_loaded(self, name: str) -> bool:
        return name in self._loaded
