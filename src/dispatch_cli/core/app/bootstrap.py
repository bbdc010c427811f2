"""
Application bootstrap.

Builds every core service once, wires them into an ApplicationContext,
registers the built-in commands and loads the configured plugins. The
returned CliApplication is what the console entry points drive.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.common.exceptions import ConfigurationError
from dispatch_cli.core.common.logging_utils import get_logger
from dispatch_cli.core.config.app_config import AppConfig
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.domain.commands import (
    EchoCommand,
    HelpCommand,
    StatusCommand,
    VersionCommand,
)
from dispatch_cli.core.services.command_registry import CommandRegistry
from dispatch_cli.core.services.dispatcher import Dispatcher
from dispatch_cli.core.services.error_handler import ErrorHandler
from dispatch_cli.core.services.event_emitter import CliEvent, EventEmitter
from dispatch_cli.core.services.input_parser import InputParser
from dispatch_cli.core.services.output_formatter import OutputFormatter
from dispatch_cli.core.services.plugin_manager import PluginManager


class CliApplication:
    """A bootstrapped engine: context, dispatcher and plugin lifecycle."""

    def __init__(
        self,
        context: ApplicationContext,
        dispatcher: Dispatcher,
        plugin_manager: PluginManager,
        input_parser: InputParser,
        output_formatter: OutputFormatter,
    ) -> None:
        self.context = context
        self.dispatcher = dispatcher
        self.plugin_manager = plugin_manager
        self.input_parser = input_parser
        self.output_formatter = output_formatter

    @property
    def config(self) -> AppConfig:
        return self.context.config

    async def run(self, tokens: Sequence[str]) -> tuple[CommandResult, str]:
        """Dispatch tokens and return the result with its rendered output."""
        return await self.dispatcher.run(tokens)

    async def shutdown(self) -> None:
        """Unload plugins in reverse load order, then announce shutdown."""
        await self.plugin_manager.unload_all()
        self.context.logger.info("CLI engine shut down")
        self.context.event_emitter.emit(
            CliEvent.SHUTDOWN, {"timestamp": _now_iso()}
        )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def register_builtin_commands(context: ApplicationContext) -> None:
    registry = context.registry
    registry.register(HelpCommand(registry))
    registry.register(VersionCommand(context.config.version, context.config.app_name))
    registry.register(StatusCommand(registry))
    registry.register(EchoCommand())
    context.logger.info(
        "Built-in commands registered",
        commands=[command.name for command in registry.get_all()],
    )


async def load_configured_plugins(
    plugin_manager: PluginManager, config: AppConfig
) -> None:
    """Load enabled built-in plugins, then any published via entry points.

    Raises:
        ConfigurationError: if an enabled plugin name is not a built-in one
    """
    from dispatch_cli.plugins import BUILTIN_PLUGINS

    for name in config.plugins.enabled:
        plugin_cls = BUILTIN_PLUGINS.get(name)
        if plugin_cls is None:
            raise ConfigurationError(
                f"Unknown plugin: {name}",
                cause=f"Available plugins: {', '.join(sorted(BUILTIN_PLUGINS))}",
            )
        await plugin_manager.load_plugin(name, plugin_cls())

    if config.plugins.discover_entry_points:
        await plugin_manager.load_entry_point_plugins()


async def bootstrap(
    config: AppConfig | None = None, logger: Any = None
) -> CliApplication:
    """
    Build a ready-to-use CLI application.

    Args:
        config: Application configuration, defaults to ``AppConfig.from_env()``
        logger: Structured logger, defaults to the ``dispatch_cli`` logger

    Returns:
        The bootstrapped application
    """
    config = config if config is not None else AppConfig.from_env()
    logger = logger if logger is not None else get_logger("dispatch_cli")

    event_emitter = EventEmitter()
    registry = CommandRegistry(event_emitter)
    input_parser = InputParser()
    output_formatter = OutputFormatter()
    dispatcher = Dispatcher(
        command_registry=registry,
        logger=logger,
        error_handler=ErrorHandler(),
        event_emitter=event_emitter,
        input_parser=input_parser,
        output_formatter=output_formatter,
    )

    context = ApplicationContext(
        config=config,
        logger=logger,
        registry=registry,
        event_emitter=event_emitter,
    )
    plugin_manager = PluginManager(context)

    register_builtin_commands(context)
    try:
        await load_configured_plugins(plugin_manager, config)
    except Exception:
        # Plugins that did start must not outlive a failed bootstrap
        await plugin_manager.unload_all()
        raise

    logger.info(
        "CLI engine started",
        commands=len(registry),
        plugins=plugin_manager.get_loaded_plugins(),
    )
    event_emitter.emit(CliEvent.STARTUP, {"timestamp": _now_iso()})

    return CliApplication(
        context=context,
        dispatcher=dispatcher,
        plugin_manager=plugin_manager,
        input_parser=input_parser,
        output_formatter=output_formatter,
    )
