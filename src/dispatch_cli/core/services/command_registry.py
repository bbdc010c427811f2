from __future__ import annotations

import logging

from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry
from dispatch_cli.core.interfaces.event_emitter_interface import IEventEmitter
from dispatch_cli.core.services.event_emitter import CliEvent

logger = logging.getLogger(__name__)


class CommandRegistry(ICommandRegistry):
    """Registry for commands, keyed by lower-cased name."""

    def __init__(self, event_emitter: IEventEmitter | None = None) -> None:
        """Initialize the command registry.

        Args:
            event_emitter: Optional emitter notified on every registration
        """
        self._commands: dict[str, BaseCommand] = {}
        self._event_emitter = event_emitter

    def register(self, command: BaseCommand) -> None:
        """Register a command.

        A later registration under the same (case-folded) name replaces the
        earlier one.

        Args:
            command: The command to register
        """
        key = command.name.lower()
        if key in self._commands:
            logger.debug(f"Replacing registered command: {key}")
        self._commands[key] = command
        logger.debug(f"Registered command: {key}")
        if self._event_emitter is not None:
            self._event_emitter.emit(
                CliEvent.COMMAND_REGISTERED, {"command_name": key}
            )

    def unregister(self, name: str) -> None:
        """Remove a command; unknown names are ignored."""
        self._commands.pop(name.lower(), None)

    def get(self, name: str) -> BaseCommand | None:
        """Get a command by name.

        Args:
            name: The name of the command

        Returns:
            The command or None if not found
        """
        return self._commands.get(name.lower())

    def get_all(self) -> list[BaseCommand]:
        """Snapshot of all registered commands in insertion order."""
        return list(self._commands.values())

    def exists(self, name: str) -> bool:
        return name.lower() in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)
