from __future__ import annotations

import logging

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry

logger = logging.getLogger(__name__)


def describe_command(command: BaseCommand) -> dict[str, str]:
    return {
        "name": command.name,
        "description": command.description,
        "usage": command.usage,
    }


class HelpCommand(BaseCommand):
    """Command to display help information about available commands."""

    def __init__(self, command_registry: ICommandRegistry) -> None:
        self._command_registry = command_registry

    @property
    def name(self) -> str:
        return "help"

    @property
    def description(self) -> str:
        return "Display help information for available commands"

    @property
    def usage(self) -> str:
        return "help [command-name]"

    @property
    def examples(self) -> list[str]:
        return ["help", "help echo"]

    async def execute(self, context: CommandContext) -> CommandResult:
        """
        Execute the help command.

        Args:
            context: Invocation context; the first positional, if any, names
                the command to describe.

        Returns:
            The command result.
        """
        # Case 1: Help for a specific command, e.g. `help echo`
        if context.arguments:
            cmd_name = context.arguments[0]
            command = self._command_registry.get(cmd_name)
            if command is None:
                return CommandResult.failure(f"Command not found: {cmd_name}")

            details = describe_command(command)
            if command.examples:
                details["examples"] = ", ".join(command.examples)
            return CommandResult.ok(data=details)

        # Case 2: List all available commands
        commands = [describe_command(cmd) for cmd in self._command_registry.get_all()]
        logger.debug(f"Listing {len(commands)} commands")
        return CommandResult.ok(
            data={"total_commands": len(commands), "commands": commands},
            message=f"Found {len(commands)} available commands",
        )
