from __future__ import annotations

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.domain.commands.base_command import BaseCommand


class VersionCommand(BaseCommand):
    """Reports the application version."""

    def __init__(self, version: str, app_name: str = "dispatch-cli") -> None:
        self._version = version
        self._app_name = app_name

    @property
    def name(self) -> str:
        return "version"

    @property
    def description(self) -> str:
        return "Display CLI version"

    @property
    def usage(self) -> str:
        return "version"

    async def execute(self, context: CommandContext) -> CommandResult:
        return CommandResult.ok(
            data={"version": self._version},
            message=f"{self._app_name} v{self._version}",
        )
