from __future__ import annotations

import os
import platform
import time
from collections.abc import Callable

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry


class StatusCommand(BaseCommand):
    """Reports engine status and the commands currently registered."""

    def __init__(
        self,
        command_registry: ICommandRegistry,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._command_registry = command_registry
        self._clock = clock
        self._started_at = clock()

    @property
    def name(self) -> str:
        return "status"

    @property
    def description(self) -> str:
        return "Display CLI status and loaded modules"

    @property
    def usage(self) -> str:
        return "status"

    async def execute(self, context: CommandContext) -> CommandResult:
        commands = self._command_registry.get_all()
        return CommandResult.ok(
            data={
                "status": "running",
                "loaded_commands": len(commands),
                "commands": [cmd.name for cmd in commands],
                "uptime_seconds": round(self._clock() - self._started_at, 3),
                "python_version": platform.python_version(),
                "pid": os.getpid(),
            },
            message="CLI is operational",
        )
