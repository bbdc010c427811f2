from __future__ import annotations

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult, ValidationOutcome
from dispatch_cli.core.domain.commands.base_command import BaseCommand


class EchoCommand(BaseCommand):
    """Echoes its positional arguments back; handy for smoke tests."""

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo back the provided input (useful for testing)"

    @property
    def usage(self) -> str:
        return "echo <message>"

    @property
    def examples(self) -> list[str]:
        return ["echo hello world"]

    def validate(self, context: CommandContext) -> ValidationOutcome:
        if not context.arguments:
            return ValidationOutcome.invalid("Message is required")
        return ValidationOutcome.ok()

    async def execute(self, context: CommandContext) -> CommandResult:
        message = " ".join(context.arguments)
        return CommandResult.ok(data={"message": message}, message="Echo successful")
