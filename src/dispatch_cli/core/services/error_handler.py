from __future__ import annotations

from dispatch_cli.core.common.exceptions import (
    CommandNotFoundError,
    ConfigurationError,
    ValidationError,
)
from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.interfaces.error_handler_interface import IErrorHandler


class ErrorHandler(IErrorHandler):
    """Converts exceptions into failure results and user-facing hints."""

    def handle(
        self, error: BaseException, context: CommandContext | None = None
    ) -> CommandResult:
        message = str(error) or error.__class__.__name__
        if isinstance(error, ValidationError) and error.errors:
            return CommandResult.failure(message, message="; ".join(error.errors))
        return CommandResult.failure(message)

    def format(self, error: BaseException) -> str:
        if isinstance(error, ValidationError):
            details = "\n  - ".join(error.errors)
            return f"Validation Error: {error.message}\nDetails: {details}"

        if isinstance(error, CommandNotFoundError):
            return (
                f"Command Error: {error.message}\n"
                "Run 'help' to see available commands."
            )

        if isinstance(error, ConfigurationError):
            return f"Configuration Error: {error.message}\nDetails: {error.cause}"

        return f"Error: {error}"
