from dispatch_cli.core.domain.command_context import CommandContext, OutputFormat
from dispatch_cli.core.domain.command_results import CommandResult, ValidationOutcome

__all__ = [
    "CommandContext",
    "CommandResult",
    "OutputFormat",
    "ValidationOutcome",
]
