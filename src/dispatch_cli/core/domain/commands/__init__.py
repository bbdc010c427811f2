"""Built-in commands and the command base class."""

from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.domain.commands.echo_command import EchoCommand
from dispatch_cli.core.domain.commands.help_command import HelpCommand
from dispatch_cli.core.domain.commands.status_command import StatusCommand
from dispatch_cli.core.domain.commands.version_command import VersionCommand

__all__ = [
    "BaseCommand",
    "EchoCommand",
    "HelpCommand",
    "StatusCommand",
    "VersionCommand",
]
