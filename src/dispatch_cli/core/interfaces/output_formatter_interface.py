from abc import ABC, abstractmethod

from dispatch_cli.core.domain.command_context import OutputFormat
from dispatch_cli.core.domain.command_results import CommandResult


class IOutputFormatter(ABC):
    @abstractmethod
    def format(self, result: CommandResult, output_format: OutputFormat | str) -> str:
        pass
