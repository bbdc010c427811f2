from abc import ABC, abstractmethod
from collections.abc import Sequence

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult


class IDispatcher(ABC):
    @abstractmethod
    async def execute(self, tokens: Sequence[str]) -> CommandResult:
        pass

    @abstractmethod
    async def execute_command(
        self, command_name: str, context: CommandContext
    ) -> CommandResult:
        pass
