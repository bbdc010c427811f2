from abc import ABC, abstractmethod

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult


class IErrorHandler(ABC):
    @abstractmethod
    def handle(
        self, error: BaseException, context: CommandContext | None = None
    ) -> CommandResult:
        pass

    @abstractmethod
    def format(self, error: BaseException) -> str:
        pass
