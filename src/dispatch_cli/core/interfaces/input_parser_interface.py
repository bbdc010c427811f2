from abc import ABC, abstractmethod
from collections.abc import Sequence

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import ValidationOutcome


class IInputParser(ABC):
    @abstractmethod
    def validate(self, text: str) -> ValidationOutcome:
        pass

    @abstractmethod
    def parse_arguments(self, tokens: Sequence[str]) -> CommandContext:
        pass
