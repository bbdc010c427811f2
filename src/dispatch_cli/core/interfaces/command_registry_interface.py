from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dispatch_cli.core.domain.commands.base_command import BaseCommand


class ICommandRegistry(ABC):
    @abstractmethod
    def register(self, command: BaseCommand) -> None:
        pass

    @abstractmethod
    def unregister(self, name: str) -> None:
        pass

    @abstractmethod
    def get(self, name: str) -> BaseCommand | None:
        pass

    @abstractmethod
    def get_all(self) -> list[BaseCommand]:
        pass

    @abstractmethod
    def exists(self, name: str) -> bool:
        pass
