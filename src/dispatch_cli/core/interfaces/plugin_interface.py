from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dispatch_cli.core.app.application_context import ApplicationContext


class IPlugin(ABC):
    @abstractmethod
    async def initialize(self, context: ApplicationContext) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass
