from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

EventCallback = Callable[[Any], None]


class IEventEmitter(ABC):
    @abstractmethod
    def emit(self, event: str, data: Any = None) -> None:
        pass

    @abstractmethod
    def on(self, event: str, callback: EventCallback) -> None:
        pass

    @abstractmethod
    def off(self, event: str, callback: EventCallback) -> None:
        pass
