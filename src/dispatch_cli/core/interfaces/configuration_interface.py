from abc import ABC, abstractmethod
from typing import Any


class IConfig(ABC):
    """Key/value configuration store consumed by plugins."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass
