from abc import ABC, abstractmethod


class IIOHandler(ABC):
    @abstractmethod
    async def read_input(self, prompt: str = "> ") -> str:
        pass

    @abstractmethod
    def write_output(self, text: str) -> None:
        pass

    @abstractmethod
    def write_error(self, text: str) -> None:
        pass
