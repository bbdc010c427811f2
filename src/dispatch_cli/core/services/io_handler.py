from __future__ import annotations

import asyncio
import sys
from collections import deque
from typing import TextIO

from dispatch_cli.core.interfaces.io_handler_interface import IIOHandler


class ConsoleIOHandler(IIOHandler):
    """Reads from stdin and writes to stdout/stderr."""

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    async def read_input(self, prompt: str = "> ") -> str:
        """Prompt for one line without blocking the event loop.

        Raises:
            EOFError: when stdin is exhausted
        """
        return await asyncio.to_thread(input, prompt)

    def write_output(self, text: str) -> None:
        print(text, file=self._stdout)

    def write_error(self, text: str) -> None:
        print(text, file=self._stderr)


class BufferedIOHandler(IIOHandler):
    """In-memory handler for embedding applications and tests."""

    def __init__(self, inputs: list[str] | None = None) -> None:
        self._inputs: deque[str] = deque(inputs or [])
        self.outputs: list[str] = []
        self.errors: list[str] = []

    def enqueue_input(self, text: str) -> None:
        self._inputs.append(text)

    async def read_input(self, prompt: str = "> ") -> str:
        if not self._inputs:
            raise EOFError("No buffered input left")
        return self._inputs.popleft()

    def write_output(self, text: str) -> None:
        self.outputs.append(text)

    def write_error(self, text: str) -> None:
        self.errors.append(text)
