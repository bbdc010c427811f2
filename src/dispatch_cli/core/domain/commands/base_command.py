"""
Base command implementation.

This module provides the base class for all commands registered with the
dispatcher.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult, ValidationOutcome

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all commands.

    A command is constructed once (at bootstrap or by a plugin) and is
    immutable afterwards. Subclasses provide ``name``, ``description``,
    ``usage`` and ``execute``; ``validate`` is optional and accepts every
    context by default.

    ``usage`` follows ``<name> [flags] <positional-placeholders>``. Only the
    ``<word>`` placeholders are machine-read, by the agent adapter.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Command description."""

    @property
    @abstractmethod
    def usage(self) -> str:
        """Command usage pattern."""

    @property
    def examples(self) -> list[str]:
        """Command examples (optional)."""
        return []

    def validate(self, context: CommandContext) -> ValidationOutcome:
        """
        Validate the invocation before execution.

        Args:
            context: The parsed invocation context

        Returns:
            The validation outcome
        """
        return ValidationOutcome.ok()

    @abstractmethod
    async def execute(self, context: CommandContext) -> CommandResult:
        """
        Execute the command.

        Args:
            context: The parsed invocation context

        Returns:
            The command result
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
