"""
Command Results Domain Model

This module defines the outcome types produced by command validation and
execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CommandResult:
    """
    Result of a command execution.

    ``success`` is the single source of truth for the outcome. ``error`` is
    only meaningful on failure; ``message`` may accompany either outcome.
    """

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)
    execution_time_ms: int = 0

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> CommandResult:
        return cls(success=True, data=data, message=message)

    @classmethod
    def failure(
        cls, error: str, message: str | None = None, data: Any = None
    ) -> CommandResult:
        return cls(success=False, data=data, error=error, message=message)

    def with_execution_time(self, execution_time_ms: int) -> CommandResult:
        """Return a copy carrying the given execution time."""
        return replace(self, execution_time_ms=execution_time_ms)


@dataclass(frozen=True)
class ValidationOutcome:
    """Outcome of a command's validation step."""

    valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def invalid(cls, *errors: str) -> ValidationOutcome:
        return cls(valid=False, errors=tuple(errors))
