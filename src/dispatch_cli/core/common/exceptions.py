"""
Common exception classes for the dispatch CLI.

This module defines custom exception classes used throughout the engine
for better error handling and categorization.
"""

from __future__ import annotations

from typing import Any


class DispatchError(Exception):
    """Base exception class for all dispatch CLI errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs: Any,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        # Attach any extra attributes provided by callers
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        # Include any additional attributes that were set via kwargs
        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class CommandNotFoundError(DispatchError):
    """Raised when no command matches the requested name."""

    def __init__(
        self,
        command_name: str | None = None,
        details: dict | None = None,
        **kwargs: Any,
    ):
        message = (
            f"Command not found: '{command_name}'"
            if command_name
            else "No command specified"
        )
        super().__init__(message, details, **kwargs)
        self.command_name = command_name


class ValidationError(DispatchError):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[str] | tuple[str, ...] | None = None,
        details: dict | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, **kwargs)
        self.errors: list[str] = list(errors or [])


class ConfigurationError(DispatchError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        cause: str | None = None,
        details: dict | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, **kwargs)
        self.cause = cause


class CommandExecutionError(DispatchError):
    """Raised when a command does not produce a usable result."""

    def __init__(
        self,
        message: str = "Command execution failed",
        command_name: str | None = None,
        details: dict | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, **kwargs)
        self.command_name = command_name


class ToolInvocationError(DispatchError):
    """Raised when an agent tool cannot be built or invoked."""

    def __init__(
        self,
        message: str = "Tool invocation failed",
        tool_name: str | None = None,
        details: dict | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, **kwargs)
        self.tool_name = tool_name
