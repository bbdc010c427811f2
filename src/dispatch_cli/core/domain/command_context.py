from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

OptionValue = str | bool | list[str]


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


@dataclass(slots=True)
class CommandContext:
    """Parsed representation of one invocation.

    The dispatcher mutates ``arguments`` in place when it peels off the
    leading command-name token.
    """

    arguments: list[str] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)
    output_format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
