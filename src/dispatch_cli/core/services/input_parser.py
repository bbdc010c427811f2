"""
Input parsing for CLI argument tokens.

Turns a flat token sequence into a :class:`CommandContext`:

- ``--key=value`` / ``--flag`` are long options. ``--output``/``--format``
  select the output format and ``--verbose`` sets verbosity; neither is
  stored in ``options``.
- ``-abc`` is a cluster of short flags, each stored as ``True``; ``j``
  additionally selects JSON output and ``v`` sets verbosity.
- everything else is a positional argument.
"""

from __future__ import annotations

from collections.abc import Sequence

from dispatch_cli.core.domain.command_context import CommandContext, OutputFormat
from dispatch_cli.core.domain.command_results import ValidationOutcome
from dispatch_cli.core.interfaces.input_parser_interface import IInputParser

FORMAT_OPTION_KEYS = frozenset({"output", "format"})
VERBOSE_OPTION_KEY = "verbose"
JSON_SHORT_FLAG = "j"
VERBOSE_SHORT_FLAG = "v"


class InputParser(IInputParser):
    """Parser for raw argument tokens."""

    def validate(self, text: str) -> ValidationOutcome:
        if not text or not text.strip():
            return ValidationOutcome.invalid("Input cannot be empty")
        return ValidationOutcome.ok()

    def parse_arguments(self, tokens: Sequence[str]) -> CommandContext:
        context = CommandContext()

        for token in tokens:
            if token.startswith("--"):
                self._apply_long_option(context, token[2:])
            elif token.startswith("-"):
                self._apply_short_flags(context, token[1:])
            else:
                context.arguments.append(token)

        return context

    @staticmethod
    def _apply_long_option(context: CommandContext, body: str) -> None:
        key, sep, raw_value = body.partition("=")
        # "--flag=" keeps the empty string; only a missing "=" means True
        value: str | bool = raw_value if sep else True

        if key in FORMAT_OPTION_KEYS:
            context.output_format = (
                OutputFormat.JSON if value == "json" else OutputFormat.TEXT
            )
        elif key == VERBOSE_OPTION_KEY:
            context.verbose = True
        else:
            context.options[key] = value

    @staticmethod
    def _apply_short_flags(context: CommandContext, flags: str) -> None:
        for flag in flags:
            if flag == JSON_SHORT_FLAG:
                context.output_format = OutputFormat.JSON
            if flag == VERBOSE_SHORT_FLAG:
                context.verbose = True
            context.options[flag] = True
