"""
Toolbox plugin: text transformation and a retrying example command.

``retryable`` shows how a command that talks to an unreliable collaborator
can retry on its own. The dispatcher never retries; the bounded loop with a
fixed delay lives entirely inside the command.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from collections.abc import Awaitable, Callable
from typing import Any

from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.common.exceptions import ConfigurationError
from dispatch_cli.core.domain.command_context import CommandContext, OptionValue
from dispatch_cli.core.domain.command_results import CommandResult, ValidationOutcome
from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.domain.plugins import BasePlugin

logger = logging.getLogger(__name__)

STRATEGIES: dict[str, Callable[[str], str]] = {
    "uppercase": str.upper,
    "lowercase": str.lower,
    "reverse": lambda text: text[::-1],
}

DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000
RETRY_DELAY_SETTING = "TOOLBOX_RETRY_DELAY_MS"


def _first_option(context: CommandContext, *keys: str) -> OptionValue | None:
    for key in keys:
        value = context.options.get(key)
        if value is not None and value != "":
            return value
    return None


def _is_number(value: Any) -> bool:
    """True for finite numeric values; bare flags (booleans) do not count."""
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


class TransformCommand(BaseCommand):
    """Transforms input text using a named strategy."""

    @property
    def name(self) -> str:
        return "transform"

    @property
    def description(self) -> str:
        return "Transform data using various strategies"

    @property
    def usage(self) -> str:
        return "transform [--strategy=uppercase|lowercase|reverse] [--input=text]"

    @property
    def examples(self) -> list[str]:
        return ["transform --strategy=reverse --input=hello"]

    def validate(self, context: CommandContext) -> ValidationOutcome:
        errors: list[str] = []

        strategy = _first_option(context, "strategy", "s")
        if str(strategy) not in STRATEGIES:
            errors.append("Strategy must be: uppercase, lowercase, or reverse")

        if _first_option(context, "input", "i") is None:
            errors.append("Input text is required (--input or -i)")

        return ValidationOutcome(valid=not errors, errors=tuple(errors))

    async def execute(self, context: CommandContext) -> CommandResult:
        strategy = str(_first_option(context, "strategy", "s"))
        text = str(_first_option(context, "input", "i"))

        transformed = STRATEGIES[strategy](text)
        return CommandResult.ok(
            data={
                "original_input": text,
                "strategy": strategy,
                "result": transformed,
                "length_original": len(text),
                "length_result": len(transformed),
            },
            message=f"Data transformed using {strategy} strategy",
        )


async def _simulated_operation(attempt: int) -> Any:
    if random.random() > 0.7:
        raise RuntimeError("Random failure (simulated)")
    return {"attempt": attempt}


class RetryableCommand(BaseCommand):
    """Runs an operation up to ``--retries`` times with a fixed delay."""

    def __init__(
        self,
        operation: Callable[[int], Awaitable[Any]] = _simulated_operation,
        default_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._operation = operation
        self._default_delay_ms = default_delay_ms
        self._sleep = sleep

    @property
    def name(self) -> str:
        return "retryable"

    @property
    def description(self) -> str:
        return "Command that retries on failure (example)"

    @property
    def usage(self) -> str:
        return "retryable [--retries=n] [--delay=ms]"

    def validate(self, context: CommandContext) -> ValidationOutcome:
        errors: list[str] = []
        retries = context.options.get("retries")
        if retries is not None:
            if not _is_number(retries):
                errors.append("Retries must be a number")
            elif not float(retries).is_integer():
                errors.append("Retries must be a whole number")
            elif float(retries) < 1:
                errors.append("Retries must be at least 1")

        delay = context.options.get("delay")
        if delay is not None:
            if not _is_number(delay):
                errors.append("Delay must be a number")
            elif float(delay) < 0:
                errors.append("Delay must not be negative")

        return ValidationOutcome(valid=not errors, errors=tuple(errors))

    async def execute(self, context: CommandContext) -> CommandResult:
        max_retries = int(float(context.options.get("retries", DEFAULT_RETRIES)))
        delay_ms = float(context.options.get("delay", self._default_delay_ms))

        attempt = 0
        last_error: Exception | None = None
        while attempt < max_retries:
            attempt += 1
            try:
                value = await self._operation(attempt)
            except Exception as exc:
                last_error = exc
                if attempt < max_retries:
                    logger.info(
                        f"Attempt {attempt} failed, retrying in {delay_ms:g}ms: {exc}"
                    )
                    await self._sleep(delay_ms / 1000)
                continue

            return CommandResult.ok(
                data={"attempt": attempt, "max_retries": max_retries, "value": value},
                message=f"Success on attempt {attempt}",
            )

        return CommandResult.failure(
            f"Failed after {max_retries} attempts: {last_error}",
            data={"attempt": attempt, "max_retries": max_retries},
        )


class ToolboxPlugin(BasePlugin):
    """Registers ``transform`` and ``retryable``."""

    async def initialize(self, context: ApplicationContext) -> None:
        raw_delay = context.config.get(RETRY_DELAY_SETTING, str(DEFAULT_RETRY_DELAY_MS))
        if not _is_number(raw_delay) or float(raw_delay) < 0:
            raise ConfigurationError(
                f"Invalid {RETRY_DELAY_SETTING} setting",
                cause=f"Expected a non-negative number of milliseconds, got {raw_delay!r}",
            )

        context.registry.register(TransformCommand())
        context.registry.register(
            RetryableCommand(default_delay_ms=int(float(raw_delay)))
        )
        context.logger.info("Toolbox plugin initialized")
