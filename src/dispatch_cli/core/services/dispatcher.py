"""
Command dispatcher.

Orchestrates one invocation: parse -> resolve -> validate -> execute ->
emit, with every stage wrapped in uniform error handling. Each call makes a
single attempt; nothing is retried here.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import Any

from dispatch_cli.core.common.exceptions import (
    CommandExecutionError,
    CommandNotFoundError,
)
from dispatch_cli.core.domain.command_context import CommandContext, OutputFormat
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry
from dispatch_cli.core.interfaces.dispatcher_interface import IDispatcher
from dispatch_cli.core.interfaces.error_handler_interface import IErrorHandler
from dispatch_cli.core.interfaces.event_emitter_interface import IEventEmitter
from dispatch_cli.core.interfaces.input_parser_interface import IInputParser
from dispatch_cli.core.interfaces.output_formatter_interface import IOutputFormatter
from dispatch_cli.core.services.event_emitter import CliEvent

VALIDATION_FAILED = "Validation failed"


class Dispatcher(IDispatcher):
    """Resolves, validates, executes and reports on command invocations."""

    def __init__(
        self,
        command_registry: ICommandRegistry,
        logger: Any,
        error_handler: IErrorHandler,
        event_emitter: IEventEmitter,
        input_parser: IInputParser,
        output_formatter: IOutputFormatter,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            command_registry: Registry commands are resolved from
            logger: Structured logger (``info/warning/error/debug`` with fields)
            error_handler: Converts exceptions into failure results
            event_emitter: Receives ``command:executed``/``command:failed``
            input_parser: Turns raw tokens into a CommandContext
            output_formatter: Renders results for ``run``
            clock: Monotonic clock in seconds used for execution timing
        """
        self._registry = command_registry
        self._logger = logger
        self._error_handler = error_handler
        self._event_emitter = event_emitter
        self._input_parser = input_parser
        self._output_formatter = output_formatter
        self._clock = clock

    async def execute(self, tokens: Sequence[str]) -> CommandResult:
        """Parse raw tokens and dispatch the command they name."""
        result, _ = await self._execute_tokens(tokens)
        return result

    async def run(self, tokens: Sequence[str]) -> tuple[CommandResult, str]:
        """Execute raw tokens and render the result in the requested format."""
        result, output_format = await self._execute_tokens(tokens)
        return result, self._output_formatter.format(result, output_format)

    async def execute_command(
        self, command_name: str, context: CommandContext
    ) -> CommandResult:
        """
        Execute a registered command against an already parsed context.

        Never raises: unknown commands, validation failures and exceptions
        from the command all come back as failure results.
        """
        start = self._clock()

        try:
            command = self._registry.get(command_name)
            if command is None:
                raise CommandNotFoundError(command_name)

            validation = command.validate(context)
            if not validation.valid:
                self._logger.debug(
                    "Command validation failed",
                    command=command_name,
                    errors=list(validation.errors),
                )
                return CommandResult.failure(
                    VALIDATION_FAILED,
                    message="; ".join(validation.errors) or None,
                ).with_execution_time(self._elapsed_ms(start))

            self._logger.debug(
                "Executing command",
                command=command_name,
                arguments=context.arguments,
                options=context.options,
            )

            result = await command.execute(context)
            if not isinstance(result, CommandResult):
                raise CommandExecutionError(
                    f"Command '{command_name}' returned "
                    f"{type(result).__name__} instead of a CommandResult",
                    command_name=command_name,
                )

            # The command's self-reported timing is discarded
            result = result.with_execution_time(self._elapsed_ms(start))

            self._logger.info(
                "Command executed",
                command=command_name,
                success=result.success,
                execution_time_ms=result.execution_time_ms,
            )
            self._event_emitter.emit(
                CliEvent.COMMAND_EXECUTED,
                {"command_name": command_name, "result": result},
            )
            return result
        except Exception as exc:
            result = self._error_handler.handle(exc, context).with_execution_time(
                self._elapsed_ms(start)
            )
            self._logger.error(
                "Command execution failed",
                command=command_name,
                error=str(exc),
                exc_info=True,
            )
            self._event_emitter.emit(
                CliEvent.COMMAND_FAILED,
                {"command_name": command_name, "error": exc},
            )
            return result

    async def _execute_tokens(
        self, tokens: Sequence[str]
    ) -> tuple[CommandResult, OutputFormat]:
        start = self._clock()
        output_format = OutputFormat.TEXT

        try:
            context = self._input_parser.parse_arguments(tokens)
            output_format = context.output_format

            if not context.arguments:
                raise CommandNotFoundError()

            # The remaining positionals belong to the command
            command_name = context.arguments.pop(0)
            return await self.execute_command(command_name, context), output_format
        except Exception as exc:
            result = self._error_handler.handle(exc).with_execution_time(
                self._elapsed_ms(start)
            )
            self._logger.error("CLI execution failed", error=str(exc), exc_info=True)
            self._event_emitter.emit(CliEvent.COMMAND_FAILED, {"error": exc})
            return result, output_format

    def _elapsed_ms(self, start: float) -> int:
        return int(round((self._clock() - start) * 1000))
