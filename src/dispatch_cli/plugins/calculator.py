"""Calculator plugin: arithmetic on two numeric positionals."""

from __future__ import annotations

from abc import abstractmethod

from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.command_results import CommandResult, ValidationOutcome
from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.domain.plugins import BasePlugin


def format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


class BinaryOperationCommand(BaseCommand):
    """Shared validation and parsing for two-operand commands."""

    symbol: str = "?"

    @property
    def usage(self) -> str:
        return f"{self.name} <num1> <num2>"

    def validate(self, context: CommandContext) -> ValidationOutcome:
        if len(context.arguments) < 2:
            return ValidationOutcome.invalid("Two numbers required")
        return ValidationOutcome.ok()

    @abstractmethod
    def apply(self, num1: float, num2: float) -> float:
        pass

    async def execute(self, context: CommandContext) -> CommandResult:
        try:
            num1 = float(context.arguments[0])
            num2 = float(context.arguments[1])
        except ValueError:
            return CommandResult.failure("Invalid numbers provided")

        result = self.apply(num1, num2)
        return CommandResult.ok(
            data={"num1": num1, "num2": num2, "result": result},
            message=(
                f"{format_number(num1)} {self.symbol} {format_number(num2)}"
                f" = {format_number(result)}"
            ),
        )


class AddCommand(BinaryOperationCommand):
    symbol = "+"

    @property
    def name(self) -> str:
        return "add"

    @property
    def description(self) -> str:
        return "Add two numbers"

    def apply(self, num1: float, num2: float) -> float:
        return num1 + num2


class SubtractCommand(BinaryOperationCommand):
    symbol = "-"

    @property
    def name(self) -> str:
        return "subtract"

    @property
    def description(self) -> str:
        return "Subtract two numbers"

    def apply(self, num1: float, num2: float) -> float:
        return num1 - num2


class MultiplyCommand(BinaryOperationCommand):
    symbol = "×"

    @property
    def name(self) -> str:
        return "multiply"

    @property
    def description(self) -> str:
        return "Multiply two numbers"

    def apply(self, num1: float, num2: float) -> float:
        return num1 * num2


class CalculatorPlugin(BasePlugin):
    """Registers the arithmetic commands."""

    async def initialize(self, context: ApplicationContext) -> None:
        context.logger.info("Initializing calculator plugin")
        for command in (AddCommand(), SubtractCommand(), MultiplyCommand()):
            context.registry.register(command)
        context.logger.info("Calculator plugin initialized")
