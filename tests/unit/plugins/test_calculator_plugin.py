import pytest
from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.services.dispatcher import Dispatcher
from dispatch_cli.plugins.calculator import (
    AddCommand,
    CalculatorPlugin,
    MultiplyCommand,
    SubtractCommand,
)


@pytest.mark.asyncio
async def test_plugin_registers_arithmetic_commands(
    app_context: ApplicationContext,
) -> None:
    await CalculatorPlugin().initialize(app_context)

    names = [command.name for command in app_context.registry.get_all()]
    assert names == ["add", "subtract", "multiply"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "command, args, expected, message",
    [
        (AddCommand(), ["5", "3"], 8.0, "5 + 3 = 8"),
        (SubtractCommand(), ["5", "7.5"], -2.5, "5 - 7.5 = -2.5"),
        (MultiplyCommand(), ["-2", "4"], -8.0, "-2 × 4 = -8"),
    ],
)
async def test_arithmetic(command, args, expected, message) -> None:
    result = await command.execute(CommandContext(arguments=args))

    assert result.success is True
    assert result.data["result"] == expected
    assert result.message == message


def test_two_numbers_are_required() -> None:
    outcome = AddCommand().validate(CommandContext(arguments=["1"]))

    assert outcome.valid is False
    assert outcome.errors == ("Two numbers required",)


@pytest.mark.asyncio
async def test_non_numeric_input_fails() -> None:
    result = await AddCommand().execute(CommandContext(arguments=["five", "3"]))

    assert result.success is False
    assert result.error == "Invalid numbers provided"


@pytest.mark.asyncio
async def test_dispatch_through_engine(
    dispatcher: Dispatcher, app_context: ApplicationContext
) -> None:
    # Arrange
    await CalculatorPlugin().initialize(app_context)

    # Act
    result = await dispatcher.execute(["add", "2", "40"])

    # Assert
    assert result.success is True
    assert result.data == {"num1": 2.0, "num2": 40.0, "result": 42.0}


def test_usage_lists_operands() -> None:
    assert SubtractCommand().usage == "subtract <num1> <num2>"
