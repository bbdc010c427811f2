import os

import pytest
from dispatch_cli.core.domain.command_context import CommandContext
from dispatch_cli.core.domain.commands import (
    EchoCommand,
    HelpCommand,
    StatusCommand,
    VersionCommand,
)
from dispatch_cli.core.services.command_registry import CommandRegistry

from tests.command_doubles import StubCommand
from tests.conftest import FakeClock


@pytest.fixture
def registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(HelpCommand(registry))
    registry.register(EchoCommand())
    return registry


@pytest.fixture
def help_command(registry: CommandRegistry) -> HelpCommand:
    command = registry.get("help")
    assert isinstance(command, HelpCommand)
    return command


@pytest.mark.asyncio
async def test_help_lists_all_commands(help_command: HelpCommand) -> None:
    # Act
    result = await help_command.execute(CommandContext())

    # Assert
    assert result.success is True
    assert result.message == "Found 2 available commands"
    assert result.data["total_commands"] == 2
    assert result.data["commands"][1] == {
        "name": "echo",
        "description": "Echo back the provided input (useful for testing)",
        "usage": "echo <message>",
    }


@pytest.mark.asyncio
async def test_help_for_specific_command_includes_examples(
    help_command: HelpCommand,
) -> None:
    result = await help_command.execute(CommandContext(arguments=["ECHO"]))

    assert result.success is True
    assert result.data["name"] == "echo"
    assert result.data["examples"] == "echo hello world"


@pytest.mark.asyncio
async def test_help_omits_examples_when_command_has_none(
    help_command: HelpCommand, registry: CommandRegistry
) -> None:
    registry.register(StubCommand("plain", usage="plain <x>"))

    result = await help_command.execute(CommandContext(arguments=["plain"]))

    assert result.data == {
        "name": "plain",
        "description": "Stub command",
        "usage": "plain <x>",
    }


@pytest.mark.asyncio
async def test_help_for_unknown_command(help_command: HelpCommand) -> None:
    result = await help_command.execute(CommandContext(arguments=["nope"]))

    assert result.success is False
    assert result.error == "Command not found: nope"


@pytest.mark.asyncio
async def test_version_command() -> None:
    command = VersionCommand("3.1.4", app_name="acme")

    result = await command.execute(CommandContext())

    assert result.data == {"version": "3.1.4"}
    assert result.message == "acme v3.1.4"


@pytest.mark.asyncio
async def test_status_reports_commands_and_uptime(registry: CommandRegistry) -> None:
    # Arrange
    command = StatusCommand(registry, clock=FakeClock(100.0, 102.5))

    # Act
    result = await command.execute(CommandContext())

    # Assert
    assert result.success is True
    assert result.data["status"] == "running"
    assert result.data["loaded_commands"] == 2
    assert result.data["commands"] == ["help", "echo"]
    assert result.data["uptime_seconds"] == 2.5
    assert result.data["pid"] == os.getpid()


def test_echo_requires_a_message() -> None:
    outcome = EchoCommand().validate(CommandContext())

    assert outcome.valid is False
    assert outcome.errors == ("Message is required",)


@pytest.mark.asyncio
async def test_echo_joins_arguments() -> None:
    result = await EchoCommand().execute(CommandContext(arguments=["a", "b", "c"]))

    assert result.data == {"message": "a b c"}
    assert result.message == "Echo successful"


def test_command_repr() -> None:
    assert repr(EchoCommand()) == "<EchoCommand name='echo'>"
