import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import structlog
from dispatch_cli import cli
from dispatch_cli.core.app.bootstrap import bootstrap
from dispatch_cli.core.config.app_config import AppConfig, PluginsConfig
from dispatch_cli.core.services.io_handler import BufferedIOHandler, ConsoleIOHandler

from tests.command_doubles import RecordingPlugin


@pytest.fixture
def calculator_config() -> AppConfig:
    return AppConfig(
        plugins=PluginsConfig(enabled=["calculator"], discover_entry_points=False)
    )


@pytest.mark.asyncio
async def test_main_success_goes_to_stdout(calculator_config: AppConfig) -> None:
    # Arrange
    io_handler = BufferedIOHandler()

    # Act
    code = await cli.main(["add", "5", "3"], config=calculator_config, io_handler=io_handler)

    # Assert
    assert code == 0
    assert io_handler.errors == []
    assert io_handler.outputs[0].startswith("✅ Success: 5 + 3 = 8")


@pytest.mark.asyncio
async def test_main_failure_goes_to_stderr(calculator_config: AppConfig) -> None:
    io_handler = BufferedIOHandler()

    code = await cli.main(["add", "5"], config=calculator_config, io_handler=io_handler)

    assert code == 1
    assert io_handler.outputs == []
    assert io_handler.errors == [
        "❌ Error: Validation failed\nMessage: Two numbers required"
    ]


@pytest.mark.asyncio
async def test_main_without_arguments_runs_help(calculator_config: AppConfig) -> None:
    io_handler = BufferedIOHandler()

    code = await cli.main([], config=calculator_config, io_handler=io_handler)

    assert code == 0
    assert "Found 7 available commands" in io_handler.outputs[0]


@pytest.mark.asyncio
async def test_main_json_output(calculator_config: AppConfig) -> None:
    io_handler = BufferedIOHandler()

    await cli.main(
        ["multiply", "2", "4", "--output=json"],
        config=calculator_config,
        io_handler=io_handler,
    )

    document = json.loads(io_handler.outputs[0])
    assert document["data"] == {"num1": 2.0, "num2": 4.0, "result": 8.0}


@pytest.mark.asyncio
async def test_main_reports_bootstrap_failure() -> None:
    # Arrange
    io_handler = BufferedIOHandler()
    config = AppConfig(plugins=PluginsConfig(enabled=["nope"], discover_entry_points=False))

    # Act
    code = await cli.main(["help"], config=config, io_handler=io_handler)

    # Assert
    assert code == 1
    assert io_handler.errors[0].startswith("Configuration Error: Unknown plugin: nope")


@pytest.mark.asyncio
async def test_main_reports_bad_config_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    # Arrange
    bad = tmp_path / "config.ini"
    bad.write_text("[x]\n", encoding="utf-8")
    monkeypatch.setenv(cli.CONFIG_PATH_ENV, str(bad))
    io_handler = BufferedIOHandler()

    # Act
    code = await cli.main(["help"], io_handler=io_handler)

    # Assert
    assert code == 1
    assert "Unsupported configuration file format" in io_handler.errors[0]


@pytest.mark.asyncio
async def test_main_reports_invalid_environment_value(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # Arrange
    monkeypatch.delenv(cli.CONFIG_PATH_ENV, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "loud")
    io_handler = BufferedIOHandler()

    # Act
    code = await cli.main(["echo", "hi"], io_handler=io_handler)

    # Assert
    assert code == 1
    assert io_handler.outputs == []
    assert io_handler.errors[0].startswith(
        "Configuration Error: Invalid configuration"
    )


@pytest.mark.asyncio
async def test_main_reports_plugin_startup_crash_and_unloads_loaded_plugins() -> None:
    # Arrange
    calls: list[str] = []
    first = RecordingPlugin(calls=calls, label="first")
    failing = RecordingPlugin(
        calls=calls, label="boom", init_error=RuntimeError("api down")
    )
    config = AppConfig(
        plugins=PluginsConfig(enabled=["first", "boom"], discover_entry_points=False)
    )
    io_handler = BufferedIOHandler()

    # Act
    with patch.dict(
        "dispatch_cli.plugins.BUILTIN_PLUGINS",
        {"first": lambda: first, "boom": lambda: failing},
    ):
        code = await cli.main(["echo", "hi"], config=config, io_handler=io_handler)

    # Assert
    assert code == 1
    assert io_handler.outputs == []
    assert io_handler.errors == ["Error: api down"]
    assert calls == ["first:initialize", "boom:initialize", "first:shutdown"]


@pytest.fixture
def unconfigured_structlog() -> Iterator[None]:
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.mark.asyncio
@pytest.mark.usefixtures("unconfigured_structlog")
async def test_main_json_output_on_console_is_parseable(
    calculator_config: AppConfig, capsys: pytest.CaptureFixture[str]
) -> None:
    # Act
    code = await cli.main(
        ["echo", "hi", "--output=json"],
        config=calculator_config,
        io_handler=ConsoleIOHandler(),
    )

    # Assert
    captured = capsys.readouterr()
    assert code == 0
    document = json.loads(captured.out)
    assert document["success"] is True
    assert document["data"] == {"message": "hi"}


@pytest.mark.asyncio
async def test_shell_dispatches_until_quit(
    calculator_config: AppConfig, mock_logger: Mock
) -> None:
    # Arrange
    app = await bootstrap(calculator_config, logger=mock_logger)
    io_handler = BufferedIOHandler(
        ["echo 'hello world'", "   ", "bogus", "QUIT", "echo never"]
    )

    # Act
    code = await cli.shell(app, io_handler)

    # Assert
    assert code == 0
    assert io_handler.outputs[0].startswith("dispatch-cli v1.0.0")
    assert io_handler.outputs[1].startswith("✅ Success: Echo successful")
    assert '"message": "hello world"' in io_handler.outputs[1]
    assert len(io_handler.outputs) == 2
    assert io_handler.errors == ["❌ Error: Command not found: 'bogus'"]


@pytest.mark.asyncio
async def test_shell_stops_at_end_of_input(
    calculator_config: AppConfig, mock_logger: Mock
) -> None:
    app = await bootstrap(calculator_config, logger=mock_logger)
    io_handler = BufferedIOHandler(["add 1 2"])

    code = await cli.shell(app, io_handler)

    assert code == 0
    assert "1 + 2 = 3" in io_handler.outputs[1]


@pytest.mark.asyncio
async def test_shell_reports_unbalanced_quotes(
    calculator_config: AppConfig, mock_logger: Mock
) -> None:
    app = await bootstrap(calculator_config, logger=mock_logger)
    io_handler = BufferedIOHandler(['echo "unterminated'])

    await cli.shell(app, io_handler)

    assert io_handler.errors[0].startswith("❌ Error:")


def test_shell_parser_options() -> None:
    args = cli.build_shell_parser().parse_args(
        ["--config", "c.yaml", "--env-file", "x.env", "--log-level", "DEBUG"]
    )

    assert args.config_file == "c.yaml"
    assert args.env_file == "x.env"
    assert args.log_level == "DEBUG"
