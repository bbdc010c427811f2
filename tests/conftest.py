from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
from dispatch_cli.core.app.application_context import ApplicationContext
from dispatch_cli.core.config.app_config import AppConfig, PluginsConfig
from dispatch_cli.core.services.command_registry import CommandRegistry
from dispatch_cli.core.services.dispatcher import Dispatcher
from dispatch_cli.core.services.error_handler import ErrorHandler
from dispatch_cli.core.services.event_emitter import EventEmitter
from dispatch_cli.core.services.input_parser import InputParser
from dispatch_cli.core.services.output_formatter import OutputFormatter


class FakeClock:
    """Returns the queued readings in order, then repeats the last one."""

    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)
        self._last = 0.0
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        if self._readings:
            self._last = self._readings.pop(0)
        return self._last


class EventRecorder:
    """Listener that records every payload it receives."""

    def __init__(self) -> None:
        self.payloads: list[Any] = []

    def __call__(self, data: Any) -> None:
        self.payloads.append(data)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_logger() -> Mock:
    return Mock()


@pytest.fixture
def event_emitter() -> EventEmitter:
    return EventEmitter()


@pytest.fixture
def command_registry(event_emitter: EventEmitter) -> CommandRegistry:
    return CommandRegistry(event_emitter)


@pytest.fixture
def dispatcher(
    command_registry: CommandRegistry,
    event_emitter: EventEmitter,
    mock_logger: Mock,
    fake_clock: FakeClock,
) -> Dispatcher:
    return Dispatcher(
        command_registry=command_registry,
        logger=mock_logger,
        error_handler=ErrorHandler(),
        event_emitter=event_emitter,
        input_parser=InputParser(),
        output_formatter=OutputFormatter(),
        clock=fake_clock,
    )


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration with no plugins so tests control what gets registered."""
    return AppConfig(plugins=PluginsConfig(enabled=[], discover_entry_points=False))


@pytest.fixture
def app_context(
    app_config: AppConfig,
    mock_logger: Mock,
    command_registry: CommandRegistry,
    event_emitter: EventEmitter,
) -> ApplicationContext:
    return ApplicationContext(
        config=app_config,
        logger=mock_logger,
        registry=command_registry,
        event_emitter=event_emitter,
    )


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    """Create a minimal valid YAML config file and return its path."""
    import yaml

    cfg = {
        "app_name": "yaml-cli",
        "logging": {"level": "info"},
        "plugins": {"enabled": ["calculator"], "discover_entry_points": False},
    }
    p = tmp_path / "dispatch.config.yaml"
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False)
    return p
