from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dispatch_cli.core.config.app_config import AppConfig
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry
from dispatch_cli.core.interfaces.event_emitter_interface import IEventEmitter


@dataclass(frozen=True)
class ApplicationContext:
    """Shared services constructed once at startup and handed to plugins.

    Note: none of these services lock; the engine assumes one logical
    thread of control.
    """

    config: AppConfig
    logger: Any
    registry: ICommandRegistry
    event_emitter: IEventEmitter
