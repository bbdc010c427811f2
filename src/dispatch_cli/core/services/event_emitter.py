"""
Synchronous publish/subscribe for CLI lifecycle events.

Callbacks run on the emitting thread, in registration order, before
``emit`` returns. A failing callback is logged and does not stop delivery
to the remaining callbacks.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any

from dispatch_cli.core.interfaces.event_emitter_interface import (
    EventCallback,
    IEventEmitter,
)

logger = logging.getLogger(__name__)

# Nested emits of one event beyond this depth are dropped
MAX_EMIT_DEPTH = 16


class CliEvent(str, Enum):
    """Standard CLI lifecycle events."""

    COMMAND_REGISTERED = "command:registered"
    COMMAND_EXECUTED = "command:executed"
    COMMAND_FAILED = "command:failed"
    PLUGIN_LOADED = "plugin:loaded"
    PLUGIN_UNLOADED = "plugin:unloaded"
    ERROR = "error"
    STARTUP = "startup"
    SHUTDOWN = "shutdown"


def _event_key(event: str) -> str:
    return event.value if isinstance(event, Enum) else str(event)


class EventEmitter(IEventEmitter):
    """In-process event emitter."""

    def __init__(self, max_depth: int = MAX_EMIT_DEPTH) -> None:
        self._listeners: defaultdict[str, list[EventCallback]] = defaultdict(list)
        self._depth: defaultdict[str, int] = defaultdict(int)
        self._max_depth = max_depth

    def on(self, event: str, callback: EventCallback) -> None:
        """Register a callback; registering the same callback twice is a no-op."""
        callbacks = self._listeners[_event_key(event)]
        if callback not in callbacks:
            callbacks.append(callback)

    def off(self, event: str, callback: EventCallback) -> None:
        """Remove a callback; unknown callbacks are ignored."""
        key = _event_key(event)
        callbacks = self._listeners.get(key)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)
            if not callbacks:
                del self._listeners[key]

    def emit(self, event: str, data: Any = None) -> None:
        """Deliver ``data`` to every callback registered for ``event``."""
        key = _event_key(event)
        callbacks = self._listeners.get(key)
        if not callbacks:
            return

        if self._depth[key] >= self._max_depth:
            logger.error(
                "Dropping '%s' event: nested emit depth exceeded %d",
                key,
                self._max_depth,
            )
            return

        self._depth[key] += 1
        try:
            # Listeners added or removed during delivery apply to the next emit
            for callback in list(callbacks):
                try:
                    callback(data)
                except Exception as exc:
                    logger.error(
                        "Error in event listener for '%s': %s",
                        key,
                        exc,
                        exc_info=True,
                    )
        finally:
            self._depth[key] -= 1

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(_event_key(event), ()))
