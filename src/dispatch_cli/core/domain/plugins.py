from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from dispatch_cli.core.interfaces.plugin_interface import IPlugin

if TYPE_CHECKING:
    from dispatch_cli.core.app.application_context import ApplicationContext


class BasePlugin(IPlugin):
    """Base class for plugins.

    ``initialize`` is expected to read the registry and logger from the
    context and register the plugin's commands. ``shutdown`` does nothing
    unless overridden.
    """

    @abstractmethod
    async def initialize(self, context: ApplicationContext) -> None:
        pass

    async def shutdown(self) -> None:
        return None
