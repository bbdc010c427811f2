# Services package

from .command_registry import CommandRegistry
from .dispatcher import Dispatcher
from .error_handler import ErrorHandler
from .event_emitter import CliEvent, EventEmitter
from .input_parser import InputParser
from .io_handler import BufferedIOHandler, ConsoleIOHandler
from .output_formatter import OutputFormatter
from .plugin_manager import PluginManager

__all__ = [
    "BufferedIOHandler",
    "CliEvent",
    "CommandRegistry",
    "ConsoleIOHandler",
    "Dispatcher",
    "ErrorHandler",
    "EventEmitter",
    "InputParser",
    "OutputFormatter",
    "PluginManager",
]
