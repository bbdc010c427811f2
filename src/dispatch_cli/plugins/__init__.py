"""Plugins shipped with the dispatch CLI."""

from dispatch_cli.plugins.calculator import CalculatorPlugin
from dispatch_cli.plugins.toolbox import ToolboxPlugin

BUILTIN_PLUGINS = {
    "calculator": CalculatorPlugin,
    "toolbox": ToolboxPlugin,
}

__all__ = ["BUILTIN_PLUGINS", "CalculatorPlugin", "ToolboxPlugin"]
