from dispatch_cli.core.adapters.agent_adapter import (
    AgentAdapter,
    AgentTool,
    CustomToolBuilder,
    ToolParameter,
    ToolResult,
)

__all__ = [
    "AgentAdapter",
    "AgentTool",
    "CustomToolBuilder",
    "ToolParameter",
    "ToolResult",
]
