"""
Agent adapter.

Projects the command registry as a list of callable tools with declared
parameters, so that programmatic callers (for example an LLM agent) get
structured, discoverable entry points instead of raw argv strings.

Tools are derived from the registry on every lookup, so commands registered
after the adapter was built (for instance by a late plugin) are visible
immediately. Custom tools added through :meth:`AgentAdapter.register_tool`
take precedence over derived tools with the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from dispatch_cli.core.common.exceptions import ToolInvocationError
from dispatch_cli.core.domain.command_context import CommandContext, OutputFormat
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.domain.commands.base_command import BaseCommand
from dispatch_cli.core.interfaces.command_registry_interface import ICommandRegistry
from dispatch_cli.core.interfaces.dispatcher_interface import IDispatcher
from dispatch_cli.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

ParameterType = Literal["string", "number", "boolean", "array", "object"]


class ToolParameter(DomainModel):
    """Parameter definition for a tool."""

    name: str
    type: ParameterType = "string"
    description: str = ""
    required: bool = True
    enum: list[str | int | float] | None = None


class ToolResult(DomainModel):
    """Outcome returned to the agent."""

    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def from_command_result(cls, result: CommandResult) -> ToolResult:
        return cls(
            success=result.success,
            data=result.data,
            error=result.error,
            message=result.message,
        )


ToolExecutor = Callable[[dict[str, Any]], Awaitable[ToolResult]]


@dataclass(frozen=True)
class AgentTool:
    """A command (or custom callable) exposed to agents."""

    name: str
    description: str
    executor: ToolExecutor
    parameters: list[ToolParameter] = field(default_factory=list)

    async def execute(self, params: Mapping[str, Any]) -> ToolResult:
        return await self.executor(dict(params))

    def to_schema(self) -> dict[str, Any]:
        """Describe the tool as a JSON-schema style function definition."""
        properties: dict[str, Any] = {}
        for param in self.parameters:
            prop: dict[str, Any] = {"type": param.type, "description": param.description}
            if param.enum:
                prop["enum"] = list(param.enum)
            properties[param.name] = prop
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": [p.name for p in self.parameters if p.required],
            },
        }


def parse_usage_parameters(usage: str) -> list[ToolParameter]:
    """Derive required string parameters from ``<placeholder>`` usage tokens.

    The first token (the command name) is skipped. Option fragments such as
    ``[--flag value]`` are not turned into parameters.
    """
    parameters: list[ToolParameter] = []
    for token in usage.split()[1:]:
        if len(token) > 2 and token.startswith("<") and token.endswith(">"):
            name = token[1:-1]
            parameters.append(
                ToolParameter(
                    name=name,
                    type="string",
                    description=f"Parameter: {name}",
                    required=True,
                )
            )
    return parameters


def _is_present(value: Any) -> bool:
    return value is not None and value is not False and value != ""


def build_tool_context(params: Mapping[str, Any]) -> CommandContext:
    """Build the invocation context for a tool call.

    Every present value becomes a positional argument in mapping order; list
    values contribute one positional per item. The whole mapping is also
    exposed as options. Tool calls always request JSON output.
    """
    arguments: list[str] = []
    for value in params.values():
        items = value if isinstance(value, list | tuple) else [value]
        arguments.extend(str(item) for item in items if _is_present(item))
    return CommandContext(
        arguments=arguments,
        options=dict(params),
        output_format=OutputFormat.JSON,
        verbose=params.get("verbose") is True,
    )


class AgentAdapter:
    """Programmatic, tool-shaped access to the dispatcher."""

    def __init__(self, dispatcher: IDispatcher, command_registry: ICommandRegistry) -> None:
        self._dispatcher = dispatcher
        self._registry = command_registry
        self._custom_tools: dict[str, AgentTool] = {}

    def get_tools(self) -> list[AgentTool]:
        tools = {
            command.name: self._build_tool(command)
            for command in self._registry.get_all()
        }
        tools.update(self._custom_tools)
        return list(tools.values())

    def get_tool(self, name: str) -> AgentTool | None:
        if name in self._custom_tools:
            return self._custom_tools[name]
        command = self._registry.get(name)
        return self._build_tool(command) if command is not None else None

    def register_tool(self, tool: AgentTool) -> None:
        if tool.name in self._custom_tools:
            logger.debug(f"Replacing custom tool: {tool.name}")
        self._custom_tools[tool.name] = tool

    async def execute(self, tool_name: str, args: Mapping[str, Any]) -> ToolResult:
        """Invoke a tool by name; failures never propagate to the caller."""
        tool = self.get_tool(tool_name)
        if tool is None:
            return ToolResult(success=False, error=f"Tool '{tool_name}' not found")

        try:
            return await tool.execute(args)
        except Exception as exc:
            logger.warning(f"Tool '{tool_name}' failed: {exc}", exc_info=True)
            return ToolResult(success=False, error=str(exc) or exc.__class__.__name__)

    def _build_tool(self, command: BaseCommand) -> AgentTool:
        command_name = command.name
        dispatcher = self._dispatcher

        async def _execute(params: dict[str, Any]) -> ToolResult:
            context = build_tool_context(params)
            result = await dispatcher.execute_command(command_name, context)
            return ToolResult.from_command_result(result)

        return AgentTool(
            name=command_name,
            description=command.description,
            parameters=parse_usage_parameters(command.usage),
            executor=_execute,
        )


class CustomToolBuilder:
    """Fluent builder for tools that are not backed by a registered command."""

    def __init__(self) -> None:
        self._name: str | None = None
        self._description: str | None = None
        self._parameters: list[ToolParameter] = []
        self._executor: ToolExecutor | None = None

    def set_name(self, name: str) -> CustomToolBuilder:
        self._name = name
        return self

    def set_description(self, description: str) -> CustomToolBuilder:
        self._description = description
        return self

    def add_parameter(self, parameter: ToolParameter) -> CustomToolBuilder:
        self._parameters.append(parameter)
        return self

    def set_executor(self, executor: ToolExecutor) -> CustomToolBuilder:
        self._executor = executor
        return self

    def build(self) -> AgentTool:
        if not self._name or not self._description or self._executor is None:
            raise ToolInvocationError(
                "Tool name, description, and executor are required",
                tool_name=self._name,
            )
        return AgentTool(
            name=self._name,
            description=self._description,
            parameters=list(self._parameters),
            executor=self._executor,
        )
