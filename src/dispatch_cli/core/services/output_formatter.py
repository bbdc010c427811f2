from __future__ import annotations

import json
from typing import Any

from dispatch_cli.core.domain.command_context import OutputFormat
from dispatch_cli.core.domain.command_results import CommandResult
from dispatch_cli.core.interfaces.output_formatter_interface import IOutputFormatter

SUCCESS_HEADER = "✅ Success"
ERROR_HEADER = "❌ Error"


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


class OutputFormatter(IOutputFormatter):
    """Renders command results as text blocks or JSON documents."""

    def format(self, result: CommandResult, output_format: OutputFormat | str) -> str:
        if OutputFormat(output_format) is OutputFormat.JSON:
            return self.format_json(result)
        return self.format_text(result)

    def format_json(self, result: CommandResult) -> str:
        # Key order is part of the output contract
        payload = {
            "success": result.success,
            "data": result.data,
            "error": result.error,
            "message": result.message,
            "timestamp": result.timestamp.isoformat(),
            "executionTimeMs": result.execution_time_ms,
        }
        return _to_json(payload)

    def format_text(self, result: CommandResult) -> str:
        if not result.success:
            output = ERROR_HEADER
            if result.error:
                output += f": {result.error}"
            if result.message:
                output += f"\nMessage: {result.message}"
            return output

        output = SUCCESS_HEADER
        if result.message:
            output += f": {result.message}"
        if result.data is not None:
            output += "\n\nData:\n"
            output += result.data if isinstance(result.data, str) else _to_json(result.data)
        output += f"\n\nExecution time: {result.execution_time_ms}ms"
        return output
