"""The run_command tool."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types

from mcp_server_commands.errors import InvalidArgumentError
from mcp_server_commands.models import ToolCallOutcome, decode_command_request
from mcp_server_commands.services.shell import CommandExecutor
from mcp_server_commands.utils.formatting import format_segments, segments_to_content

logger = logging.getLogger(__name__)

TOOL_NAME = "run_command"


class RunCommandTool:
    """Run a command and report its output as tool content.

    Execution failures come back as results with ``isError`` set. Only
    malformed calls raise.
    """

    name = TOOL_NAME

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def definition(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            inputSchema={
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "Command to run",
                    },
                },
                "required": ["command"],
            },
        )

    async def call(self, name: str, arguments: Any) -> ToolCallOutcome:
        if name != self.name:
            raise InvalidArgumentError(f"Unknown tool: {name}")

        request = decode_command_request(arguments)
        result = await self.executor.execute(request.command)
        if result.failed:
            logger.info("Tool command failed: %s", result.error_message.splitlines()[0])

        return ToolCallOutcome(is_error=result.failed, segments=format_segments(result))


def to_call_tool_result(outcome: ToolCallOutcome) -> types.CallToolResult:
    return types.CallToolResult(
        content=segments_to_content(outcome.segments),
        isError=outcome.is_error,
    )
