"""The run_command prompt."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types

from mcp_server_commands.errors import ExecutionFailure, InvalidArgumentError
from mcp_server_commands.models import ChatMessage, decode_command_request
from mcp_server_commands.services.shell import CommandExecutor
from mcp_server_commands.utils.formatting import build_prompt_messages

logger = logging.getLogger(__name__)

PROMPT_NAME = "run_command"
PROMPT_DESCRIPTION = (
    "Include command output in the prompt. "
    "Instead of a tool call, the user decides what commands are relevant."
)


class RunCommandPrompt:
    """Run a command and embed its output in chat messages.

    Unlike the tool, a failed command is not turned into content: the
    ExecutionFailure propagates and the client gets a request error.
    """

    name = PROMPT_NAME
    description = PROMPT_DESCRIPTION

    def __init__(self, executor: CommandExecutor) -> None:
        self.executor = executor

    def definition(self) -> types.Prompt:
        return types.Prompt(
            name=self.name,
            description=self.description,
            arguments=[types.PromptArgument(name="command", required=True)],
        )

    async def get(self, name: str, arguments: Any) -> list[ChatMessage]:
        if name != self.name:
            raise InvalidArgumentError(f"Unknown prompt: {name}")

        request = decode_command_request(arguments)
        result = await self.executor.execute(request.command)
        if result.failed:
            logger.info("Prompt command failed: %s", request.command)
            # TODO: render the failure as a message the model can troubleshoot from
            raise ExecutionFailure(result)

        return build_prompt_messages(request.command, result)

    def to_get_prompt_result(self, messages: list[ChatMessage]) -> types.GetPromptResult:
        return types.GetPromptResult(
            description=self.description,
            messages=[
                types.PromptMessage(
                    role=message.role,
                    content=types.TextContent(type="text", text=message.text),
                )
                for message in messages
            ],
        )
