"""MCP server setup and lifecycle."""

from __future__ import annotations

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from mcp_server_commands import __version__
from mcp_server_commands.config import AppConfig
from mcp_server_commands.handlers.prompts import RunCommandPrompt
from mcp_server_commands.handlers.tools import RunCommandTool, to_call_tool_result
from mcp_server_commands.services.shell import CommandExecutor, ShellRunner

logger = logging.getLogger(__name__)


class CommandsServer:
    """Wires the run_command tool and prompt into an MCP server."""

    def __init__(self, config: AppConfig, executor: CommandExecutor | None = None) -> None:
        self.config = config
        self.executor = executor or ShellRunner(config)
        self.tool = RunCommandTool(self.executor)
        self.prompt = RunCommandPrompt(self.executor)
        self.server: Server = Server(config.server.name, version=__version__)
        self._register_handlers()

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [self.tool.definition()]

        # Registered directly: the call_tool() decorator folds every exception
        # into an isError result, but bad arguments must be a request error.
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

        @self.server.list_prompts()
        async def list_prompts() -> list[types.Prompt]:
            return [self.prompt.definition()]

        @self.server.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
            messages = await self.prompt.get(name, arguments)
            return self.prompt.to_get_prompt_result(messages)

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        outcome = await self.tool.call(req.params.name, req.params.arguments)
        return types.ServerResult(to_call_tool_result(outcome))

    async def run(self) -> None:
        """Serve over stdio until the host closes the stream."""
        logger.info("Starting %s v%s (stdio transport)", self.config.server.name, __version__)
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
        logger.info("Server stopped.")
