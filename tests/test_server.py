"""Tests for the MCP server wiring."""

from __future__ import annotations

import pytest
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

from mcp_server_commands import __version__
from mcp_server_commands.errors import ExecutionFailure, InvalidArgumentError
from mcp_server_commands.models import ExecutionResult
from mcp_server_commands.server import CommandsServer
from mcp_server_commands.services.shell import ShellRunner


@pytest.fixture
def commands_server(app_config, fake_executor):
    return CommandsServer(app_config, executor=fake_executor)


def _call_tool_request(name: str, arguments: dict | None) -> types.CallToolRequest:
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


def _get_prompt_request(name: str, arguments: dict | None) -> types.GetPromptRequest:
    return types.GetPromptRequest(
        method="prompts/get",
        params=types.GetPromptRequestParams(name=name, arguments=arguments),
    )


class TestCommandsServer:
    def test_default_executor(self, app_config):
        server = CommandsServer(app_config)
        assert isinstance(server.executor, ShellRunner)
        assert server.tool.executor is server.prompt.executor

    def test_initialization_options(self, commands_server):
        options = commands_server.server.create_initialization_options()
        assert options.server_name == "test-commands"
        assert options.server_version == __version__
        assert options.capabilities.tools is not None
        assert options.capabilities.prompts is not None

    @pytest.mark.asyncio
    async def test_list_tools(self, commands_server):
        handler = commands_server.server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))
        assert [tool.name for tool in result.root.tools] == ["run_command"]

    @pytest.mark.asyncio
    async def test_call_tool(self, commands_server, fake_executor):
        fake_executor.result = ExecutionResult(stdout="hi\n")
        handler = commands_server.server.request_handlers[types.CallToolRequest]
        result = await handler(_call_tool_request("run_command", {"command": "echo hi"}))

        assert result.root.isError is False
        assert [(c.text, c.name) for c in result.root.content] == [("hi\n", "3STDOUT")]

    @pytest.mark.asyncio
    async def test_call_tool_bad_arguments_raise(self, commands_server, fake_executor):
        handler = commands_server.server.request_handlers[types.CallToolRequest]
        with pytest.raises(InvalidArgumentError):
            await handler(_call_tool_request("run_command", {}))
        with pytest.raises(InvalidArgumentError):
            await handler(_call_tool_request("unknown", {"command": "ls"}))
        assert fake_executor.commands == []

    @pytest.mark.asyncio
    async def test_list_prompts(self, commands_server):
        handler = commands_server.server.request_handlers[types.ListPromptsRequest]
        result = await handler(types.ListPromptsRequest(method="prompts/list"))
        prompts = result.root.prompts
        assert [p.name for p in prompts] == ["run_command"]
        assert prompts[0].arguments[0].required is True

    @pytest.mark.asyncio
    async def test_get_prompt(self, commands_server, fake_executor):
        fake_executor.result = ExecutionResult(stdout="hi\n")
        handler = commands_server.server.request_handlers[types.GetPromptRequest]
        result = await handler(_get_prompt_request("run_command", {"command": "echo hi"}))

        texts = [m.content.text for m in result.root.messages]
        assert texts[0].endswith("\necho hi")
        assert texts[1] == "STDOUT:\nhi\n"

    @pytest.mark.asyncio
    async def test_get_prompt_failure_propagates(self, commands_server, fake_executor):
        fake_executor.result = ExecutionResult(error_message="Command failed: exit 1\n", exit_code=1)
        handler = commands_server.server.request_handlers[types.GetPromptRequest]
        with pytest.raises(ExecutionFailure):
            await handler(_get_prompt_request("run_command", {"command": "exit 1"}))


class TestClientSession:
    @pytest.mark.asyncio
    async def test_tool_round_trip(self, app_config):
        server = CommandsServer(app_config)
        async with create_connected_server_and_client_session(server.server) as session:
            tools = await session.list_tools()
            assert [t.name for t in tools.tools] == ["run_command"]

            ok = await session.call_tool("run_command", {"command": "echo hi"})
            assert ok.isError is False
            assert [c.text for c in ok.content] == ["hi\n"]

            failed = await session.call_tool("run_command", {"command": "exit 1"})
            assert failed.isError is True
            assert failed.content[0].text

    @pytest.mark.asyncio
    async def test_empty_command_is_request_error(self, app_config):
        server = CommandsServer(app_config)
        async with create_connected_server_and_client_session(server.server) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("run_command", {"command": ""})
        assert exc_info.value.error.code == types.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_prompt_failure_is_request_error(self, app_config):
        server = CommandsServer(app_config)
        async with create_connected_server_and_client_session(server.server) as session:
            prompt = await session.get_prompt("run_command", {"command": "echo hi"})
            assert [m.content.text for m in prompt.messages][1] == "STDOUT:\nhi\n"

            with pytest.raises(McpError):
                await session.get_prompt("run_command", {"command": "exit 1"})

    @pytest.mark.asyncio
    async def test_spawn_failure_is_tool_result(self, app_config):
        server = CommandsServer(app_config)
        async with create_connected_server_and_client_session(server.server) as session:
            result = await session.call_tool("run_command", {"command": "echo a\x00b"})
        assert result.isError is True
        assert "null byte" in result.content[0].text
