"""Shared test fixtures."""

from __future__ import annotations

import pytest

from mcp_server_commands.config import AppConfig, LoggingConfig, ServerConfig, ShellConfig
from mcp_server_commands.models import ExecutionResult


class FakeExecutor:
    """Records commands and returns a canned result."""

    def __init__(self, result: ExecutionResult | None = None) -> None:
        self.result = result or ExecutionResult()
        self.commands: list[str] = []

    async def execute(self, command: str) -> ExecutionResult:
        self.commands.append(command)
        return self.result


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration."""
    return AppConfig(
        server=ServerConfig(name="test-commands"),
        shell=ShellConfig(timeout=5),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "test.log")),
    )


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def make_executor():
    """Factory for FakeExecutor instances with a given result."""
    return FakeExecutor
