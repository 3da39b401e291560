"""Shell command executor service."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol

from mcp_server_commands.config import AppConfig
from mcp_server_commands.models import ExecutionResult

logger = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    """Anything that can turn a command string into an ExecutionResult."""

    async def execute(self, command: str) -> ExecutionResult: ...


class ShellRunner:
    """Execute commands through the system shell.

    Runs in the server's working directory with its environment. Output is
    captured whole once the process exits.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    async def execute(self, command: str) -> ExecutionResult:
        """Execute a shell command."""
        logger.info("Running command: %s", command)
        timeout = self.config.shell.timeout or None

        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError: the command contains a NUL byte
            logger.exception("Failed to spawn command: %r", command)
            return ExecutionResult(error_message=str(e) or repr(e), exit_code=-1)

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            proc.kill()
            stdout_bytes, stderr_bytes = await proc.communicate()
            logger.warning("Command timed out after %ss: %s", timeout, command)
            return ExecutionResult(
                stdout=stdout_bytes.decode("utf-8", errors="replace"),
                stderr=stderr_bytes.decode("utf-8", errors="replace"),
                error_message=f"Command timed out after {timeout:g}s",
                exit_code=-1,
            )

        exit_code = proc.returncode or 0
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Command exited with %d in %dms", exit_code, elapsed_ms)

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        if exit_code != 0:
            return ExecutionResult(
                stdout=stdout,
                stderr=stderr,
                error_message=f"Command failed: {command}\n{stderr}",
                exit_code=exit_code,
            )

        return ExecutionResult(stdout=stdout, stderr=stderr)
