"""Error types surfaced to MCP clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData

if TYPE_CHECKING:
    from mcp_server_commands.models import ExecutionResult


class InvalidArgumentError(McpError):
    """Malformed call: missing command or unknown tool/prompt name.

    Raised before any subprocess is spawned. The SDK answers the request
    with a JSON-RPC error instead of a result payload.
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorData(code=INVALID_PARAMS, message=message))


class ExecutionFailure(RuntimeError):
    """The command exited non-zero, timed out, or could not be spawned."""

    def __init__(self, result: ExecutionResult) -> None:
        super().__init__(result.error_message)
        self.result = result
