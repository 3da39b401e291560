"""Request-scoped data models for mcp-server-commands."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mcp_server_commands.errors import InvalidArgumentError


@dataclass(frozen=True)
class CommandRequest:
    """A decoded, non-empty command."""

    command: str


def decode_command_request(arguments: Any) -> CommandRequest:
    """Decode loosely typed call arguments into a CommandRequest.

    Raises InvalidArgumentError when ``command`` is missing or empty.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentError("Arguments must be an object")

    value = arguments.get("command")
    command = "" if value is None else str(value)
    if not command:
        raise InvalidArgumentError("Command is required")
    return CommandRequest(command=command)


@dataclass
class ExecutionResult:
    """Result from a single command execution."""

    stdout: str = ""
    stderr: str = ""
    error_message: str = ""
    exit_code: int = 0

    @property
    def failed(self) -> bool:
        return bool(self.error_message)


class SegmentLabel(str, Enum):
    ERROR = "ERROR"
    STDOUT = "STDOUT"
    STDERR = "STDERR"

    @property
    def wire_name(self) -> str:
        # Hosts sort/display on the "3" prefix
        return f"3{self.value}"


@dataclass(frozen=True)
class TextSegment:
    label: SegmentLabel
    text: str


@dataclass
class ToolCallOutcome:
    """Outcome of one run_command tool call."""

    is_error: bool = False
    segments: list[TextSegment] = field(default_factory=list)


@dataclass(frozen=True)
class ChatMessage:
    text: str
    role: str = "user"
