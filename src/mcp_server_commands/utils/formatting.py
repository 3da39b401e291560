"""Result formatting for tool results, prompts and the terminal."""

from __future__ import annotations

from mcp.types import TextContent
from rich.panel import Panel

from mcp_server_commands.models import (
    ChatMessage,
    ExecutionResult,
    SegmentLabel,
    TextSegment,
)

PROMPT_PREAMBLE = "I ran the following command, if there is any output it will be shown below:\n"

SEGMENT_STYLES: dict[SegmentLabel, str] = {
    SegmentLabel.ERROR: "red",
    SegmentLabel.STDOUT: "green",
    SegmentLabel.STDERR: "yellow",
}


def format_segments(result: ExecutionResult) -> list[TextSegment]:
    """Split a result into labeled segments: ERROR, STDOUT, STDERR.

    Empty fields produce no segment.
    """
    segments: list[TextSegment] = []
    if result.error_message:
        # Usually repeats stderr; kept so callers see the exit reason
        segments.append(TextSegment(SegmentLabel.ERROR, result.error_message))
    if result.stdout:
        segments.append(TextSegment(SegmentLabel.STDOUT, result.stdout))
    if result.stderr:
        segments.append(TextSegment(SegmentLabel.STDERR, result.stderr))
    return segments


def segments_to_content(segments: list[TextSegment]) -> list[TextContent]:
    """Convert segments to MCP text content blocks."""
    return [
        TextContent(type="text", text=segment.text, name=segment.label.wire_name)
        for segment in segments
    ]


def build_prompt_messages(command: str, result: ExecutionResult) -> list[ChatMessage]:
    """Build the chat messages for the run_command prompt."""
    messages = [ChatMessage(PROMPT_PREAMBLE + command)]
    if result.stdout:
        messages.append(ChatMessage("STDOUT:\n" + result.stdout))
    if result.stderr:
        messages.append(ChatMessage("STDERR:\n" + result.stderr))
    return messages


def render_segments(segments: list[TextSegment]) -> list[Panel]:
    """Render segments as rich panels for terminal output."""
    return [
        Panel(
            segment.text.rstrip("\n"),
            title=segment.label.value,
            title_align="left",
            border_style=SEGMENT_STYLES[segment.label],
        )
        for segment in segments
    ]
