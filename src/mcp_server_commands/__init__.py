"""MCP server that runs shell commands for a host over stdio."""

__version__ = "0.2.1"
