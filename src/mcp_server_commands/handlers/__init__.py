"""MCP tool and prompt handlers."""
