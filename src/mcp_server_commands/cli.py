"""CLI entry point using typer."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from mcp_server_commands import __version__
from mcp_server_commands.config import (
    CONFIG_FILE,
    AppConfig,
    ensure_config_dir,
    load_config,
    save_config,
)
from mcp_server_commands.services.shell import ShellRunner
from mcp_server_commands.utils.formatting import format_segments, render_segments

app = typer.Typer(
    name="mcp-server-commands",
    help="MCP server that runs shell commands for an MCP host.",
    add_completion=False,
)
console = Console()
# stdout carries the MCP transport while serving
err_console = Console(stderr=True)


def _load_config() -> AppConfig:
    try:
        return load_config()
    except ValueError as e:
        err_console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    log_level: str = typer.Option(None, "--log-level", "-l", help="Override log level"),
) -> None:
    """Run the MCP server over stdio."""
    config = _load_config()
    if log_level:
        config.logging.level = log_level

    ensure_config_dir()
    log_path = Path(config.logging.file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(str(log_path)),
            logging.StreamHandler(sys.stderr),
        ],
    )

    from mcp_server_commands.server import CommandsServer

    server = CommandsServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        err_console.print("[dim]Server stopped.[/dim]")


@app.command()
def run(
    command: str = typer.Argument(..., help="Command to run"),
) -> None:
    """Run a command the way the run_command tool does and show the result."""
    if not command:
        console.print("[red]Command is required.[/red]")
        raise typer.Exit(1)

    config = _load_config()
    result = asyncio.run(ShellRunner(config).execute(command))
    segments = format_segments(result)

    if not segments:
        console.print("[dim](no output)[/dim]")
    for panel in render_segments(segments):
        console.print(panel)

    if result.failed:
        raise typer.Exit(1)


@app.command()
def config(
    key: str = typer.Argument(None, help="Config key (e.g., shell.timeout)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    cfg = _load_config()

    if key is None:
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("server.name", cfg.server.name)
        table.add_row("shell.timeout", str(cfg.shell.timeout) if cfg.shell.timeout else "none")
        table.add_row("logging.level", cfg.logging.level)
        table.add_row("logging.file", cfg.logging.file)

        console.print(table)
        console.print(f"[dim]{CONFIG_FILE}[/dim]")
        return

    if value is None:
        console.print("[red]Usage: mcp-server-commands config <key> <value>[/red]")
        raise typer.Exit(1)

    parts = key.split(".")
    if len(parts) != 2:
        console.print("[red]Key format: section.key (e.g., shell.timeout)[/red]")
        raise typer.Exit(1)

    section, attr = parts
    section_map = {"server": cfg.server, "shell": cfg.shell, "logging": cfg.logging}

    if section not in section_map:
        console.print(f"[red]Unknown section: {section}[/red]")
        raise typer.Exit(1)

    obj = section_map[section]
    if not hasattr(obj, attr):
        console.print(f"[red]Unknown key: {key}[/red]")
        raise typer.Exit(1)

    # Type coercion
    current = getattr(obj, attr)
    try:
        if isinstance(current, (int, float)):
            typed_value = float(value)
            if typed_value < 0:
                raise ValueError(value)
        else:
            typed_value = value
    except ValueError:
        console.print(f"[red]Invalid value type for {key}[/red]")
        raise typer.Exit(1)

    setattr(obj, attr, typed_value)
    save_config(cfg)
    console.print(f"[green]{key} = {typed_value}[/green]")


@app.command()
def logs(
    lines: int = typer.Option(50, "--lines", "-n", help="Number of lines"),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow log output"),
) -> None:
    """View server logs."""
    log_path = Path(_load_config().logging.file).expanduser().resolve()
    if not log_path.exists():
        console.print("[dim]No log file found.[/dim]")
        return

    if follow:
        import subprocess

        try:
            subprocess.run(["tail", "-f", "-n", str(lines), str(log_path)])
        except KeyboardInterrupt:
            pass
    else:
        content = log_path.read_text()
        log_lines = content.strip().split("\n")
        for line in log_lines[-lines:]:
            console.print(line, markup=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"mcp-server-commands v{__version__}")
    console.print(f"Python: {sys.version.split()[0]}")
    console.print(f"Config: {CONFIG_FILE}")


if __name__ == "__main__":
    app()
