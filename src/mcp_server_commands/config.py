"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

CONFIG_DIR = Path.home() / ".mcp-server-commands"
CONFIG_FILE = CONFIG_DIR / "config.toml"


@dataclass
class ServerConfig:
    name: str = "mcp-server-commands"


@dataclass
class ShellConfig:
    # Seconds; 0 disables the timeout
    timeout: float = 0


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = "~/.mcp-server-commands/server.log"


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def ensure_config_dir() -> None:
    """Create config directory with secure permissions."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)


def load_config() -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()

    if CONFIG_FILE.exists():
        with open(CONFIG_FILE, "rb") as f:
            data = tomllib.load(f)

        server = data.get("server", {})
        config.server.name = server.get("name", config.server.name)

        shell = data.get("shell", {})
        config.shell.timeout = shell.get("timeout", config.shell.timeout)

        logging_cfg = data.get("logging", {})
        config.logging.level = logging_cfg.get("level", config.logging.level)
        config.logging.file = logging_cfg.get("file", config.logging.file)

    # Environment variable overrides
    if env_name := os.environ.get("MCP_COMMANDS_SERVER_NAME"):
        config.server.name = env_name
    if env_timeout := os.environ.get("MCP_COMMANDS_SHELL_TIMEOUT"):
        config.shell.timeout = float(env_timeout)
    if env_log_level := os.environ.get("MCP_COMMANDS_LOG_LEVEL"):
        config.logging.level = env_log_level
    if env_log_file := os.environ.get("MCP_COMMANDS_LOG_FILE"):
        config.logging.file = env_log_file

    if config.shell.timeout < 0:
        raise ValueError(f"shell.timeout must be >= 0, got {config.shell.timeout}")

    return config


def save_config(config: AppConfig) -> None:
    """Save configuration to TOML file."""
    ensure_config_dir()

    data = {
        "server": {
            "name": config.server.name,
        },
        "shell": {
            "timeout": config.shell.timeout,
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
        },
    }

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(data, f)

    os.chmod(CONFIG_FILE, 0o600)

