"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.config.manager import ConfigManager, ConfigurationError
from acp_discovery.utils.exit_codes import ExitCode

console = Console()


def parse_agent(name: str) -> AgentKind:
    """Convert a CLI argument to an AgentKind or fail with a usage error."""
    try:
        return AgentKind.from_name(name)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def load_config(ctx: typer.Context | None) -> ConfigManager:
    """Load the configuration selected by the global --config option."""
    config_path: Path | None = None
    if ctx is not None and isinstance(ctx.obj, dict):
        config_path = ctx.obj.get("config_path")

    manager = ConfigManager(config_path)
    try:
        manager.load()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(ExitCode.INVALID_CONFIG) from e
    return manager
