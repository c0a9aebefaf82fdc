"""Entry point for the acp-discovery CLI."""

import sys
from pathlib import Path

import typer
from rich.console import Console

from acp_discovery import __version__
from acp_discovery.cli.detect import detect_command
from acp_discovery.cli.info import info_command
from acp_discovery.cli.install import install_command
from acp_discovery.config.manager import LOG_LEVELS, ConfigManager, ConfigurationError
from acp_discovery.utils.logging import setup_logging

DEFAULT_LOG_LEVEL = "WARNING"

app = typer.Typer(
    name="acp-discovery",
    help="Detect, version-check, and install AI coding agent CLIs",
    add_completion=True,
    no_args_is_help=True,
)
console = Console()

# Register commands
app.command("detect")(detect_command)
app.command("info")(info_command)
app.command("install")(install_command)


def _version_callback(value: bool) -> None:
    # Runs while parsing, before the group insists on a subcommand
    if value:
        console.print(f"acp-discovery {__version__}")
        raise typer.Exit()


def _configured_log_level(config_path: Path | None) -> str:
    """Log level from the config file; invalid files are reported by the subcommand."""
    try:
        return ConfigManager(config_path).get("logging.level", DEFAULT_LOG_LEVEL)
    except ConfigurationError:
        return DEFAULT_LOG_LEVEL


@app.callback()
def _global_options(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the acp-discovery version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a JSON configuration file",
    ),
) -> None:
    """Global options processed before subcommands."""
    level = (log_level or _configured_log_level(config_path)).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Unknown log level '{log_level}'", param_hint="'--log-level'"
        )
    # Initialize logging as early as possible
    setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> int:
    """Main entry point for the CLI."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
