"""Install a coding agent."""

from __future__ import annotations

import dataclasses

import typer
from rich.prompt import Confirm

from acp_discovery.cli.common import console, load_config, parse_agent
from acp_discovery.cli.info import render_info
from acp_discovery.detection.aggregator import detect_sync
from acp_discovery.install.errors import (
    InstallError,
    InstallTimeoutError,
    PrerequisiteMissingError,
    PrerequisiteVersionMismatchError,
)
from acp_discovery.install.executor import install
from acp_discovery.install.info import install_info
from acp_discovery.install.progress import InstallProgress
from acp_discovery.utils.exit_codes import ExitCode


def _exit_code_for(error: InstallError) -> ExitCode:
    if isinstance(error, (PrerequisiteMissingError, PrerequisiteVersionMismatchError)):
        return ExitCode.MISSING_DEPS
    if isinstance(error, InstallTimeoutError):
        return ExitCode.TIMEOUT
    return ExitCode.INSTALL_FAILED


def install_command(
    ctx: typer.Context,
    agent: str = typer.Argument(..., help="Agent to install"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    force: bool = typer.Option(False, "--force", help="Install even if already detected"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", min=1.0, help="Seconds allowed for the installer"
    ),
) -> None:
    """Install a coding agent with its official installer."""
    kind = parse_agent(agent)
    config = load_config(ctx)
    options = config.install_options()
    if timeout is not None:
        options = dataclasses.replace(options, timeout=timeout)

    status = detect_sync(kind, options=config.detect_options())
    if status.is_usable and not force:
        version = f" {status.version}" if status.version else ""
        console.print(
            f"[green]{kind.display_name}{version} is already installed at {status.path}[/green]"
        )
        raise typer.Exit(ExitCode.SUCCESS)

    info = install_info(kind)
    console.print(render_info(info))
    if info.requires_manual_install:
        console.print("[yellow]No automated installer is available for this platform.[/yellow]")
        raise typer.Exit(ExitCode.INSTALL_FAILED)

    if not yes and not Confirm.ask(f"Install {kind.display_name}?", default=True):
        console.print("[yellow]Installation cancelled[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)

    with console.status(f"Installing {kind.display_name}...") as spinner:

        def on_progress(progress: InstallProgress) -> None:
            spinner.update(f"{progress.description}...")

        def on_output(stream: str, line: str) -> None:
            style = "dim red" if stream == "stderr" else "dim"
            console.print(line, style=style, markup=False, highlight=False)

        try:
            install(kind, options=options, on_progress=on_progress, on_output=on_output)
        except InstallError as e:
            console.print(f"[red]{e}[/red]")
            console.print(f"[yellow]Fix:[/yellow] {e.fix_suggestion}")
            raise typer.Exit(_exit_code_for(e)) from e

    console.print(f"[green]{info.verification.success_message}[/green]")
    raise typer.Exit(ExitCode.SUCCESS)
