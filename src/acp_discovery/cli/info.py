"""Show how an agent is installed."""

from __future__ import annotations

import json

import typer
from rich.panel import Panel

from acp_discovery.cli.common import console, parse_agent
from acp_discovery.install.info import install_info
from acp_discovery.install.types import InstallInfo
from acp_discovery.utils.exit_codes import ExitCode
from acp_discovery.utils.platform import HostOS


def _parse_os(name: str | None) -> HostOS | None:
    if name is None:
        return None
    try:
        return HostOS(name.lower())
    except ValueError as e:
        choices = ", ".join(host.value for host in HostOS)
        raise typer.BadParameter(f"Unknown OS '{name}'. Choose from: {choices}") from e


def render_info(info: InstallInfo) -> Panel:
    lines = [f"[bold]{info.description}[/bold]"]
    if info.requires_manual_install:
        lines.append(f"Documentation: [cyan]{info.docs_url}[/cyan]")
    else:
        lines.append(f"Command: [cyan]{info.primary.raw_command}[/cyan]")
        for prerequisite in info.prerequisites:
            source = f" ({prerequisite.install_url})" if prerequisite.install_url else ""
            lines.append(f"Requires: {prerequisite.name}{source}")
        for method in info.alternatives:
            lines.append(f"Alternative: [cyan]{method.raw_command}[/cyan] - {method.description}")
        lines.append(f"Verify with: [cyan]{info.verification.command}[/cyan]")
        lines.append(f"Docs: {info.docs_url}")

    style = "yellow" if info.requires_manual_install else "green"
    title = f"{info.kind.display_name} on {info.host_os.value}"
    return Panel("\n".join(lines), title=title, border_style=style)


def info_command(
    agent: str = typer.Argument(..., help="Agent to describe"),
    os_name: str | None = typer.Option(
        None, "--os", help="Target OS: linux, macos, windows, other (default: this host)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Show the install recipe for an agent."""
    info = install_info(parse_agent(agent), _parse_os(os_name))

    if json_output:
        console.print_json(json.dumps(info.to_dict()))
    else:
        console.print(render_info(info))
    raise typer.Exit(ExitCode.SUCCESS)
