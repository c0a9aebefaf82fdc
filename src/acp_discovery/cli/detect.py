"""Show which agents are installed."""

from __future__ import annotations

import dataclasses
import json

import typer
from rich.table import Table
from rich.text import Text

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.cli.common import console, load_config, parse_agent
from acp_discovery.detection.aggregator import detect_all_sync, detect_sync
from acp_discovery.detection.status import (
    DetectionStatus,
    Found,
    FoundButUnresponsive,
    NotFound,
    ProbeFailed,
)
from acp_discovery.utils.exit_codes import ExitCode


def _status_text(status: DetectionStatus) -> Text:
    if isinstance(status, Found):
        return Text("Installed", style="green")
    if isinstance(status, FoundButUnresponsive):
        return Text("Broken", style="yellow")
    if isinstance(status, ProbeFailed):
        return Text("Probe failed", style="red")
    return Text("Not found", style="red")


def _version_text(status: DetectionStatus) -> str:
    if isinstance(status, Found):
        if status.parsed_version:
            return str(status.parsed_version)
        if status.raw_version_text:
            return f"unparsed: {status.raw_version_text.splitlines()[0]}"
    return "-"


def _note(status: DetectionStatus) -> str:
    if isinstance(status, Found):
        return status.install_method or ""
    if isinstance(status, FoundButUnresponsive):
        return f"{status.error} (try reinstalling)"
    if isinstance(status, ProbeFailed):
        return status.reason
    if isinstance(status, NotFound):
        return "run 'acp-discovery install' to install"
    return ""


def render_table(results: dict[AgentKind, DetectionStatus]) -> Table:
    table = Table(title="coding agents")
    table.add_column("Agent", style="bold")
    table.add_column("Status")
    table.add_column("Version")
    table.add_column("Path", overflow="fold")
    table.add_column("Notes", overflow="fold")

    for kind, status in results.items():
        path = str(status.path) if status.path else "-"
        table.add_row(
            kind.display_name, _status_text(status), _version_text(status), path, _note(status)
        )
    return table


def detect_command(
    ctx: typer.Context,
    agent: str | None = typer.Argument(None, help="Only detect this agent"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", min=0.1, help="Seconds allowed for each version check"
    ),
    skip_version: bool = typer.Option(
        False, "--skip-version", help="Only locate executables, do not run them"
    ),
) -> None:
    """Detect installed coding agents and their versions."""
    options = load_config(ctx).detect_options()
    if timeout is not None:
        options = dataclasses.replace(options, timeout=timeout)
    if skip_version:
        options = dataclasses.replace(options, skip_version=True)

    if agent:
        kind = parse_agent(agent)
        results = {kind: detect_sync(kind, options=options)}
    else:
        results = detect_all_sync(options=options)

    if json_output:
        payload = {kind.value: status.to_dict() for kind, status in results.items()}
        console.print_json(json.dumps(payload))
    else:
        console.print(render_table(results))

    if agent and not all(status.is_installed for status in results.values()):
        raise typer.Exit(ExitCode.NOT_INSTALLED)
    raise typer.Exit(ExitCode.SUCCESS)
