"""Static catalog of how each agent is probed.

Every AgentKind has exactly one entry. A kind missing from the catalog is a
broken build, so lookups raise KeyError instead of returning a default.
"""

from __future__ import annotations

from dataclasses import dataclass

from acp_discovery.agents.kinds import AgentKind

DEFAULT_VERSION_FLAG = "--version"


@dataclass(frozen=True)
class ProbeSpec:
    """Probe target for one agent."""

    executable_name: str
    version_flag: str = DEFAULT_VERSION_FLAG


_PROBE_TABLE: dict[AgentKind, ProbeSpec] = {
    kind: ProbeSpec(executable_name=kind.executable_name) for kind in AgentKind
}


def all_kinds() -> tuple[AgentKind, ...]:
    """Return every registered agent kind in declaration order."""
    return tuple(AgentKind)


def probe_spec(kind: AgentKind) -> ProbeSpec:
    """Return the probe target for `kind`."""
    return _PROBE_TABLE[kind]


def probe_command(kind: AgentKind) -> tuple[str, str]:
    """Return (executable_name, version_flag) for `kind`."""
    spec = _PROBE_TABLE[kind]
    return spec.executable_name, spec.version_flag
