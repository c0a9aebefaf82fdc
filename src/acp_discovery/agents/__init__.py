"""Agent kinds and their probe catalog."""

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.agents.registry import ProbeSpec, all_kinds, probe_command, probe_spec

__all__ = [
    "AgentKind",
    "ProbeSpec",
    "all_kinds",
    "probe_command",
    "probe_spec",
]
