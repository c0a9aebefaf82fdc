"""Install descriptor types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.utils.platform import HostOS


class InstallLocation(Enum):
    """Where an installer puts the agent."""

    USER_LOCAL = "user-local"
    SYSTEM = "system"


@dataclass(frozen=True)
class StructuredCommand:
    """A program with its argument list, ready for process spawning."""

    program: str
    args: tuple[str, ...] = ()
    env_vars: tuple[tuple[str, str], ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


@dataclass(frozen=True)
class InstallMethod:
    """One way to install an agent.

    `command` is None when no automated installer exists and the user has
    to follow the documentation instead.
    """

    command: StructuredCommand | None
    raw_command: str
    description: str
    location: InstallLocation = InstallLocation.USER_LOCAL


@dataclass(frozen=True)
class Prerequisite:
    """A tool that must be present before installing."""

    name: str
    check_command: str | None = None
    install_url: str | None = None


@dataclass(frozen=True)
class VerificationStep:
    """How to confirm the install worked."""

    command: str
    expected_pattern: str
    success_message: str


@dataclass(frozen=True)
class InstallInfo:
    """Everything needed to install one agent on one OS."""

    kind: AgentKind
    host_os: HostOS
    primary: InstallMethod
    verification: VerificationStep
    docs_url: str
    alternatives: tuple[InstallMethod, ...] = ()
    prerequisites: tuple[Prerequisite, ...] = ()
    is_supported: bool = True

    @property
    def requires_manual_install(self) -> bool:
        return self.primary.command is None

    @property
    def description(self) -> str:
        return self.primary.description

    def to_dict(self) -> dict[str, Any]:
        def method_dict(method: InstallMethod) -> dict[str, Any]:
            return {
                "command": method.command.argv if method.command else None,
                "raw_command": method.raw_command,
                "description": method.description,
                "location": method.location.value,
            }

        return {
            "agent": self.kind.value,
            "os": self.host_os.value,
            "supported": self.is_supported,
            "manual": self.requires_manual_install,
            "primary": method_dict(self.primary),
            "alternatives": [method_dict(m) for m in self.alternatives],
            "prerequisites": [
                {"name": p.name, "check_command": p.check_command, "install_url": p.install_url}
                for p in self.prerequisites
            ],
            "verification": {
                "command": self.verification.command,
                "expected_pattern": self.verification.expected_pattern,
                "success_message": self.verification.success_message,
            },
            "docs_url": self.docs_url,
        }
