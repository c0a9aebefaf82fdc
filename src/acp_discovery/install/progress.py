"""Installation progress events and options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from acp_discovery.agents.kinds import AgentKind

DEFAULT_INSTALL_TIMEOUT = 300.0  # 5 minutes


class InstallStage(Enum):
    """Steps reported while installing, in the order they occur."""

    STARTED = "started"
    CHECKING_PREREQUISITES = "checking-prerequisites"
    INSTALLING = "installing"
    VERIFYING = "verifying"
    COMPLETED = "completed"


_DESCRIPTIONS = {
    InstallStage.STARTED: "Starting installation",
    InstallStage.CHECKING_PREREQUISITES: "Checking prerequisites",
    InstallStage.INSTALLING: "Installing",
    InstallStage.VERIFYING: "Verifying installation",
    InstallStage.COMPLETED: "Installation complete",
}


@dataclass(frozen=True)
class InstallProgress:
    """A progress event for one agent's installation."""

    stage: InstallStage
    agent: AgentKind

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self.stage]

    @property
    def is_complete(self) -> bool:
        return self.stage is InstallStage.COMPLETED


@dataclass(frozen=True)
class InstallOptions:
    """Installer settings."""

    timeout: float = DEFAULT_INSTALL_TIMEOUT
    # Pause before verifying so PATH updates can land
    verify_delay: float = 0.5

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
