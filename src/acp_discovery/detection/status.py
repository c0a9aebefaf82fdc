"""Outcome of probing one agent."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from acp_discovery.detection.version import Version


class DetectionStatus:
    """Base class for the four probe outcomes.

    Exactly one subclass describes each agent after a probe:

    - NotFound: no executable with the agent's name was located
    - Found: the executable ran and exited cleanly
    - FoundButUnresponsive: the executable exists but hung or failed
    - ProbeFailed: a candidate exists but could not be started at all
    """

    label: str = "unknown"

    @property
    def is_installed(self) -> bool:
        """True when an executable is present, usable or not."""
        return False

    @property
    def is_usable(self) -> bool:
        """True when the agent answered its version check."""
        return False

    @property
    def path(self) -> Path | None:
        return None

    @property
    def version(self) -> Version | None:
        return None

    @property
    def suggestion(self) -> str:
        """What a UI should offer the user for this outcome."""
        return "none"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.label}


@dataclass(frozen=True)
class NotFound(DetectionStatus):
    label = "not_found"

    @property
    def suggestion(self) -> str:
        return "install"


@dataclass(frozen=True)
class Found(DetectionStatus):
    """The agent answered; `parsed_version` is None for unrecognized output.

    `raw_version_text` is None only when the version check was skipped.
    """

    executable: Path
    raw_version_text: str | None = None
    parsed_version: Version | None = None
    install_method: str | None = None

    label = "found"

    @property
    def is_installed(self) -> bool:
        return True

    @property
    def is_usable(self) -> bool:
        return True

    @property
    def path(self) -> Path:
        return self.executable

    @property
    def version(self) -> Version | None:
        return self.parsed_version

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.label,
            "path": str(self.executable),
            "raw_version": self.raw_version_text,
            "version": str(self.parsed_version) if self.parsed_version else None,
            "install_method": self.install_method,
        }


@dataclass(frozen=True)
class FoundButUnresponsive(DetectionStatus):
    executable: Path
    error: str

    label = "unresponsive"

    @property
    def is_installed(self) -> bool:
        return True

    @property
    def path(self) -> Path:
        return self.executable

    @property
    def suggestion(self) -> str:
        return "reinstall"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.label, "path": str(self.executable), "error": self.error}


@dataclass(frozen=True)
class ProbeFailed(DetectionStatus):
    reason: str

    label = "probe_failed"

    @property
    def suggestion(self) -> str:
        return "investigate"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.label, "reason": self.reason}
