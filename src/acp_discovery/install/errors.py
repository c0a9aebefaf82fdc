"""Installation errors.

Each error carries a `fix` string with an actionable suggestion that the
CLI shows next to the message.
"""

from __future__ import annotations

from acp_discovery.agents.kinds import AgentKind


class InstallError(Exception):
    """Base class for installation failures."""

    def __init__(self, message: str, fix: str) -> None:
        super().__init__(message)
        self.fix = fix

    @property
    def fix_suggestion(self) -> str:
        return self.fix


class PrerequisiteMissingError(InstallError):
    """A required tool such as Node.js is not installed."""

    def __init__(self, name: str, install_url: str | None = None) -> None:
        self.name = name
        self.install_url = install_url
        super().__init__(
            f"Missing prerequisite: {name}",
            fix=f"Install {name} from {install_url or 'the official website'}",
        )


class PrerequisiteVersionMismatchError(InstallError):
    """A required tool is installed but too old."""

    def __init__(self, name: str, required: str, found: str) -> None:
        self.name = name
        self.required = required
        self.found = found
        super().__init__(
            f"Prerequisite version mismatch: {name} requires {required}, found {found}",
            fix=f"Upgrade {name} to version {required}",
        )


class NetworkError(InstallError):
    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        super().__init__(
            f"Network error: {message}",
            fix="Check your internet connection and try again",
        )


class InstallPermissionError(InstallError):
    def __init__(self, message: str) -> None:
        super().__init__(
            f"Permission denied: {message}",
            fix="Try running with appropriate permissions",
        )


class InstallTimeoutError(InstallError):
    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Installation timed out after {timeout:g}s",
            fix=(
                f"Installation timed out after {timeout:g}s. "
                "Try with a longer timeout or check network."
            ),
        )


class InstallerFailedError(InstallError):
    """The install command ran but reported failure."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stdout: str | None = None,
        stderr: str | None = None,
        fix: str = "See installer output above for details",
    ) -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Installation failed: {message}", fix=fix)


class VerificationFailedError(InstallError):
    def __init__(self, agent: AgentKind) -> None:
        self.agent = agent
        super().__init__(
            "Verification failed: agent not detected after installation",
            fix=(
                "Installation completed but agent not found. You may need to restart "
                "your terminal for PATH changes to take effect."
            ),
        )


class UnsupportedPlatformError(InstallError):
    def __init__(self, agent: AgentKind, docs_url: str) -> None:
        self.agent = agent
        super().__init__(
            f"Platform not supported for {agent.display_name}",
            fix=f"See {docs_url} for supported platforms",
        )
