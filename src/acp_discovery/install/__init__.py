"""Agent install descriptors and the installer."""

from acp_discovery.install.errors import (
    InstallError,
    InstallerFailedError,
    InstallPermissionError,
    InstallTimeoutError,
    NetworkError,
    PrerequisiteMissingError,
    PrerequisiteVersionMismatchError,
    UnsupportedPlatformError,
    VerificationFailedError,
)
from acp_discovery.install.executor import install
from acp_discovery.install.info import install_info
from acp_discovery.install.prereq import can_install
from acp_discovery.install.progress import InstallOptions, InstallProgress, InstallStage
from acp_discovery.install.types import (
    InstallInfo,
    InstallLocation,
    InstallMethod,
    Prerequisite,
    StructuredCommand,
    VerificationStep,
)

__all__ = [
    "InstallError",
    "InstallInfo",
    "InstallLocation",
    "InstallMethod",
    "InstallOptions",
    "InstallPermissionError",
    "InstallProgress",
    "InstallStage",
    "InstallTimeoutError",
    "InstallerFailedError",
    "NetworkError",
    "Prerequisite",
    "PrerequisiteMissingError",
    "PrerequisiteVersionMismatchError",
    "StructuredCommand",
    "UnsupportedPlatformError",
    "VerificationFailedError",
    "VerificationStep",
    "can_install",
    "install",
    "install_info",
]
