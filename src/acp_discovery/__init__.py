"""Detect, version-check, and install AI coding agent CLIs."""

from acp_discovery.agents import AgentKind, all_kinds, probe_command
from acp_discovery.detection import (
    DetectionStatus,
    DetectOptions,
    Found,
    FoundButUnresponsive,
    NotFound,
    ProbeFailed,
    Version,
    detect,
    detect_all,
    detect_all_sync,
    detect_sync,
    parse_version,
)
from acp_discovery.install import InstallInfo, install_info
from acp_discovery.utils.platform import HostOS

__version__ = "0.1.0"

__all__ = [
    "AgentKind",
    "DetectOptions",
    "DetectionStatus",
    "Found",
    "FoundButUnresponsive",
    "HostOS",
    "InstallInfo",
    "NotFound",
    "ProbeFailed",
    "Version",
    "__version__",
    "all_kinds",
    "detect",
    "detect_all",
    "detect_all_sync",
    "detect_sync",
    "install_info",
    "parse_version",
    "probe_command",
]
