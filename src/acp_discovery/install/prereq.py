"""Pre-flight checks run before an installer."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.detection.parser import parse_version
from acp_discovery.install.errors import (
    PrerequisiteMissingError,
    PrerequisiteVersionMismatchError,
    UnsupportedPlatformError,
)
from acp_discovery.install.info import install_info
from acp_discovery.install.types import Prerequisite
from acp_discovery.utils.platform import HostOS

logger = logging.getLogger(__name__)

PREREQ_CHECK_TIMEOUT = 5.0

_MIN_MAJOR = re.compile(r"(\d+)\+")


def _run_check_command(command: str) -> str | None:
    """Run a check command and return its output, or None if it failed."""
    args = shlex.split(command)
    if not args:
        return None
    try:
        result = subprocess.run(
            args,
            check=False,
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
            timeout=PREREQ_CHECK_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"Prerequisite check '{command}' failed: {e}")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or result.stderr.strip()


def required_major(prerequisite: Prerequisite) -> int:
    """Minimum major version encoded in a name like "Node.js 18+" (0 if none)."""
    match = _MIN_MAJOR.search(prerequisite.name)
    return int(match.group(1)) if match else 0


def check_prerequisite(prerequisite: Prerequisite) -> None:
    """Verify one prerequisite.

    Raises:
        PrerequisiteMissingError: If the check command fails or prints no version
        PrerequisiteVersionMismatchError: If the installed major version is too old
    """
    if not prerequisite.check_command:
        # Nothing to run, assume present
        return

    output = _run_check_command(prerequisite.check_command)
    version = parse_version(output) if output else None
    if version is None:
        raise PrerequisiteMissingError(prerequisite.name, prerequisite.install_url)

    minimum = required_major(prerequisite)
    if version.major < minimum:
        raise PrerequisiteVersionMismatchError(
            prerequisite.name,
            required=f"{minimum}+",
            found=f"{version.major}.{version.minor}",
        )
    logger.debug(f"Prerequisite {prerequisite.name} satisfied by {version}")


def can_install(kind: AgentKind, host_os: HostOS | None = None) -> None:
    """Check that `kind` can be installed automatically on `host_os`.

    Raises:
        UnsupportedPlatformError: If only manual installation is possible
        PrerequisiteMissingError: If a prerequisite is absent
        PrerequisiteVersionMismatchError: If a prerequisite is too old
    """
    info = install_info(kind, host_os)
    if not info.is_supported or info.requires_manual_install:
        raise UnsupportedPlatformError(kind, info.docs_url)

    for prerequisite in info.prerequisites:
        check_prerequisite(prerequisite)
