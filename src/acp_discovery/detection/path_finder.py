"""Locate agent executables on the host."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from acp_discovery.utils.platform import HostOS

logger = logging.getLogger(__name__)

# System locations that are not always on PATH
UNIX_FALLBACK_DIRS = ("/usr/local/bin", "/usr/bin")


def home_candidates(name: str, host_os: HostOS) -> list[Path]:
    """Return per-user install locations for `name`.

    Unix tools commonly land in ~/.local/bin or ~/bin. On Windows native
    installers use %USERPROFILE%\\.local\\bin and npm creates .cmd shims in
    %APPDATA%\\npm.
    """
    paths: list[Path] = []
    if host_os.is_windows:
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            paths.append(Path(userprofile) / ".local" / "bin" / f"{name}.exe")
            paths.append(Path(userprofile) / ".local" / "bin" / name)
        appdata = os.environ.get("APPDATA")
        if appdata:
            paths.append(Path(appdata) / "npm" / f"{name}.cmd")
    else:
        home = os.environ.get("HOME")
        if home:
            paths.append(Path(home) / ".local" / "bin" / name)
            paths.append(Path(home) / "bin" / name)
    return paths


def fallback_candidates(name: str, host_os: HostOS) -> list[Path]:
    """Return every non-PATH location checked for `name`, in order."""
    system: list[Path] = []
    if not host_os.is_windows:
        system = [Path(directory) / name for directory in UNIX_FALLBACK_DIRS]
    return system + home_candidates(name, host_os)


def find_executable(
    name: str,
    host_os: HostOS | None = None,
    search_path: str | None = None,
    use_fallback_paths: bool = True,
) -> Path | None:
    """Find an executable by name.

    Args:
        name: Command name, e.g. "claude"
        host_os: OS whose conventions apply. Defaults to the running OS
        search_path: PATH-style string to search instead of the process PATH
        use_fallback_paths: Also check well-known locations outside PATH

    Returns:
        Path to the first match, or None when nothing matches
    """
    host_os = host_os or HostOS.current()

    found = shutil.which(name, path=search_path)
    if found:
        return Path(found)

    if not use_fallback_paths:
        return None

    for candidate in fallback_candidates(name, host_os):
        if candidate.is_file():
            logger.debug(f"Found {name} outside PATH at {candidate}")
            return candidate
    return None
