"""Host operating system identification."""

from __future__ import annotations

import sys
from enum import Enum


class HostOS(Enum):
    """Operating systems the probe and install tables know about."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    OTHER = "other"

    @classmethod
    def current(cls) -> HostOS:
        """Return the OS of the running interpreter."""
        return cls.from_platform(sys.platform)

    @classmethod
    def from_platform(cls, platform: str) -> HostOS:
        """Map a `sys.platform` style string to a HostOS."""
        if platform.startswith("linux"):
            return cls.LINUX
        if platform == "darwin":
            return cls.MACOS
        if platform in ("win32", "cygwin"):
            return cls.WINDOWS
        return cls.OTHER

    @property
    def is_windows(self) -> bool:
        return self is HostOS.WINDOWS

    @property
    def is_unix(self) -> bool:
        # Linux and macOS share the same probe locations and installers
        return self in (HostOS.LINUX, HostOS.MACOS)
