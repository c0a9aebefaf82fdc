"""Shared pytest fixtures."""

import os
from pathlib import Path

import pytest

from acp_discovery.detection.options import DetectOptions


class AgentBin:
    """A private bin directory populated with fake agent executables."""

    def __init__(self, directory: Path) -> None:
        self.dir = directory

    def script(self, name: str, body: str, mode: int = 0o755) -> Path:
        """Write a /bin/sh script called `name`."""
        path = self.dir / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(mode)
        return path

    def raw(self, name: str, content: bytes, mode: int = 0o755) -> Path:
        """Write an arbitrary file called `name`."""
        path = self.dir / name
        path.write_bytes(content)
        path.chmod(mode)
        return path

    def options(self, timeout: float = 5.0, **kwargs) -> DetectOptions:
        """Probe options that only see this directory."""
        return DetectOptions(
            timeout=timeout,
            search_path=str(self.dir),
            use_fallback_paths=False,
            **kwargs,
        )


@pytest.fixture
def agent_bin(tmp_path: Path) -> AgentBin:
    """Empty bin directory for fake agents."""
    directory = tmp_path / "bin"
    directory.mkdir()
    return AgentBin(directory)


@pytest.fixture
def process_gone():
    """Return a checker telling whether a pid no longer exists."""

    def check(pid: int) -> bool:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return True
        return False

    return check
