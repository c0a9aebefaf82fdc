"""Probe a single agent: locate it, run its version command, classify.

Every fault below this boundary (spawn errors, hangs, non-zero exits,
unparseable output) is turned into a DetectionStatus. Nothing raised by the
child process escapes `probe`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
from pathlib import Path

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.agents.registry import probe_command
from acp_discovery.detection.options import DetectOptions
from acp_discovery.detection.parser import parse_version
from acp_discovery.detection.path_finder import find_executable
from acp_discovery.detection.status import (
    DetectionStatus,
    Found,
    FoundButUnresponsive,
    NotFound,
    ProbeFailed,
)
from acp_discovery.utils.platform import HostOS

logger = logging.getLogger(__name__)

# Seconds to wait for a killed child to be reaped
KILL_WAIT_SECONDS = 5.0

_INSTALL_METHOD_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("npm", (".npm", "node_modules")),
    ("cargo", (".cargo",)),
    ("brew", ("homebrew", "linuxbrew")),
    ("mise", ("mise",)),
)


def detect_install_method(path: Path) -> str | None:
    """Guess how an executable was installed from where it lives."""
    text = str(path)
    for method, markers in _INSTALL_METHOD_MARKERS:
        if any(marker in text for marker in markers):
            return method
    return None


def _first_line(text: str, limit: int = 200) -> str:
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line[:limit]
    return ""


async def _spawn(path: Path, version_flag: str) -> asyncio.subprocess.Process:
    kwargs = {}
    if os.name == "posix":
        # Own session so a timeout can kill the whole process group
        kwargs["start_new_session"] = True
    return await asyncio.create_subprocess_exec(
        str(path),
        version_flag,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        **kwargs,
    )


def _kill(process: asyncio.subprocess.Process) -> None:
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except PermissionError:
            logger.debug(f"Cannot signal process group {process.pid}, killing leader only")
    with contextlib.suppress(ProcessLookupError):
        process.kill()


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """Kill `process` and anything left in its process group, then reap it."""
    if process.returncode is not None:
        if os.name == "posix":
            # The leader may be gone while background children still hold the pipes
            with contextlib.suppress(ProcessLookupError, PermissionError):
                os.killpg(process.pid, signal.SIGKILL)
        return
    _kill(process)
    try:
        await asyncio.wait_for(process.wait(), timeout=KILL_WAIT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning(f"Process {process.pid} did not exit after being killed")


async def run_version_command(
    path: Path, version_flag: str, timeout: float
) -> tuple[int, str, str]:
    """Run `<path> <version_flag>` and capture its output.

    Args:
        path: Executable to run
        version_flag: Single argument passed to the executable
        timeout: Seconds before the process is killed

    Returns:
        Tuple of (exit_code, stdout, stderr)

    Raises:
        OSError: If the process cannot be started
        asyncio.TimeoutError: If the process outlives `timeout`
    """
    process = await _spawn(path, version_flag)
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    finally:
        # Runs on timeout and cancellation too, so no child outlives the probe
        await _terminate(process)
    assert process.returncode is not None
    return (
        process.returncode,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )


async def probe(
    kind: AgentKind,
    host_os: HostOS | None = None,
    options: DetectOptions | None = None,
) -> DetectionStatus:
    """Detect one agent and classify the outcome.

    Args:
        kind: Agent to probe
        host_os: OS whose lookup conventions apply. Defaults to the running OS
        options: Probe settings. Defaults to DetectOptions()

    Returns:
        The DetectionStatus for `kind`
    """
    options = options or DetectOptions()
    host_os = host_os or HostOS.current()
    executable_name, version_flag = probe_command(kind)

    path = find_executable(
        executable_name,
        host_os=host_os,
        search_path=options.search_path,
        use_fallback_paths=options.use_fallback_paths,
    )
    if path is None:
        logger.debug(f"{kind.display_name}: '{executable_name}' not found")
        return NotFound()

    install_method = detect_install_method(path)
    if options.skip_version:
        return Found(executable=path, install_method=install_method)

    try:
        exit_code, stdout, stderr = await run_version_command(path, version_flag, options.timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{kind.display_name}: {path} timed out after {options.timeout:g}s")
        return FoundButUnresponsive(executable=path, error=f"timed out after {options.timeout:g}s")
    except PermissionError as e:
        logger.warning(f"{kind.display_name}: permission denied running {path}")
        return ProbeFailed(reason=f"permission denied running {path}: {e.strerror or e}")
    except OSError as e:
        logger.warning(f"{kind.display_name}: could not start {path}: {e}")
        return ProbeFailed(reason=f"could not start {path}: {e.strerror or e}")

    if exit_code != 0:
        detail = _first_line(stderr) or _first_line(stdout)
        error = f"exited with code {exit_code}"
        if detail:
            error = f"{error}: {detail}"
        logger.info(f"{kind.display_name}: {path} {error}")
        return FoundButUnresponsive(executable=path, error=error)

    # Some tools print their version to stderr
    raw_text = stdout.strip() or stderr.strip()
    version = parse_version(raw_text)
    if version is None:
        logger.info(f"{kind.display_name}: unrecognized version output {raw_text!r}")
    else:
        logger.debug(f"{kind.display_name}: version {version} at {path}")
    return Found(
        executable=path,
        raw_version_text=raw_text,
        parsed_version=version,
        install_method=install_method,
    )
