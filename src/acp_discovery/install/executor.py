"""Run an agent installer with progress reporting.

A single attempt: check prerequisites, run the primary install command while
streaming its output, then confirm the agent is detectable. Failures are
raised as InstallError subclasses and never retried.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import time
from collections.abc import Callable

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.detection.aggregator import detect_sync
from acp_discovery.install.errors import (
    InstallerFailedError,
    InstallPermissionError,
    InstallTimeoutError,
    NetworkError,
    UnsupportedPlatformError,
    VerificationFailedError,
)
from acp_discovery.install.info import install_info
from acp_discovery.install.prereq import can_install
from acp_discovery.install.progress import InstallOptions, InstallProgress, InstallStage
from acp_discovery.utils.logging import SecretRedactor
from acp_discovery.utils.platform import HostOS
from acp_discovery.utils.subprocess import StreamingSubprocess

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[InstallProgress], None]
OutputCallback = Callable[[str, str], None]

NETWORK_MARKERS = ("network", "connection", "resolve", "ETIMEDOUT", "ENOTFOUND")


def _looks_like_network_error(stderr: str) -> bool:
    return any(marker in stderr for marker in NETWORK_MARKERS)


def install(
    kind: AgentKind,
    options: InstallOptions | None = None,
    on_progress: ProgressCallback | None = None,
    on_output: OutputCallback | None = None,
    host_os: HostOS | None = None,
) -> None:
    """Install `kind` using its primary install method.

    Blocks until the installer exits and the agent is verified. Call it from
    synchronous code; async callers should use `asyncio.to_thread(install, ...)`.

    Args:
        kind: Agent to install
        options: Installer settings. Defaults to InstallOptions()
        on_progress: Called with each InstallProgress event
        on_output: Called with (stream, line) for installer output
        host_os: Target OS. Defaults to the running OS

    Raises:
        InstallError: Any subclass, describing why installation failed
        RuntimeError: If called from a thread with a running event loop
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        # Verification runs its own event loop
        raise RuntimeError(
            "install() cannot run inside an event loop; "
            "use asyncio.to_thread(install, ...) instead"
        )

    options = options or InstallOptions()
    host_os = host_os or HostOS.current()
    redactor = SecretRedactor()

    def report(stage: InstallStage) -> None:
        logger.info(f"{kind.display_name}: {stage.value}")
        if on_progress:
            on_progress(InstallProgress(stage=stage, agent=kind))

    def make_line_callback(stream: str) -> Callable[[str], None]:
        def callback(line: str) -> None:
            logger.debug(f"[{kind.value} {stream}] {redactor.redact(line)}")
            if on_output:
                on_output(stream, line)

        return callback

    report(InstallStage.STARTED)

    report(InstallStage.CHECKING_PREREQUISITES)
    can_install(kind, host_os)

    info = install_info(kind, host_os)
    command = info.primary.command
    if command is None:
        raise UnsupportedPlatformError(kind, info.docs_url)

    report(InstallStage.INSTALLING)
    runner = StreamingSubprocess(
        command.argv,
        env=dict(command.env_vars) or None,
        timeout=options.timeout,
    )
    try:
        exit_code = runner.run(
            stdout_callback=make_line_callback("stdout"),
            stderr_callback=make_line_callback("stderr"),
        )
    except subprocess.TimeoutExpired as e:
        raise InstallTimeoutError(options.timeout) from e
    except PermissionError as e:
        raise InstallPermissionError(str(e)) from e
    except OSError as e:
        raise InstallerFailedError(str(e), fix="Check the command and try again") from e

    if exit_code != 0:
        stdout = "\n".join(runner.stdout_lines)
        stderr = "\n".join(runner.stderr_lines)
        if _looks_like_network_error(stderr):
            raise NetworkError("Network error during installation", stderr=stderr)
        raise InstallerFailedError(
            f"Installer exited with code {exit_code}",
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )

    report(InstallStage.VERIFYING)
    if options.verify_delay > 0:
        time.sleep(options.verify_delay)

    status = detect_sync(kind, host_os=host_os)
    if not status.is_usable:
        raise VerificationFailedError(kind)

    report(InstallStage.COMPLETED)
