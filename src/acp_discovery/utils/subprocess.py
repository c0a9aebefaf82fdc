"""Subprocess execution with line-by-line output streaming.

Used by the installer, which needs to show installer output while it runs
and to stop long-running installers cleanly on timeout or cancel.
"""

import logging
import os
import signal
import subprocess
import threading
import time
from collections.abc import Callable
from typing import IO, Optional

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]

# Seconds given to a terminated process before it is killed
TERMINATE_GRACE_SECONDS = 5.0


class StreamingSubprocess:
    """Run a command while streaming its stdout and stderr lines.

    Provides:
    - Per-line callbacks for stdout and stderr, fed from reader threads
    - Timeout support with terminate-then-kill cleanup of the process group
    - Thread-safe cancellation
    """

    def __init__(
        self,
        command: list[str],
        env: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize a streaming subprocess.

        Args:
            command: Command and arguments to execute
            env: Extra environment variables layered over the current environment
            timeout: Maximum execution time in seconds
        """
        self.command = command
        self.env = env
        self.timeout = timeout
        self._process: Optional[subprocess.Popen[str]] = None
        self._cancelled = threading.Event()
        self._threads: list[threading.Thread] = []
        self.stdout_lines: list[str] = []
        self.stderr_lines: list[str] = []

    def run(
        self,
        stdout_callback: Optional[LineCallback] = None,
        stderr_callback: Optional[LineCallback] = None,
    ) -> int:
        """Execute the command and block until it exits.

        Args:
            stdout_callback: Function called for each stdout line
            stderr_callback: Function called for each stderr line

        Returns:
            Exit code of the process

        Raises:
            OSError: If the process cannot be started
            subprocess.TimeoutExpired: If the timeout is exceeded
            KeyboardInterrupt: If `cancel()` was called while running
        """
        logger.debug(f"Starting subprocess: {' '.join(self.command)}")
        env = {**os.environ, **self.env} if self.env else None

        self._process = subprocess.Popen(
            self.command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            env=env,
            bufsize=1,  # Line buffered
            # Own session so a timeout can stop the whole pipeline
            start_new_session=os.name == "posix",
        )
        try:
            self._threads = [
                threading.Thread(
                    target=self._stream_output,
                    args=(self._process.stdout, self.stdout_lines, stdout_callback),
                    daemon=True,
                ),
                threading.Thread(
                    target=self._stream_output,
                    args=(self._process.stderr, self.stderr_lines, stderr_callback),
                    daemon=True,
                ),
            ]
            for thread in self._threads:
                thread.start()

            start_time = time.monotonic()
            while True:
                try:
                    returncode = self._process.wait(timeout=0.1)
                    break
                except subprocess.TimeoutExpired:
                    if self._cancelled.is_set():
                        self._stop()
                        raise KeyboardInterrupt("Process cancelled by user")
                    if self.timeout and (time.monotonic() - start_time) > self.timeout:
                        self._stop()
                        raise subprocess.TimeoutExpired(self.command, self.timeout)

            for thread in self._threads:
                thread.join(timeout=1)

            logger.debug(f"Subprocess exited with code: {returncode}")
            return returncode
        finally:
            self._cleanup()

    def _stream_output(
        self,
        pipe: IO[str],
        sink: list[str],
        callback: Optional[LineCallback],
    ) -> None:
        try:
            for line in pipe:
                line = line.rstrip("\n\r")
                sink.append(line)
                if callback:
                    callback(line)
        except (OSError, ValueError) as e:
            # Pipe closed underneath us during cleanup
            logger.debug(f"Stopped reading subprocess output: {e}")
        finally:
            pipe.close()

    def cancel(self) -> None:
        """Ask the running process to stop."""
        self._cancelled.set()

    def _signal(self, sig: int) -> None:
        """Send `sig` to the process group on POSIX, else to the child."""
        assert self._process is not None
        if os.name == "posix":
            try:
                os.killpg(self._process.pid, sig)
                return
            except ProcessLookupError:
                return
            except PermissionError:
                logger.debug(f"Cannot signal process group {self._process.pid}")
        if self._process.poll() is None:
            self._process.send_signal(sig)

    def _stop(self) -> None:
        assert self._process is not None
        self._signal(signal.SIGTERM)
        try:
            self._process.wait(timeout=TERMINATE_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            self._signal(signal.SIGKILL if os.name == "posix" else signal.SIGTERM)
            self._process.wait()
        if os.name == "posix":
            # Pipeline members may outlive the leader
            self._signal(signal.SIGKILL)

    def _cleanup(self) -> None:
        if self._process is None:
            return
        if self._process.poll() is None:
            self._stop()
        for thread in self._threads:
            thread.join(timeout=1)


def run_with_streaming(
    command: list[str],
    env: Optional[dict[str, str]] = None,
    timeout: Optional[float] = None,
    stdout_callback: Optional[LineCallback] = None,
    stderr_callback: Optional[LineCallback] = None,
) -> tuple[int, list[str], list[str]]:
    """Run a command with streaming callbacks and collect its output.

    Returns:
        Tuple of (exit_code, stdout_lines, stderr_lines)

    Raises:
        OSError: If the process cannot be started
        subprocess.TimeoutExpired: If the timeout is exceeded
    """
    runner = StreamingSubprocess(command, env=env, timeout=timeout)
    exit_code = runner.run(stdout_callback, stderr_callback)
    return exit_code, runner.stdout_lines, runner.stderr_lines
