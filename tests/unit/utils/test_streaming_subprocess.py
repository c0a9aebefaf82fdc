"""Tests for streaming subprocess execution."""

import os
import subprocess
import sys
import threading
import time
from pathlib import Path

import pytest

from acp_discovery.utils.subprocess import StreamingSubprocess, run_with_streaming


def _process_gone(pid: int) -> bool:
    """True once `pid` no longer exists or is only an unreaped zombie."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return True
    # Orphans are reaped by init, which may lag behind the kill
    stat = Path(f"/proc/{pid}/stat")
    try:
        return stat.read_text().rsplit(")", 1)[1].split()[0] == "Z"
    except (OSError, IndexError):
        return False


class TestStreamingSubprocess:
    """Test the StreamingSubprocess class."""

    def test_basic_execution(self):
        """Test basic command execution."""
        command = [sys.executable, "-c", "print('hello'); print('world')"]
        runner = StreamingSubprocess(command)

        stdout_lines = []
        exit_code = runner.run(stdout_callback=stdout_lines.append)

        assert exit_code == 0
        assert stdout_lines == ["hello", "world"]
        assert runner.stdout_lines == ["hello", "world"]

    def test_stderr_handling(self):
        """Test stderr is captured separately."""
        command = [
            sys.executable,
            "-c",
            "import sys; print('stdout'); sys.stderr.write('stderr\\n')",
        ]
        runner = StreamingSubprocess(command)

        stdout_lines = []
        stderr_lines = []
        exit_code = runner.run(
            stdout_callback=stdout_lines.append, stderr_callback=stderr_lines.append
        )

        assert exit_code == 0
        assert stdout_lines == ["stdout"]
        assert stderr_lines == ["stderr"]

    def test_line_by_line_streaming(self):
        """Test that output is streamed line by line."""
        command = [
            sys.executable,
            "-c",
            "import time; print('line1', flush=True); time.sleep(0.1); print('line2', flush=True)",
        ]
        runner = StreamingSubprocess(command)

        received = []
        exit_code = runner.run(stdout_callback=lambda line: received.append((time.time(), line)))

        assert exit_code == 0
        assert [line for _, line in received] == ["line1", "line2"]

    def test_exit_code_propagated(self):
        runner = StreamingSubprocess([sys.executable, "-c", "import sys; sys.exit(42)"])
        assert runner.run() == 42

    def test_timeout(self):
        """Test that timeout stops the process."""
        command = [sys.executable, "-c", "import time; time.sleep(10)"]
        runner = StreamingSubprocess(command, timeout=0.5)

        start = time.time()
        with pytest.raises(subprocess.TimeoutExpired):
            runner.run()

        assert time.time() - start < 5
        assert runner._process.poll() is not None

    def test_cancel(self):
        """Test cancelling a running process."""
        command = [sys.executable, "-c", "import time; time.sleep(10)"]
        runner = StreamingSubprocess(command)

        timer = threading.Timer(0.3, runner.cancel)
        timer.start()
        try:
            with pytest.raises(KeyboardInterrupt):
                runner.run()
        finally:
            timer.cancel()

    def test_env_layered_over_environment(self, monkeypatch):
        monkeypatch.setenv("ACP_BASE_VAR", "base")
        command = [
            sys.executable,
            "-c",
            "import os; print(os.environ['ACP_BASE_VAR'], os.environ['ACP_EXTRA_VAR'])",
        ]
        runner = StreamingSubprocess(command, env={"ACP_EXTRA_VAR": "extra"})

        lines = []
        runner.run(stdout_callback=lines.append)

        assert lines == ["base extra"]

    def test_stdin_is_empty(self):
        command = [sys.executable, "-c", "import sys; print(repr(sys.stdin.read()))"]
        runner = StreamingSubprocess(command)

        lines = []
        runner.run(stdout_callback=lines.append)

        assert lines == ["''"]

    def test_invalid_utf8_replaced(self):
        command = [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'ok \\xff\\n')"]
        runner = StreamingSubprocess(command)

        lines = []
        runner.run(stdout_callback=lines.append)

        assert lines == ["ok �"]

    @pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX process groups")
    def test_timeout_stops_pipeline_members(self, tmp_path: Path):
        """Test that a timeout also stops processes started by the child."""
        pidfile = tmp_path / "pid"
        command = ["sh", "-c", f"sh -c 'echo $$ > \"{pidfile}\"; exec sleep 30' | cat"]
        runner = StreamingSubprocess(command, timeout=0.5)

        with pytest.raises(subprocess.TimeoutExpired):
            runner.run()

        pid = int(pidfile.read_text())
        deadline = time.monotonic() + 5
        while not _process_gone(pid) and time.monotonic() < deadline:
            time.sleep(0.05)
        assert _process_gone(pid)

    def test_missing_program(self):
        runner = StreamingSubprocess(["acp-discovery-no-such-program"])
        with pytest.raises(FileNotFoundError):
            runner.run()


def test_run_with_streaming_collects_output():
    command = [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err\\n')"]

    exit_code, stdout_lines, stderr_lines = run_with_streaming(command)

    assert exit_code == 0
    assert stdout_lines == ["out"]
    assert stderr_lines == ["err"]
