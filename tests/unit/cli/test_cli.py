"""Unit tests for CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from acp_discovery import __version__
from acp_discovery.__main__ import app
from acp_discovery.agents.kinds import AgentKind
from acp_discovery.detection.status import Found, FoundButUnresponsive, NotFound, ProbeFailed
from acp_discovery.detection.version import Version
from acp_discovery.install.errors import InstallTimeoutError, PrerequisiteMissingError
from acp_discovery.install.info import install_info, manual_install_info
from acp_discovery.install.progress import InstallProgress, InstallStage
from acp_discovery.utils.exit_codes import ExitCode
from acp_discovery.utils.platform import HostOS

runner = CliRunner()

CODEX_PATH = Path("/usr/local/bin/codex")

MIXED_RESULTS = {
    AgentKind.CLAUDE_CODE: NotFound(),
    AgentKind.CODEX: Found(CODEX_PATH, "codex-cli 3.4.0", Version(3, 4, 0), None),
    AgentKind.OPENCODE: FoundButUnresponsive(Path("/usr/bin/opencode"), "exited with code 127"),
    AgentKind.GEMINI: ProbeFailed("permission denied running /usr/bin/gemini"),
}


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a developer's .acp-discovery/config.json out of the tests."""
    monkeypatch.chdir(tmp_path)


class TestMainCLI:
    """Test main CLI functionality."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "acp-discovery" in result.stdout
        assert "Detect, version-check, and install" in result.stdout

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("log_level", ["DEBUG", "info", "WARNING"])
    def test_log_level_option(self, log_level):
        with (
            patch("acp_discovery.__main__.setup_logging") as mock_setup,
            patch("acp_discovery.cli.detect.detect_all_sync", return_value=MIXED_RESULTS),
        ):
            result = runner.invoke(app, ["--log-level", log_level, "detect"])
        assert result.exit_code == 0
        mock_setup.assert_called_once_with(log_level.upper())

    def test_invalid_log_level(self):
        result = runner.invoke(app, ["--log-level", "LOUD", "detect"])
        assert result.exit_code == 2

    def test_log_level_from_config(self, tmp_path):
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"logging": {"level": "ERROR"}}))
        with (
            patch("acp_discovery.__main__.setup_logging") as mock_setup,
            patch("acp_discovery.cli.detect.detect_all_sync", return_value=MIXED_RESULTS),
        ):
            result = runner.invoke(app, ["--config", str(config), "detect"])
        assert result.exit_code == 0
        mock_setup.assert_called_once_with("ERROR")

    @pytest.mark.parametrize("command", ["detect", "info", "install"])
    def test_command_registered(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0
        assert command in result.stdout


class TestDetectCommand:
    def test_table_output(self):
        with patch("acp_discovery.cli.detect.detect_all_sync", return_value=MIXED_RESULTS):
            result = runner.invoke(app, ["detect"])

        assert result.exit_code == 0
        assert "Codex" in result.output
        assert "3.4.0" in result.output
        assert "Installed" in result.output
        assert "Broken" in result.output

    def test_json_output(self):
        with patch("acp_discovery.cli.detect.detect_all_sync", return_value=MIXED_RESULTS):
            result = runner.invoke(app, ["detect", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert list(data) == ["claude-code", "codex", "opencode", "gemini"]
        assert data["codex"]["version"] == "3.4.0"
        assert data["claude-code"] == {"status": "not_found"}
        assert data["opencode"]["status"] == "unresponsive"
        assert data["gemini"]["status"] == "probe_failed"

    def test_options_forwarded(self):
        with patch(
            "acp_discovery.cli.detect.detect_all_sync", return_value=MIXED_RESULTS
        ) as mock_detect:
            result = runner.invoke(app, ["detect", "--timeout", "2.5", "--skip-version"])

        assert result.exit_code == 0
        options = mock_detect.call_args.kwargs["options"]
        assert options.timeout == 2.5
        assert options.skip_version is True

    def test_single_agent_installed(self):
        status = Found(CODEX_PATH, "codex-cli 3.4.0", Version(3, 4, 0))
        with patch("acp_discovery.cli.detect.detect_sync", return_value=status) as mock_detect:
            result = runner.invoke(app, ["detect", "codex", "--json"])

        assert result.exit_code == 0
        assert mock_detect.call_args.args[0] is AgentKind.CODEX
        assert list(json.loads(result.stdout)) == ["codex"]

    def test_single_agent_missing(self):
        with patch("acp_discovery.cli.detect.detect_sync", return_value=NotFound()):
            result = runner.invoke(app, ["detect", "gemini"])

        assert result.exit_code == ExitCode.NOT_INSTALLED

    def test_unknown_agent(self):
        result = runner.invoke(app, ["detect", "cursor"])
        assert result.exit_code == 2
        assert "Unknown agent" in result.output

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "broken.json"
        config.write_text("{ not json")

        result = runner.invoke(app, ["--config", str(config), "detect"])

        assert result.exit_code == ExitCode.INVALID_CONFIG
        assert "Configuration error" in result.output


class TestInfoCommand:
    def test_panel_output(self):
        result = runner.invoke(app, ["info", "gemini", "--os", "linux"])

        assert result.exit_code == 0
        assert "npm install -g @google/gemini-cli" in result.output
        assert "Node.js 20+" in result.output

    def test_json_output(self):
        result = runner.invoke(app, ["info", "claude", "--os", "windows", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["agent"] == "claude-code"
        assert data["os"] == "windows"
        assert data["primary"]["raw_command"] == "irm https://claude.ai/install.ps1 | iex"

    def test_manual_platform(self):
        result = runner.invoke(app, ["info", "codex", "--os", "other", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["manual"] is True

    def test_unknown_os(self):
        result = runner.invoke(app, ["info", "codex", "--os", "plan9"])
        assert result.exit_code == 2


class TestInstallCommand:
    @pytest.fixture
    def linux_recipes(self):
        with patch(
            "acp_discovery.cli.install.install_info",
            side_effect=lambda kind: install_info(kind, HostOS.LINUX),
        ):
            yield

    def test_already_installed(self, linux_recipes):
        status = Found(CODEX_PATH, "codex-cli 3.4.0", Version(3, 4, 0))
        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=status),
            patch("acp_discovery.cli.install.install") as mock_install,
        ):
            result = runner.invoke(app, ["install", "codex"])

        assert result.exit_code == 0
        assert "already installed" in result.output
        mock_install.assert_not_called()

    def test_install_with_yes(self, linux_recipes):
        def fake_install(kind, options=None, on_progress=None, on_output=None):
            on_progress(InstallProgress(InstallStage.INSTALLING, kind))
            on_output("stdout", "added 1 package")

        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=NotFound()),
            patch("acp_discovery.cli.install.install", side_effect=fake_install) as mock_install,
        ):
            result = runner.invoke(app, ["install", "codex", "--yes", "--timeout", "60"])

        assert result.exit_code == 0
        assert "added 1 package" in result.output
        assert "Codex is installed" in result.output
        assert mock_install.call_args.kwargs["options"].timeout == 60

    def test_force_reinstall(self, linux_recipes):
        status = Found(CODEX_PATH, "codex-cli 3.4.0", Version(3, 4, 0))
        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=status),
            patch("acp_discovery.cli.install.install") as mock_install,
        ):
            result = runner.invoke(app, ["install", "codex", "--force", "--yes"])

        assert result.exit_code == 0
        mock_install.assert_called_once()

    def test_declined_confirmation(self, linux_recipes):
        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=NotFound()),
            patch("acp_discovery.cli.install.install") as mock_install,
        ):
            result = runner.invoke(app, ["install", "gemini"], input="n\n")

        assert result.exit_code == 0
        assert "cancelled" in result.output
        mock_install.assert_not_called()

    @pytest.mark.parametrize(
        "error, exit_code",
        [
            (PrerequisiteMissingError("Node.js 18+", "https://nodejs.org"), ExitCode.MISSING_DEPS),
            (InstallTimeoutError(300), ExitCode.TIMEOUT),
        ],
    )
    def test_install_errors(self, linux_recipes, error, exit_code):
        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=NotFound()),
            patch("acp_discovery.cli.install.install", side_effect=error),
        ):
            result = runner.invoke(app, ["install", "codex", "--yes"])

        assert result.exit_code == exit_code
        assert "Fix:" in result.output

    def test_manual_platform(self):
        with (
            patch("acp_discovery.cli.install.detect_sync", return_value=NotFound()),
            patch(
                "acp_discovery.cli.install.install_info",
                side_effect=lambda kind: manual_install_info(kind, HostOS.OTHER),
            ),
            patch("acp_discovery.cli.install.install") as mock_install,
        ):
            result = runner.invoke(app, ["install", "opencode", "--yes"])

        assert result.exit_code == ExitCode.INSTALL_FAILED
        mock_install.assert_not_called()
