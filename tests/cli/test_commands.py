"""
Tests for CLI command handlers.

Each test works on a project directory whose arduinokit.yaml pins the
cache root and platform, so no command reaches the network or the host.
"""

import pytest
import responses
from unittest.mock import patch

from arduinokit.cli.parser import CLI
from arduinokit.config.parser import CONFIG_FILE_NAME
from arduinokit.core.executor import ExecutionResult

from tests.fixtures.archives import BINARY_CONTENT, corrupt_tar_gz, tar_entry

RELEASE_URL = (
    "https://github.com/arduino/arduino-cli/releases/download/"
    "v0.35.2/arduino-cli_0.35.2_Linux_64bit.tar.gz"
)
CACHED_BINARY_DIR = ("arduino", "arduino-cli", "0.35.2", "Linux_64bit")


@pytest.fixture
def project(tmp_path):
    """Project root configured for Linux_64bit with a local cache."""
    root = tmp_path / "project"
    root.mkdir()
    (root / CONFIG_FILE_NAME).write_text(
        "cache:\n  root: .cache\nplatform:\n  os: Linux\n  arch: x86_64\n"
    )
    return root


@pytest.fixture
def cached_binary(project):
    """Pre-populated cache entry for the default CLI version."""
    binary_dir = project.joinpath(".cache", *CACHED_BINARY_DIR)
    binary_dir.mkdir(parents=True)
    binary = binary_dir / "arduino-cli"
    binary.write_bytes(b"binary")
    return binary


def _run(project, *args):
    return CLI().run(["--project-root", str(project), *args])


class TestInstallCommand:
    """Test 'install'."""

    @responses.activate
    def test_prints_cached_path(self, project, cached_binary, capsys):
        """Test a cached binary is reported without network access."""
        result = _run(project, "install")

        assert result == 0
        assert capsys.readouterr().out.strip() == str(cached_binary.resolve())
        assert len(responses.calls) == 0

    @responses.activate
    def test_download_failure(self, project):
        """Test a failed download exits with 1."""
        responses.add(responses.GET, RELEASE_URL, status=404)

        assert _run(project, "install") == 1

    @responses.activate
    def test_corrupt_download(self, project, tmp_path):
        """Test a corrupted archive is reported as an error, not a traceback."""
        archive = corrupt_tar_gz(
            tmp_path / "download.tar.gz", tar_entry("arduino-cli", BINARY_CONTENT)
        )
        responses.add(responses.GET, RELEASE_URL, body=archive.read_bytes())

        assert _run(project, "install") == 1

    def test_unsupported_platform(self, project):
        """Test platform errors are reported as exit code 1."""
        assert _run(project, "install", "--os", "Plan9") == 1


class TestInfoCommand:
    """Test 'info'."""

    def test_not_cached(self, project, capsys):
        """Test info lists URL and cache path without creating anything."""
        result = _run(project, "info", "--cli-version", "1.0.4")

        out = capsys.readouterr().out
        assert result == 0
        assert "Platform: Linux_64bit" in out
        assert (
            "Download URL: https://github.com/arduino/arduino-cli/releases/download/"
            "v1.0.4/arduino-cli_1.0.4_Linux_64bit.tar.gz"
        ) in out
        assert "Cached: no" in out
        assert not (project / ".cache").exists()

    def test_cached(self, project, cached_binary, capsys):
        result = _run(project, "info")

        out = capsys.readouterr().out
        assert result == 0
        assert "Cached: yes" in out
        assert f"Cache path: {cached_binary.resolve()}" in out

    def test_platform_override(self, project, capsys):
        """Test command-line platform options win over the config file."""
        _run(project, "info", "--os", "Windows", "--arch", "AMD64")

        out = capsys.readouterr().out
        assert "Platform: Windows_64bit" in out
        assert "Executable: arduino-cli.exe" in out


class TestRunCommand:
    """Test 'run'."""

    def test_runs_cached_binary(self, project, cached_binary):
        """Test arguments, env and working dir are handed to the executor."""
        with patch("arduinokit.cli.commands.run.CliExecutor") as mock_executor:
            mock_executor.return_value.run.return_value = ExecutionResult(
                [str(cached_binary), "version"], 0
            )

            result = _run(project, "run", "--env", "A=1", "--", "version")

        assert result == 0
        mock_executor.assert_called_once_with(cached_binary.resolve())
        working_dir, cli_args, extra_env = mock_executor.return_value.run.call_args[0]
        assert working_dir == project.resolve()
        assert cli_args == ["version"]
        assert extra_env == {"A": "1"}

    def test_propagates_exit_code(self, project, cached_binary, tmp_path):
        """Test arduino-cli's exit code becomes ours."""
        with patch("arduinokit.cli.commands.run.CliExecutor") as mock_executor:
            mock_executor.return_value.run.return_value = ExecutionResult(
                [str(cached_binary), "compile"], 2
            )

            result = _run(
                project, "run", "--working-dir", str(tmp_path), "--", "compile"
            )

        assert result == 2
        assert mock_executor.return_value.run.call_args[0][0] == tmp_path

    def test_requires_arguments(self, project, capsys):
        """Test run without arduino-cli arguments is a usage error."""
        assert _run(project, "run") == 1
        assert "No arguments" in capsys.readouterr().err

    def test_invalid_env(self, project, capsys):
        """Test malformed --env values are rejected before installing."""
        assert _run(project, "run", "--env", "NOVALUE", "--", "version") == 1
        assert "KEY=VALUE" in capsys.readouterr().err


def _executor_calls(mock_executor):
    return [c.args[1] for c in mock_executor.return_value.run.call_args_list]


def _ok(*args, **kwargs):
    return ExecutionResult(["arduino-cli"], 0)


class TestInstallCoresCommand:
    """Test 'install-cores'."""

    def test_configured_cores(self, project, cached_binary):
        """Test cores from arduinokit.yaml are installed after the index update."""
        with open(project / CONFIG_FILE_NAME, "a") as f:
            f.write("cores:\n  - arduino:avr\n  - esp32:esp32\n")

        with patch(
            "arduinokit.cli.commands.install_cores.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.side_effect = _ok

            result = _run(project, "install-cores")

        assert result == 0
        mock_executor.assert_called_once_with(cached_binary.resolve())
        assert _executor_calls(mock_executor) == [
            ["core", "update-index"],
            ["core", "install", "arduino:avr"],
            ["core", "install", "esp32:esp32"],
        ]
        working_dir = mock_executor.return_value.run.call_args.args[0]
        assert working_dir == project.resolve()

    def test_default_core(self, project, cached_binary):
        """Test arduino:avr is installed when no cores are configured."""
        with patch(
            "arduinokit.cli.commands.install_cores.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.side_effect = _ok

            assert _run(project, "install-cores") == 0

        assert _executor_calls(mock_executor)[-1] == ["core", "install", "arduino:avr"]

    def test_command_line_cores_win(self, project, cached_binary):
        """Test --core replaces the configured list."""
        with open(project / CONFIG_FILE_NAME, "a") as f:
            f.write("cores:\n  - arduino:avr\n")

        with patch(
            "arduinokit.cli.commands.install_cores.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.side_effect = _ok

            _run(project, "install-cores", "--core", "rp2040:rp2040")

        assert _executor_calls(mock_executor)[1:] == [
            ["core", "install", "rp2040:rp2040"]
        ]

    def test_failure_exits_1(self, project, cached_binary):
        """Test a failing arduino-cli step is reported as exit code 1."""
        with patch(
            "arduinokit.cli.commands.install_cores.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.return_value = ExecutionResult(
                ["arduino-cli", "core", "update-index"], 1, output="network down"
            )

            assert _run(project, "install-cores") == 1

        assert len(_executor_calls(mock_executor)) == 1


class TestInstallLibrariesCommand:
    """Test 'install-libraries'."""

    def test_configured_libraries(self, project, cached_binary):
        """Test libraries from arduinokit.yaml are installed, versions kept."""
        with open(project / CONFIG_FILE_NAME, "a") as f:
            f.write("libraries:\n  - Servo\n  - ArduinoJson@6.21.3\n")

        with patch(
            "arduinokit.cli.commands.install_libraries.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.side_effect = _ok

            result = _run(project, "install-libraries")

        assert result == 0
        assert _executor_calls(mock_executor) == [
            ["lib", "update-index"],
            ["lib", "install", "Servo"],
            ["lib", "install", "ArduinoJson@6.21.3"],
        ]

    @responses.activate
    def test_nothing_configured(self, project):
        """Test no libraries skips both the download and arduino-cli."""
        with patch(
            "arduinokit.cli.commands.install_libraries.CliExecutor"
        ) as mock_executor:
            result = _run(project, "install-libraries")

        assert result == 0
        mock_executor.assert_not_called()
        assert len(responses.calls) == 0
        assert not (project / ".cache").exists()

    def test_command_line_libraries(self, project, cached_binary):
        """Test --library entries are installed."""
        with patch(
            "arduinokit.cli.commands.install_libraries.CliExecutor"
        ) as mock_executor:
            mock_executor.return_value.run.side_effect = _ok

            _run(project, "install-libraries", "--library", "Adafruit NeoPixel")

        assert _executor_calls(mock_executor)[-1] == [
            "lib",
            "install",
            "Adafruit NeoPixel",
        ]
