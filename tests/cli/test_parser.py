"""
Tests for CLI argument parser.
"""

import pytest
from pathlib import Path

from arduinokit.cli.parser import CLI


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        """Test CLI can be created."""
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "arduinokit" in capsys.readouterr().out

    def test_global_options(self, tmp_path):
        """Test global options are parsed before the command."""
        args = CLI().parse_args(
            [
                "-v",
                "--config",
                str(tmp_path / "ci.yaml"),
                "--project-root",
                str(tmp_path),
                "info",
            ]
        )

        assert args.verbose is True
        assert args.config == tmp_path / "ci.yaml"
        assert args.project_root == tmp_path


class TestInstallCommand:
    """Test install command parsing."""

    def test_install_basic(self):
        args = CLI().parse_args(["install"])

        assert args.command == "install"
        assert args.cli_version is None
        assert args.os_name is None
        assert args.arch is None

    def test_install_with_overrides(self):
        """Test version and platform overrides."""
        args = CLI().parse_args(
            ["install", "--cli-version", "1.0.4", "--os", "Darwin", "--arch", "arm64"]
        )

        assert args.cli_version == "1.0.4"
        assert args.os_name == "Darwin"
        assert args.arch == "arm64"


class TestRunCommand:
    """Test run command parsing."""

    def test_run_collects_cli_args(self):
        """Test everything after '--' is kept for arduino-cli."""
        args = CLI().parse_args(["run", "--", "compile", "--fqbn", "arduino:avr:uno"])

        assert args.command == "run"
        assert args.cli_args[-3:] == ["compile", "--fqbn", "arduino:avr:uno"]

    def test_run_options(self, tmp_path):
        """Test run-specific options."""
        args = CLI().parse_args(
            [
                "run",
                "--working-dir",
                str(tmp_path),
                "--env",
                "A=1",
                "--env",
                "B=2",
                "--",
                "version",
            ]
        )

        assert args.working_dir == Path(tmp_path)
        assert args.env == ["A=1", "B=2"]
        assert args.cli_args[-1] == "version"

    def test_unknown_command(self):
        """Test unknown commands are rejected by argparse."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["compile"])


class TestPackageCommands:
    """Test install-cores and install-libraries parsing."""

    def test_install_cores_repeatable(self):
        args = CLI().parse_args(
            ["install-cores", "--core", "arduino:avr", "--core", "esp32:esp32"]
        )

        assert args.command == "install-cores"
        assert args.core == ["arduino:avr", "esp32:esp32"]

    def test_install_cores_default(self):
        """Test no --core leaves the choice to the config."""
        assert CLI().parse_args(["install-cores"]).core is None

    def test_install_libraries(self):
        args = CLI().parse_args(
            ["install-libraries", "--library", "ArduinoJson@6.21.3", "--os", "Linux"]
        )

        assert args.command == "install-libraries"
        assert args.library == ["ArduinoJson@6.21.3"]
        assert args.os_name == "Linux"
