"""
arduinokit CLI argument parser.

This module implements the command-line interface for arduinokit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from arduinokit import __version__
from arduinokit.core.exceptions import ArduinoKitError

logger = logging.getLogger(__name__)


class CLI:
    """arduinokit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="arduinokit",
            description="arduinokit - provision the arduino-cli binary on demand",
            epilog='Use "arduinokit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"arduinokit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./arduinokit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_info_command(subparsers)
        self._add_run_command(subparsers)
        self._add_install_cores_command(subparsers)
        self._add_install_libraries_command(subparsers)

        return parser

    def _add_target_arguments(self, parser: argparse.ArgumentParser):
        """Add version/platform override options shared by several commands."""
        parser.add_argument(
            "--cli-version",
            metavar="VERSION",
            help="arduino-cli version to use (overrides config, e.g. 0.35.2)",
        )
        parser.add_argument(
            "--os",
            dest="os_name",
            metavar="NAME",
            help="Override detected operating system (e.g. Linux, Darwin, Windows)",
        )
        parser.add_argument(
            "--arch",
            metavar="ARCH",
            help="Override detected CPU architecture (e.g. x86_64, aarch64, armv7l)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Download and cache arduino-cli",
            description=(
                "Download arduino-cli for the current platform unless already "
                "cached, then print the absolute path of the executable"
            ),
        )
        self._add_target_arguments(parser)

    def _add_info_command(self, subparsers):
        """Add 'info' subcommand."""
        parser = subparsers.add_parser(
            "info",
            help="Show platform, cache path and download URL",
            description="Show where arduino-cli is cached and fetched from (no network access)",
        )
        self._add_target_arguments(parser)

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Run arduino-cli with arguments",
            description=(
                "Install arduino-cli if needed and run it, streaming its output. "
                "Exits with arduino-cli's exit code."
            ),
        )
        self._add_target_arguments(parser)
        parser.add_argument(
            "--working-dir",
            type=Path,
            metavar="DIR",
            help="Directory to run arduino-cli in (default: project root)",
        )
        parser.add_argument(
            "--env",
            action="append",
            metavar="KEY=VALUE",
            help="Environment variables to set (can be used multiple times)",
        )
        parser.add_argument(
            "cli_args",
            nargs=argparse.REMAINDER,
            metavar="ARGS",
            help="Arguments passed to arduino-cli (after '--')",
        )

    def _add_install_cores_command(self, subparsers):
        """Add 'install-cores' subcommand."""
        parser = subparsers.add_parser(
            "install-cores",
            help="Install board cores with arduino-cli",
            description=(
                "Update the board index and install the configured cores "
                "(default: arduino:avr)"
            ),
        )
        self._add_target_arguments(parser)
        parser.add_argument(
            "--core",
            action="append",
            metavar="CORE",
            help="Core to install, e.g. esp32:esp32 (overrides config, repeatable)",
        )

    def _add_install_libraries_command(self, subparsers):
        """Add 'install-libraries' subcommand."""
        parser = subparsers.add_parser(
            "install-libraries",
            help="Install libraries with arduino-cli",
            description=(
                "Update the library index and install the configured libraries. "
                "Pin versions as NAME@VERSION."
            ),
        )
        self._add_target_arguments(parser)
        parser.add_argument(
            "--library",
            action="append",
            metavar="LIBRARY",
            help="Library to install, e.g. Servo@1.2.1 (overrides config, repeatable)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except ArduinoKitError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        # Command module mapping
        command_map = {
            "install": "arduinokit.cli.commands.install",
            "info": "arduinokit.cli.commands.info",
            "run": "arduinokit.cli.commands.run",
            "install-cores": "arduinokit.cli.commands.install_cores",
            "install-libraries": "arduinokit.cli.commands.install_libraries",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
