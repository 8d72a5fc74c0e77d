"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from arduinokit.config.parser import ArduinoKitConfig, load_config
from arduinokit.core.platform import Platform

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


@dataclass
class CommandTarget:
    """Resolved tool, version and platform for a command invocation."""

    config: ArduinoKitConfig
    tool: str
    version: str
    platform: Platform


def resolve_target(args) -> CommandTarget:
    """
    Load configuration and apply command-line overrides.

    Args:
        args: Parsed arguments (config, project_root, cli_version, os_name, arch)

    Returns:
        CommandTarget for the command

    Raises:
        ConfigError: If the configuration file is invalid
        UnsupportedPlatformError: If the platform cannot be resolved
    """
    project_root = resolve_project_root(getattr(args, "project_root", None))
    config = load_config(project_root, getattr(args, "config", None))

    version = getattr(args, "cli_version", None) or config.cli.version

    os_name = getattr(args, "os_name", None) or config.platform.os
    arch = getattr(args, "arch", None) or config.platform.arch
    config.platform.os = os_name
    config.platform.arch = arch

    return CommandTarget(
        config=config,
        tool=config.cli.name,
        version=version,
        platform=config.resolve_platform(),
    )


def install_cli(target: CommandTarget) -> Path:
    """Ensure the target CLI is installed and return its absolute path."""
    return target.config.build_installer().ensure_installed(
        target.tool, target.version, target.platform
    )


def parse_env_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse KEY=VALUE strings into a dictionary.

    Raises:
        ValueError: If an entry has no '=' or an empty key
    """
    env: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid environment variable (expected KEY=VALUE): {pair}")
        env[key] = value
    return env


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


# ============================================================================
# Path Utilities
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Path(path).resolve()
