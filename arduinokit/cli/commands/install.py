"""
Install command implementation.

Ensures arduino-cli is present in the cache and prints its absolute path,
so scripts can capture it:

    ARDUINO_CLI=$(arduinokit -q install)
"""

import logging

from arduinokit.cli.utils import install_cli, resolve_target

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    target = resolve_target(args)
    logger.info(f"Detected platform: {target.platform}")

    cli_binary = install_cli(target)

    print(cli_binary)
    return 0
