"""
Run command implementation.

Installs arduino-cli if needed, then runs it with the given arguments
and exits with its exit code.
"""

import logging

from arduinokit.cli.utils import (
    install_cli,
    parse_env_pairs,
    print_error,
    resolve_project_root,
    resolve_target,
)
from arduinokit.core.executor import CliExecutor

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code of arduino-cli (1 for usage errors)
    """
    cli_args = list(args.cli_args or [])
    if cli_args and cli_args[0] == "--":
        cli_args = cli_args[1:]

    if not cli_args:
        print_error(
            "No arguments given for arduino-cli", "Usage: arduinokit run -- ARGS..."
        )
        return 1

    try:
        extra_env = parse_env_pairs(args.env)
    except ValueError as e:
        print_error(str(e))
        return 1

    target = resolve_target(args)
    cli_binary = install_cli(target)

    working_dir = args.working_dir or resolve_project_root(args.project_root)
    result = CliExecutor(cli_binary).run(working_dir, cli_args, extra_env or None)

    if not result.succeeded:
        logger.error(f"{target.tool} exited with code {result.exit_code}")

    return result.exit_code
