"""
Install-cores command implementation.

Installs arduino-cli if needed, updates the board index and installs the
board cores listed under 'cores:' in arduinokit.yaml (or given with --core).
"""

import logging

from arduinokit.cli.utils import install_cli, resolve_project_root, resolve_target
from arduinokit.core.executor import CliExecutor
from arduinokit.core.packages import install_cores

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install-cores command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    target = resolve_target(args)
    cores = args.core or target.config.cores

    cli = CliExecutor(install_cli(target))
    installed = install_cores(cli, resolve_project_root(args.project_root), cores)

    logger.info(f"Installed {len(installed)} core(s)")
    return 0
