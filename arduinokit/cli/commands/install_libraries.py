"""
Install-libraries command implementation.

Installs arduino-cli if needed, then installs the libraries listed under
'libraries:' in arduinokit.yaml (or given with --library). Entries may pin
a version as 'name@version'.
"""

import logging

from arduinokit.cli.utils import install_cli, resolve_project_root, resolve_target
from arduinokit.core.executor import CliExecutor
from arduinokit.core.packages import install_libraries

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install-libraries command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    target = resolve_target(args)
    libraries = args.library or target.config.libraries

    if not libraries:
        logger.info("No libraries configured, skipping")
        return 0

    cli = CliExecutor(install_cli(target))
    install_libraries(cli, resolve_project_root(args.project_root), libraries)

    logger.info(f"Installed {len(libraries)} library(ies)")
    return 0
