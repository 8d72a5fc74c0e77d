"""
Info command implementation.

Shows how arduino-cli resolves for the current platform without touching
the network.
"""

import logging

from arduinokit.cli.utils import resolve_target
from arduinokit.core.artifacts import ArtifactKey

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the info command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    target = resolve_target(args)
    installer = target.config.build_installer()
    locator = installer.locator

    key = ArtifactKey(target.tool, target.version, target.platform)
    executable = locator.key_dir(key) / key.executable_name
    cached = installer.is_installed(target.tool, target.version, target.platform)

    details = {
        "Tool": f"{target.tool} {target.version}",
        "Platform": target.platform.tag,
        "Executable": key.executable_name,
        "Cache path": executable,
        "Download URL": locator.download_url(
            target.tool, target.version, target.platform
        ),
        "Cached": "yes" if cached else "no",
    }

    for label, value in details.items():
        print(f"{label}: {value}")

    return 0
