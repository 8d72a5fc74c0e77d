"""
Board cores and libraries installed through arduino-cli.

Both operations refresh the matching index first, then install each entry
in order. arduino-cli skips entries that are already installed, so running
them on every build is cheap. The first failing command stops the sequence
with CliExecutionError.

    arduino-cli core update-index
    arduino-cli core install arduino:avr
    arduino-cli lib update-index
    arduino-cli lib install ArduinoJson@6.21.3
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from arduinokit.core.executor import CliExecutor

logger = logging.getLogger(__name__)

DEFAULT_CORES = ("arduino:avr",)


def install_cores(
    cli: CliExecutor, working_dir: Path, cores: Optional[Sequence[str]] = None
) -> List[str]:
    """
    Update the board index and install board cores.

    Args:
        cli: Executor for the installed arduino-cli
        working_dir: Directory to run arduino-cli in
        cores: Core identifiers such as 'arduino:avr' or 'esp32:esp32'
            (DEFAULT_CORES if empty)

    Returns:
        The cores that were installed

    Raises:
        CliExecutionError: If arduino-cli cannot start or any step exits non-zero
    """
    cores = list(cores or [])
    if not cores:
        cores = list(DEFAULT_CORES)
        logger.info(f"No cores configured, defaulting to {', '.join(cores)}")

    logger.info("Updating board package index...")
    cli.run(working_dir, ["core", "update-index"]).check_returncode()

    for core in cores:
        logger.info(f"Installing core: {core}")
        cli.run(working_dir, ["core", "install", core]).check_returncode()

    return cores


def install_libraries(
    cli: CliExecutor, working_dir: Path, libraries: Optional[Sequence[str]] = None
) -> List[str]:
    """
    Update the library index and install libraries.

    Does nothing, not even the index update, when no libraries are given.

    Args:
        cli: Executor for the installed arduino-cli
        working_dir: Directory to run arduino-cli in
        libraries: Library Manager names, optionally pinned as 'name@version'

    Returns:
        The libraries that were installed

    Raises:
        CliExecutionError: If arduino-cli cannot start or any step exits non-zero
    """
    libraries = list(libraries or [])
    if not libraries:
        logger.info("No libraries configured, skipping")
        return []

    logger.info("Updating library index...")
    cli.run(working_dir, ["lib", "update-index"]).check_returncode()

    for library in libraries:
        logger.info(f"Installing library: {library}")
        cli.run(working_dir, ["lib", "install", library]).check_returncode()

    return libraries


__all__ = [
    "DEFAULT_CORES",
    "install_cores",
    "install_libraries",
]
