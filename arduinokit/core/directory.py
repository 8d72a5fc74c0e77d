"""
Directory management for arduinokit.

This module resolves the per-user arduinokit home directory and the
artifact cache root below it.

Directory Structure:
    Home (~/.arduinokit/ or %USERPROFILE%\\.arduinokit\\):
        - cache/<vendor>/<tool>/<version>/<os>_<arch>/<executable>
"""

import logging
import os
from pathlib import Path

from arduinokit.core.exceptions import CacheDirError

logger = logging.getLogger(__name__)

# Environment variable to override the home directory
ARDUINOKIT_HOME_ENV = "ARDUINOKIT_HOME"

DEFAULT_HOME_DIR_NAME = ".arduinokit"
CACHE_DIR_NAME = "cache"


def get_home_dir() -> Path:
    """
    Get the arduinokit home directory path.

    Resolution order:
    1. ARDUINOKIT_HOME environment variable (if set)
    2. %USERPROFILE%\\.arduinokit on Windows
    3. ~/.arduinokit otherwise

    Returns:
        Path to the arduinokit home directory.

    Raises:
        CacheDirError: If USERPROFILE is not set on Windows.
    """
    env_home = os.environ.get(ARDUINOKIT_HOME_ENV)
    if env_home:
        return Path(env_home)

    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise CacheDirError(
                Path(DEFAULT_HOME_DIR_NAME),
                "USERPROFILE environment variable is not set",
            )
        return Path(user_profile) / DEFAULT_HOME_DIR_NAME

    return Path.home() / DEFAULT_HOME_DIR_NAME


def get_default_cache_root() -> Path:
    """Default root of the artifact cache (<home>/cache)."""
    return get_home_dir() / CACHE_DIR_NAME


def ensure_directory(path: Path) -> Path:
    """
    Create a directory (and parents) if it doesn't exist.

    Args:
        path: Directory to create

    Returns:
        The same path

    Raises:
        CacheDirError: If the directory cannot be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CacheDirError(path, str(e)) from e

    logger.debug(f"Ensured cache directory exists: {path}")
    return path


__all__ = [
    "ARDUINOKIT_HOME_ENV",
    "get_home_dir",
    "get_default_cache_root",
    "ensure_directory",
]
