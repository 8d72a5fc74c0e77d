"""
Download and cache the arduino-cli binary.

The binary is stored in a per-user cache keyed by vendor, tool, version and
platform, so it survives project cleans and is shared across projects on
the same machine:

    ~/.arduinokit/cache/arduino/arduino-cli/{version}/{os}_{arch}/arduino-cli

The download is skipped entirely when the cached binary already exists,
making repeated builds fast and offline-capable after the first run.

Note:
    The cache-hit check only looks at existence. A binary left truncated by
    an interrupted extraction is treated as installed until removed by hand.
    There is no locking either: concurrent installs of the same artifact both
    download and the last writer wins.
"""

import logging
import stat
import warnings
from pathlib import Path
from typing import Optional

from arduinokit.core.archive import extract_executable
from arduinokit.core.artifacts import ArtifactKey, ArtifactLocator
from arduinokit.core.download import CONNECT_TIMEOUT, READ_TIMEOUT, fetch
from arduinokit.core.exceptions import ExtractionError, PermissionWarning
from arduinokit.core.platform import Platform, detect_platform

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "arduino-cli"
DEFAULT_VERSION = "0.35.2"


class CliInstaller:
    """
    Ensure a versioned CLI binary is present in the local cache.

    Example:
        >>> installer = CliInstaller(ArtifactLocator(Path("/tmp/cache")))
        >>> path = installer.ensure_installed("arduino-cli", "0.35.2")
        >>> path.name
        'arduino-cli'
    """

    def __init__(
        self,
        locator: Optional[ArtifactLocator] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ):
        """
        Initialize installer.

        Args:
            locator: Artifact locator (defaults to the per-user cache)
            connect_timeout: Download connection timeout in seconds
            read_timeout: Download read timeout in seconds
        """
        self.locator = locator or ArtifactLocator()
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    def is_installed(self, tool: str, version: str, platform: Platform) -> bool:
        """Check whether the executable is already cached, without side effects."""
        key = ArtifactKey(tool, version, platform)
        return (self.locator.key_dir(key) / key.executable_name).is_file()

    def ensure_installed(
        self,
        tool: str = DEFAULT_TOOL,
        version: str = DEFAULT_VERSION,
        platform: Optional[Platform] = None,
    ) -> Path:
        """
        Return the path to a usable binary, downloading it first if necessary.

        Args:
            tool: Tool name, e.g. 'arduino-cli'
            version: Tool version, e.g. '0.35.2'
            platform: Target platform (auto-detected if None)

        Returns:
            Absolute path to the executable

        Raises:
            UnsupportedPlatformError: If the host platform is not supported
            CacheDirError: If the cache directory cannot be created
            DownloadError: If the archive cannot be downloaded
            ExtractionError: If the executable cannot be extracted
        """
        platform = platform or detect_platform()

        cache_dir = self.locator.cache_dir(tool, version, platform)
        executable = cache_dir / platform.executable_name(tool)

        if executable.is_file():
            logger.info(f"{tool} {version} already cached at {executable}")
            return executable.resolve()

        url = self.locator.download_url(tool, version, platform)
        logger.info(f"Downloading {tool} {version} for {platform}")

        key = ArtifactKey(tool, version, platform)
        archive = fetch(
            url,
            cache_dir,
            key.archive_name,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
        )

        extract_executable(archive, cache_dir, tool, platform)

        if not executable.is_file():
            raise ExtractionError(
                f"Archive extracted but expected binary not found: {executable}",
                archive=archive,
            )

        if not platform.is_windows:
            _make_executable(executable)
        _cleanup_archive(archive)

        logger.info(f"{tool} installed to {executable}")
        return executable.resolve()


def _make_executable(binary: Path) -> None:
    try:
        mode = binary.stat().st_mode
        binary.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        message = (
            f"Could not set executable permission on {binary} "
            f"- you may need to chmod +x manually: {e}"
        )
        logger.warning(message)
        warnings.warn(message, PermissionWarning, stacklevel=3)


def _cleanup_archive(archive: Path) -> None:
    try:
        archive.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove archive file {archive}: {e}")


__all__ = [
    "CliInstaller",
    "DEFAULT_TOOL",
    "DEFAULT_VERSION",
]
