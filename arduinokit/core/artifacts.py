"""
Artifact location for arduinokit.

Computes where a given (tool, version, platform) lives in the local cache
and where its release archive is published upstream. Both are pure
functions of the artifact key, so equal keys always share a cache entry.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from arduinokit.core.directory import ensure_directory, get_default_cache_root
from arduinokit.core.platform import Platform

DEFAULT_VENDOR = "arduino"
DEFAULT_RELEASE_HOST = "github.com/arduino"


@dataclass(frozen=True)
class ArtifactKey:
    """Addressable identity of a cached binary."""

    tool: str
    version: str
    platform: Platform

    @property
    def executable_name(self) -> str:
        return self.platform.executable_name(self.tool)

    @property
    def archive_name(self) -> str:
        """File name the downloaded archive is stored under."""
        return f"{self.tool}.{self.platform.archive_extension}"

    @property
    def asset_name(self) -> str:
        """
        Upstream release asset name.

        Example:
            'arduino-cli_0.35.2_Linux_64bit.tar.gz'
        """
        return (
            f"{self.tool}_{self.version}_{self.platform.os}_{self.platform.arch}"
            f".{self.platform.archive_extension}"
        )


class ArtifactLocator:
    """
    Resolve cache paths and download URLs for CLI artifacts.

    Cache layout:
        <cache_root>/<vendor>/<tool>/<version>/<os>_<arch>/<executable>

    Example:
        >>> locator = ArtifactLocator(Path("/tmp/cache"))
        >>> locator.download_url("arduino-cli", "0.35.2", detect("linux", "amd64"))
        'https://github.com/arduino/arduino-cli/releases/download/v0.35.2/arduino-cli_0.35.2_Linux_64bit.tar.gz'
    """

    def __init__(
        self,
        cache_root: Optional[Path] = None,
        vendor: str = DEFAULT_VENDOR,
        release_host: str = DEFAULT_RELEASE_HOST,
    ):
        """
        Initialize locator.

        Args:
            cache_root: Root of the artifact cache (defaults to ~/.arduinokit/cache)
            vendor: Namespace directory under the cache root
            release_host: Host (and owner path) serving the release downloads
        """
        self.cache_root = Path(cache_root) if cache_root else get_default_cache_root()
        self.vendor = vendor
        self.release_host = release_host.strip("/")

    def key_dir(self, key: ArtifactKey) -> Path:
        """Cache directory for an artifact key, without creating it."""
        return (
            self.cache_root / self.vendor / key.tool / key.version / key.platform.tag
        )

    def cache_dir(self, tool: str, version: str, platform: Platform) -> Path:
        """
        Get the cache directory for an artifact, creating it if absent.

        Raises:
            CacheDirError: If the directory cannot be created
        """
        return ensure_directory(self.key_dir(ArtifactKey(tool, version, platform)))

    def executable_path(self, tool: str, version: str, platform: Platform) -> Path:
        """Expected path of the installed executable (creates the cache dir)."""
        return self.cache_dir(tool, version, platform) / platform.executable_name(tool)

    def download_url(self, tool: str, version: str, platform: Platform) -> str:
        """Build the exact release download URL for an artifact."""
        key = ArtifactKey(tool, version, platform)
        return (
            f"https://{self.release_host}/{tool}/releases/download/"
            f"v{version}/{key.asset_name}"
        )


__all__ = [
    "ArtifactKey",
    "ArtifactLocator",
    "DEFAULT_VENDOR",
    "DEFAULT_RELEASE_HOST",
]
