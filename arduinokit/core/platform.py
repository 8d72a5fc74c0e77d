"""
Platform detection for arduinokit.

This module maps the host operating system and CPU architecture onto the
small set of platform tokens used by the arduino-cli release assets.

Release asset names follow the pattern:
    arduino-cli_{version}_{os}_{arch}.tar.gz   (Linux/macOS)
    arduino-cli_{version}_Windows_{arch}.zip   (Windows)

Usage:
    from arduinokit.core.platform import detect, detect_platform

    # Detect current platform
    platform_info = detect_platform()
    print(f"Platform tag: {platform_info.tag}")

    # Resolve an explicit override
    platform_info = detect("Linux", "aarch64")
"""

import platform
from dataclasses import dataclass
from typing import Optional

from arduinokit.core.exceptions import UnsupportedPlatformError

# OS categories as spelled in release asset names
LINUX = "Linux"
MACOS = "macOS"
WINDOWS = "Windows"

# Architecture tokens as spelled in release asset names
ARCH_64BIT = "64bit"
ARCH_32BIT = "32bit"
ARCH_ARM64 = "ARM64"
ARCH_ARMV7 = "ARMv7"

TAR_GZ = "tar.gz"
ZIP = "zip"


@dataclass(frozen=True)
class Platform:
    """
    Release platform of a downloadable CLI artifact.

    Attributes:
        os: Operating system category ('Linux', 'macOS', 'Windows')
        arch: Architecture token ('64bit', '32bit', 'ARM64', 'ARMv7')
        archive_extension: Archive format of the release asset ('tar.gz', 'zip')
    """

    os: str
    arch: str
    archive_extension: str

    @property
    def tag(self) -> str:
        """
        Platform tag used for cache directories and asset names.

        Example:
            >>> detect("linux", "x86_64").tag
            'Linux_64bit'
        """
        return f"{self.os}_{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == WINDOWS

    def executable_name(self, tool: str) -> str:
        """Name of the tool's binary on this platform."""
        return f"{tool}.exe" if self.is_windows else tool

    def __str__(self) -> str:
        return self.tag


def _map_os(os_name: str) -> str:
    lowered = os_name.lower()

    if "linux" in lowered:
        return LINUX
    elif "mac" in lowered or "darwin" in lowered:
        return MACOS
    elif "win" in lowered:
        return WINDOWS
    else:
        raise UnsupportedPlatformError(
            f"Unsupported operating system: {os_name}", os_name=os_name
        )


def _map_arch(arch: str) -> str:
    machine = arch.lower()

    if machine in ("amd64", "x86_64"):
        return ARCH_64BIT
    elif machine in ("aarch64", "arm64"):
        return ARCH_ARM64
    elif machine.startswith("arm"):
        # armv6l, armv7l, arm: one token for every 32-bit ARM board
        return ARCH_ARMV7
    elif machine in ("x86", "i386", "i686"):
        return ARCH_32BIT
    else:
        raise UnsupportedPlatformError(
            f"Unsupported CPU architecture: {arch}", arch=arch
        )


def detect(os_name: str, arch: str) -> Platform:
    """
    Resolve raw OS and architecture strings to a release platform.

    Args:
        os_name: Raw OS name (e.g. 'Linux', 'Darwin', 'Windows 10')
        arch: Raw machine string (e.g. 'x86_64', 'aarch64', 'armv7l')

    Returns:
        Platform matching the release asset naming

    Raises:
        UnsupportedPlatformError: If the OS or architecture has no release asset

    Example:
        >>> detect("Darwin", "arm64")
        Platform(os='macOS', arch='ARM64', archive_extension='tar.gz')
    """
    os_category = _map_os(os_name)
    arch_token = _map_arch(arch)
    extension = ZIP if os_category == WINDOWS else TAR_GZ

    return Platform(os=os_category, arch=arch_token, archive_extension=extension)


def detect_platform(
    os_name: Optional[str] = None, arch: Optional[str] = None
) -> Platform:
    """
    Detect the host platform, honouring optional overrides.

    Args:
        os_name: OS override (uses platform.system() if None)
        arch: Architecture override (uses platform.machine() if None)

    Returns:
        Detected Platform
    """
    return detect(
        os_name if os_name is not None else platform.system(),
        arch if arch is not None else platform.machine(),
    )


__all__ = [
    "Platform",
    "detect",
    "detect_platform",
    "LINUX",
    "MACOS",
    "WINDOWS",
    "ARCH_64BIT",
    "ARCH_32BIT",
    "ARCH_ARM64",
    "ARCH_ARMV7",
    "TAR_GZ",
    "ZIP",
]
