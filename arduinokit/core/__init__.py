"""
Core functionality for arduinokit.

This package contains platform detection, artifact location, download,
extraction, installation and execution of the arduino-cli binary.
"""

from .platform import (
    Platform,
    detect,
    detect_platform,
)

from .artifacts import (
    ArtifactKey,
    ArtifactLocator,
)

from .installer import (
    CliInstaller,
)

from .executor import (
    CliExecutor,
    ExecutionResult,
)

from .packages import (
    DEFAULT_CORES,
    install_cores,
    install_libraries,
)

from .exceptions import (
    ArduinoKitError,
    UnsupportedPlatformError,
    CacheDirError,
    DownloadError,
    ExtractionError,
    PermissionWarning,
    CliExecutionError,
    ConfigError,
)

__all__ = [
    "Platform",
    "detect",
    "detect_platform",
    "ArtifactKey",
    "ArtifactLocator",
    "CliInstaller",
    "CliExecutor",
    "ExecutionResult",
    "DEFAULT_CORES",
    "install_cores",
    "install_libraries",
    "ArduinoKitError",
    "UnsupportedPlatformError",
    "CacheDirError",
    "DownloadError",
    "ExtractionError",
    "PermissionWarning",
    "CliExecutionError",
    "ConfigError",
]
