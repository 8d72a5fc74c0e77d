"""
Centralized exception hierarchy for arduinokit.

This module defines all custom exceptions used across the codebase
so callers can catch a single base class at the edge of a build step.
"""

from pathlib import Path
from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class ArduinoKitError(Exception):
    """Base exception for all arduinokit errors."""

    pass


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedPlatformError(ArduinoKitError):
    """Raised when the host OS or CPU architecture has no release artifact."""

    def __init__(self, message: str, os_name: str = "", arch: str = ""):
        self.os_name = os_name
        self.arch = arch
        super().__init__(message)


# ============================================================================
# Installation Exceptions
# ============================================================================


class CacheDirError(ArduinoKitError):
    """Raised when the cache directory for an artifact cannot be created."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        msg = f"Failed to create cache directory: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class DownloadError(ArduinoKitError):
    """Raised when an artifact cannot be downloaded."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ExtractionError(ArduinoKitError):
    """Raised when the expected executable cannot be extracted from an archive."""

    def __init__(self, message: str, archive: Optional[Path] = None):
        self.archive = archive
        super().__init__(message)


class PermissionWarning(UserWarning):
    """Emitted when the executable bit could not be set on an installed binary."""

    pass


# ============================================================================
# Execution Exceptions
# ============================================================================


class CliExecutionError(ArduinoKitError):
    """Raised when the installed CLI cannot be started or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: Optional[int] = None,
        output: str = "",
    ):
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
        super().__init__(message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(ArduinoKitError):
    """Configuration parsing or validation error."""

    pass


__all__ = [
    "ArduinoKitError",
    "UnsupportedPlatformError",
    "CacheDirError",
    "DownloadError",
    "ExtractionError",
    "PermissionWarning",
    "CliExecutionError",
    "ConfigError",
]
