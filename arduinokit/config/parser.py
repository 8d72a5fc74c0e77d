"""YAML configuration parser for arduinokit.

This module provides parsing and validation for arduinokit.yaml configuration files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from arduinokit.core.artifacts import (
    DEFAULT_RELEASE_HOST,
    DEFAULT_VENDOR,
    ArtifactLocator,
)
from arduinokit.core.download import CONNECT_TIMEOUT, READ_TIMEOUT
from arduinokit.core.exceptions import ConfigError
from arduinokit.core.installer import DEFAULT_TOOL, DEFAULT_VERSION, CliInstaller
from arduinokit.core.platform import Platform, detect_platform

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "arduinokit.yaml"

_TOP_LEVEL_KEYS = {
    "version",
    "cli",
    "cache",
    "download",
    "platform",
    "cores",
    "libraries",
}


@dataclass
class CliConfig:
    """Which CLI to provision and where it is published."""

    name: str = DEFAULT_TOOL
    version: str = DEFAULT_VERSION
    vendor: str = DEFAULT_VENDOR
    release_host: str = DEFAULT_RELEASE_HOST


@dataclass
class CacheConfig:
    """Artifact cache configuration."""

    root: Optional[Path] = None  # None: ~/.arduinokit/cache


@dataclass
class DownloadConfig:
    """Download timeouts in seconds."""

    connect_timeout: float = CONNECT_TIMEOUT
    read_timeout: float = READ_TIMEOUT


@dataclass
class PlatformOverride:
    """Raw OS/architecture strings replacing host detection."""

    os: Optional[str] = None
    arch: Optional[str] = None


@dataclass
class ArduinoKitConfig:
    """Complete arduinokit configuration."""

    version: int = 1
    cli: CliConfig = field(default_factory=CliConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    platform: PlatformOverride = field(default_factory=PlatformOverride)
    cores: List[str] = field(default_factory=list)  # empty: arduino:avr
    libraries: List[str] = field(default_factory=list)

    def resolve_platform(self) -> Platform:
        """Detect the target platform, applying any configured override."""
        return detect_platform(self.platform.os, self.platform.arch)

    def build_locator(self) -> ArtifactLocator:
        return ArtifactLocator(
            cache_root=self.cache.root,
            vendor=self.cli.vendor,
            release_host=self.cli.release_host,
        )

    def build_installer(self) -> CliInstaller:
        """Create an installer wired to this configuration."""
        return CliInstaller(
            self.build_locator(),
            connect_timeout=self.download.connect_timeout,
            read_timeout=self.download.read_timeout,
        )


def parse_config(config_path: Path) -> ArduinoKitConfig:
    """
    Parse arduinokit.yaml configuration file.

    Relative cache paths are resolved against the directory holding the file.

    Args:
        config_path: Path to arduinokit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return parse_config_data(data, base_dir=config_path.parent)


def parse_config_data(data: dict, base_dir: Optional[Path] = None) -> ArduinoKitConfig:
    """Parse and validate configuration data."""
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    return ArduinoKitConfig(
        version=version,
        cli=_parse_cli(_section(data, "cli")),
        cache=_parse_cache(_section(data, "cache"), base_dir),
        download=_parse_download(_section(data, "download")),
        platform=_parse_platform(_section(data, "platform")),
        cores=_parse_name_list(data, "cores"),
        libraries=_parse_name_list(data, "libraries"),
    )


def _section(data: dict, name: str) -> dict:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _parse_cli(data: dict) -> CliConfig:
    """Parse CLI configuration."""
    defaults = CliConfig()
    values = {}

    for field_name in ("name", "version", "vendor", "release_host"):
        value = data.get(field_name, getattr(defaults, field_name))
        if not isinstance(value, str):
            hint = ' (quote it, e.g. "1.10.0")' if field_name == "version" else ""
            raise ConfigError(f"cli.{field_name} must be a string{hint}")
        if not value.strip():
            raise ConfigError(f"cli.{field_name} cannot be empty")
        values[field_name] = value

    config = CliConfig(**values)

    if config.version.startswith("v"):
        raise ConfigError(
            f"cli.version must not include the 'v' prefix: {config.version}"
        )

    return config


def _parse_cache(data: dict, base_dir: Optional[Path]) -> CacheConfig:
    """Parse cache configuration."""
    root = data.get("root")
    if root is None:
        return CacheConfig()

    if not isinstance(root, str) or not root:
        raise ConfigError("cache.root must be a non-empty path string")

    root_path = Path(root).expanduser()
    if not root_path.is_absolute() and base_dir is not None:
        root_path = base_dir / root_path

    return CacheConfig(root=root_path)


def _parse_download(data: dict) -> DownloadConfig:
    """Parse download configuration."""
    defaults = DownloadConfig()
    values = {}

    for field_name in ("connect_timeout", "read_timeout"):
        value = data.get(field_name, getattr(defaults, field_name))
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"download.{field_name} must be a number")
        if value <= 0:
            raise ConfigError(f"download.{field_name} must be positive")
        values[field_name] = value

    return DownloadConfig(**values)


def _parse_platform(data: dict) -> PlatformOverride:
    """Parse platform override."""
    override = PlatformOverride(os=data.get("os"), arch=data.get("arch"))

    for field_name in ("os", "arch"):
        value = getattr(override, field_name)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"platform.{field_name} must be a string")

    return override


def _parse_name_list(data: dict, name: str) -> List[str]:
    """Parse a list of core or library identifiers."""
    items = data.get(name)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ConfigError(f"'{name}' must be a list")

    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(
                f"'{name}' entries must be non-empty strings: {item!r}"
            )

    return [item.strip() for item in items]


def load_config(
    project_root: Path, config_file: Optional[Path] = None
) -> ArduinoKitConfig:
    """
    Load configuration for a project.

    Args:
        project_root: Project root directory
        config_file: Explicit configuration file (must exist if given)

    Returns:
        Parsed configuration, or defaults if no arduinokit.yaml is present

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid
    """
    if config_file is not None:
        return parse_config(Path(config_file))

    default_config = Path(project_root) / CONFIG_FILE_NAME
    if not default_config.exists():
        logger.debug(f"Config file not found (optional): {default_config}")
        return ArduinoKitConfig()

    logger.debug(f"Loading configuration from {default_config}")
    return parse_config(default_config)
