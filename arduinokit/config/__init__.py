"""Configuration management for arduinokit."""

from .parser import (
    ArduinoKitConfig,
    CliConfig,
    CacheConfig,
    DownloadConfig,
    PlatformOverride,
    CONFIG_FILE_NAME,
    load_config,
    parse_config,
    parse_config_data,
)

__all__ = [
    "ArduinoKitConfig",
    "CliConfig",
    "CacheConfig",
    "DownloadConfig",
    "PlatformOverride",
    "CONFIG_FILE_NAME",
    "load_config",
    "parse_config",
    "parse_config_data",
]
