"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, normalize_log_level
from .runtime_settings import Configuration, LoggingSettings, RegistrySettings

__all__ = [
    "Configuration",
    "LoggingSettings",
    "RegistrySettings",
    "ConfigurationError",
    "load_configuration",
    "normalize_log_level",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
