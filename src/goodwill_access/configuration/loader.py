"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_REGISTRY_TIMEOUT_SECONDS,
    Configuration,
    LoggingSettings,
    RegistrySettings,
)

_URL_SCHEMES = ("http://", "https://")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    registry = _parse_registry_section(parsed.get("registry"))
    logging_settings = _parse_logging_section(parsed.get("logging"))

    return Configuration(path=path, registry=registry, logging=logging_settings)


def _parse_registry_section(value: Any) -> RegistrySettings:
    section = _require_mapping(value, "registry")
    base_url = _require_non_empty_string(section.get("base_url"), "registry.base_url")
    if not base_url.lower().startswith(_URL_SCHEMES):
        raise ConfigurationError("registry.base_url must start with http:// or https://.")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", DEFAULT_REGISTRY_TIMEOUT_SECONDS),
        "registry.timeout_seconds",
    )
    headers = _normalize_headers(section.get("headers"))
    return RegistrySettings(
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        headers=headers,
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    if value is None:
        return LoggingSettings()
    section = _require_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", DEFAULT_LOG_LEVEL), "logging.level")
    return LoggingSettings(level=normalize_log_level(level))


def normalize_log_level(value: str) -> str:
    """Return the upper-case standard level name or raise ConfigurationError."""
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level: {value}")
    return level


def _normalize_headers(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("registry.headers must be a mapping.")
    headers: dict[str, str] = {}
    for key, header_value in value.items():
        if not isinstance(key, str) or not isinstance(header_value, str):
            raise ConfigurationError("registry.headers entries must be strings.")
        headers[key.strip()] = header_value.strip()
    return headers


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
