"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_REGISTRY_TIMEOUT_SECONDS = 10
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class RegistrySettings:
    """Schema registry connectivity configuration."""

    base_url: str
    timeout_seconds: int = DEFAULT_REGISTRY_TIMEOUT_SECONDS
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LoggingSettings:
    """Log output configuration."""

    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    registry: RegistrySettings
    logging: LoggingSettings
