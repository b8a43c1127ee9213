"""Registry access contracts."""

from __future__ import annotations

from typing import Protocol


class RegistryAccessError(Exception):
    """Raised when the registry cannot be reached or rejects a request."""


class RegistryClient(Protocol):
    """Byte-level contract of a schema registry transport.

    Implementations deliver either a complete payload or raise
    RegistryAccessError; they never hand back partial bytes.
    """

    def fetch(self, schema_name: str) -> bytes | None:
        """Return the raw schema JSON, or None when the name is not registered."""
        ...

    def fetch_all(self) -> bytes:
        """Return the raw catalog JSON listing every registered schema."""
        ...

    def publish(self, schema_name: str, payload: bytes) -> None: ...
