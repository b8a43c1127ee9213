"""Registry access exports."""

from .http_registry_client import REGISTRAR_PATH, HttpRegistryClient
from .registry_contracts import RegistryAccessError, RegistryClient
from .schema_exchange import fetch_schema, list_schemas, publish_schema

__all__ = [
    "REGISTRAR_PATH",
    "HttpRegistryClient",
    "RegistryAccessError",
    "RegistryClient",
    "fetch_schema",
    "list_schemas",
    "publish_schema",
]
