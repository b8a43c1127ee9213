"""Glue between registry transports and the schema codec."""

from __future__ import annotations

from goodwill_access.schema_codec import decode_schema, decode_schema_catalog, encode_schema
from goodwill_access.schema_model import GoodwillSchema

from .registry_contracts import RegistryClient


def fetch_schema(client: RegistryClient, schema_name: str) -> GoodwillSchema | None:
    """Fetch and decode one schema; None when the registry does not know it."""
    payload = client.fetch(schema_name)
    if payload is None:
        return None
    return decode_schema(payload)


def list_schemas(client: RegistryClient) -> list[GoodwillSchema]:
    return decode_schema_catalog(client.fetch_all())


def publish_schema(client: RegistryClient, schema: GoodwillSchema) -> bytes:
    """Encode the schema canonically, publish it under its name and return the bytes sent."""
    payload = encode_schema(schema)
    client.publish(schema.name, payload)
    return payload
