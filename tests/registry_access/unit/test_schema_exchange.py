"""Registry exchange tests using an in-memory registry."""

from __future__ import annotations

import json

import pytest
from goodwill_access.registry_access import fetch_schema, list_schemas, publish_schema
from goodwill_access.schema_codec import MalformedSchemaError, encode_schema
from goodwill_access.schema_model import GoodwillSchema, SchemaField, SqlTypeHint


class InMemoryRegistry:
    """Registry double storing raw payloads by name."""

    def __init__(self) -> None:
        self.payloads: dict[str, bytes] = {}

    def fetch(self, schema_name: str) -> bytes | None:
        return self.payloads.get(schema_name)

    def fetch_all(self) -> bytes:
        types = [json.loads(payload) for payload in self.payloads.values()]
        return json.dumps({"types": types}).encode("utf-8")

    def publish(self, schema_name: str, payload: bytes) -> None:
        self.payloads[schema_name] = payload


def _schema() -> GoodwillSchema:
    return GoodwillSchema(
        "orders",
        [
            SchemaField(
                id=2, name="amount", type="double", sql=SqlTypeHint("numeric", None, 2, 18)
            ),
            SchemaField(id=1, name="order_id", type="i64", sql=SqlTypeHint("bigint")),
        ],
        sink_add_info="table=orders",
    )


def test_publish_then_fetch_returns_equal_schema() -> None:
    registry = InMemoryRegistry()
    schema = _schema()

    sent = publish_schema(registry, schema)
    fetched = fetch_schema(registry, "orders")

    assert sent == encode_schema(schema)
    assert registry.payloads["orders"] == sent
    assert fetched == schema


def test_fetch_unknown_schema_returns_none() -> None:
    assert fetch_schema(InMemoryRegistry(), "missing") is None


def test_fetch_propagates_codec_errors() -> None:
    registry = InMemoryRegistry()
    registry.payloads["broken"] = b'{"name":"broken","schema":[{"name":"a"}]}'

    with pytest.raises(MalformedSchemaError):
        fetch_schema(registry, "broken")


def test_list_schemas_decodes_catalog() -> None:
    registry = InMemoryRegistry()
    publish_schema(registry, _schema())
    publish_schema(registry, GoodwillSchema("clicks"))

    names = sorted(schema.name for schema in list_schemas(registry))

    assert names == ["clicks", "orders"]
