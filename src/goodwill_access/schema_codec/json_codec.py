"""Canonical JSON codec for registry schemas."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from goodwill_access.schema_model import GoodwillSchema, SchemaField, SqlTypeHint

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

JSON_SCHEMA_NAME = "name"
JSON_SCHEMA_FIELDS = "schema"
JSON_SCHEMA_SINK_ADD_INFO = "sinkAddInfo"
JSON_CATALOG_TYPES = "types"

_SQL_NUMERIC_KEYS = ("length", "scale", "precision")


class SchemaCodecError(Exception):
    """Base class for codec failures."""


class MalformedSchemaError(SchemaCodecError):
    """Raised when a payload cannot be decoded into a schema."""


class SchemaSerializationError(SchemaCodecError):
    """Raised when a schema cannot be rendered as JSON."""


def decode_schema(raw: bytes | str) -> GoodwillSchema:
    """Decode one schema from its wire representation."""
    root = _load_json(raw)
    schema = schema_from_mapping(root)
    logger.debug("Decoded schema %r with %d field(s)", schema.name, len(schema))
    return schema


def decode_schema_catalog(raw: bytes | str) -> list[GoodwillSchema]:
    """Decode the registry listing payload ``{"types": [...]}``."""
    root = _load_json(raw)
    if not isinstance(root, Mapping):
        raise MalformedSchemaError("Schema catalog must be a JSON object.")
    entries = root.get(JSON_CATALOG_TYPES)
    if not _is_json_array(entries):
        raise MalformedSchemaError(f"Schema catalog requires a '{JSON_CATALOG_TYPES}' array.")
    return [schema_from_mapping(entry) for entry in entries]


def schema_from_mapping(root: Any) -> GoodwillSchema:
    """Build a schema from an already parsed JSON object."""
    if not isinstance(root, Mapping):
        raise MalformedSchemaError("Schema payload must be a JSON object.")

    name = root.get(JSON_SCHEMA_NAME)
    if not isinstance(name, str):
        raise MalformedSchemaError(f"Schema '{JSON_SCHEMA_NAME}' must be a string.")

    items = root.get(JSON_SCHEMA_FIELDS)
    if not _is_json_array(items):
        raise MalformedSchemaError(f"Schema '{JSON_SCHEMA_FIELDS}' must be an array.")
    fields = [_field_from_mapping(item, index) for index, item in enumerate(items)]

    sink_add_info = root.get(JSON_SCHEMA_SINK_ADD_INFO)
    if sink_add_info is not None and not isinstance(sink_add_info, str):
        raise MalformedSchemaError(f"Schema '{JSON_SCHEMA_SINK_ADD_INFO}' must be a string.")

    return GoodwillSchema(name, fields, sink_add_info=sink_add_info)


def encode_schema(schema: GoodwillSchema) -> bytes:
    """Encode a schema into canonical JSON bytes.

    An unset sink info is written as an empty string, so decoding the result
    yields ``""`` rather than ``None``. Consumers of the registry rely on that
    convention.
    """
    try:
        text = json.dumps(
            schema_to_mapping(schema),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SchemaSerializationError(
            f"Unable to serialize schema {schema.name!r}: {exc}"
        ) from exc


def schema_to_mapping(schema: GoodwillSchema) -> dict[str, Any]:
    """Return the canonical JSON object for a schema, fields sorted by id."""
    return {
        JSON_SCHEMA_NAME: schema.name,
        JSON_SCHEMA_FIELDS: [_field_to_mapping(item) for item in schema.fields()],
        JSON_SCHEMA_SINK_ADD_INFO: "" if schema.sink_add_info is None else schema.sink_add_info,
    }


def describe_schema(schema: GoodwillSchema) -> str:
    """Render a schema for log output.

    Falls back to a plain summary when the schema cannot be serialized. The
    result is never meant to be decoded.
    """
    try:
        return encode_schema(schema).decode("utf-8")
    except SchemaSerializationError:
        return f"GoodwillSchema{{name='{schema.name}', fields={schema.fields()!r}}}"


def _load_json(raw: bytes | str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedSchemaError(f"Invalid schema JSON: {exc}") from exc
    except RecursionError as exc:
        raise MalformedSchemaError("Schema JSON is nested too deeply.") from exc
    except TypeError as exc:
        raise MalformedSchemaError(f"Schema payload must be bytes or text: {exc}") from exc


def _field_from_mapping(item: Any, index: int) -> SchemaField:
    if not isinstance(item, Mapping):
        raise MalformedSchemaError(f"Schema field #{index} must be a JSON object.")
    name = _require_string(item, "name", index)
    type_tag = _require_string(item, "type", index)
    position = item.get("position")
    if not _is_json_int(position):
        raise MalformedSchemaError(f"Schema field #{index}: 'position' must be an integer.")

    description = item.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise MalformedSchemaError(f"Schema field #{index}: 'description' must be a string.")

    return SchemaField(
        id=position,
        name=name,
        type=type_tag,
        description=description,
        sql=_sql_from_mapping(item.get("sql"), index),
    )


def _sql_from_mapping(value: Any, index: int) -> SqlTypeHint:
    if value is None:
        return SqlTypeHint()
    if not isinstance(value, Mapping):
        raise MalformedSchemaError(f"Schema field #{index}: 'sql' must be an object.")
    sql_type = value.get("type")
    if sql_type is not None and not isinstance(sql_type, str):
        raise MalformedSchemaError(f"Schema field #{index}: 'sql.type' must be a string.")
    numbers: dict[str, int | None] = {}
    for key in _SQL_NUMERIC_KEYS:
        number = value.get(key)
        if number is not None and not _is_json_int(number):
            raise MalformedSchemaError(
                f"Schema field #{index}: 'sql.{key}' must be an integer or null."
            )
        numbers[key] = number
    return SqlTypeHint(type=sql_type, **numbers)


def _field_to_mapping(schema_field: SchemaField) -> dict[str, Any]:
    sql = schema_field.sql
    return {
        "name": schema_field.name,
        "type": schema_field.type,
        "position": schema_field.id,
        "description": schema_field.description,
        "sql": {
            "type": sql.type,
            "length": sql.length,
            "scale": sql.scale,
            "precision": sql.precision,
        },
    }


def _require_string(item: Mapping[str, Any], key: str, index: int) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise MalformedSchemaError(f"Schema field #{index}: '{key}' must be a string.")
    return value


def _is_json_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_json_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)
