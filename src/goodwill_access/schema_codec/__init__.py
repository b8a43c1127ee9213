"""Schema codec exports."""

from .json_codec import (
    MalformedSchemaError,
    SchemaCodecError,
    SchemaSerializationError,
    decode_schema,
    decode_schema_catalog,
    describe_schema,
    encode_schema,
    schema_from_mapping,
    schema_to_mapping,
)

__all__ = [
    "MalformedSchemaError",
    "SchemaCodecError",
    "SchemaSerializationError",
    "decode_schema",
    "decode_schema_catalog",
    "describe_schema",
    "encode_schema",
    "schema_from_mapping",
    "schema_to_mapping",
]
