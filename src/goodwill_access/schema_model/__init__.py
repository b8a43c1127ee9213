"""Schema model exports."""

from .goodwill_schema import GoodwillSchema
from .schema_fields import KNOWN_TYPE_TAGS, SchemaField, SqlTypeHint

__all__ = [
    "GoodwillSchema",
    "KNOWN_TYPE_TAGS",
    "SchemaField",
    "SqlTypeHint",
]
