"""Schema field entities."""

from __future__ import annotations

from dataclasses import dataclass, field

KNOWN_TYPE_TAGS: tuple[str, ...] = (
    "bool",
    "byte",
    "i16",
    "i32",
    "i64",
    "double",
    "string",
    "binary",
    "date",
)


@dataclass(frozen=True)
class SqlTypeHint:
    """Advisory relational storage type for a field.

    Every attribute is independently optional; unset numeric attributes are
    emitted as ``null`` on the wire.
    """

    type: str | None = None
    length: int | None = None
    scale: int | None = None
    precision: int | None = None


@dataclass(frozen=True)
class SchemaField:
    """One field of a serialized record.

    The field is a carrier: ``type`` and ``sql`` are not validated.
    """

    id: int
    name: str
    type: str
    description: str = ""
    sql: SqlTypeHint = field(default_factory=SqlTypeHint)

    @property
    def position(self) -> int:
        return self.id

    def has_known_type(self) -> bool:
        return self.type in KNOWN_TYPE_TAGS
