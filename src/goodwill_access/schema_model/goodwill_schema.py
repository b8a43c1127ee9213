"""Schema aggregate keyed by field position."""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter

from .schema_fields import SchemaField


class GoodwillSchema:
    """A named set of fields plus optional metadata for the sink.

    Fields are stored by id. Adding a field whose id is already present
    replaces the stored field without complaint, and every sequence handed out
    is sorted by id. Instances are not safe for concurrent mutation; callers
    sharing one across threads must serialize ``add_field`` and sink info
    updates themselves.
    """

    def __init__(
        self,
        name: str,
        fields: Iterable[SchemaField] = (),
        sink_add_info: str | None = None,
    ) -> None:
        self._name = name
        self._fields_by_position: dict[int, SchemaField] = {}
        self._sink_add_info = sink_add_info
        for schema_field in fields:
            self.add_field(schema_field)

    @property
    def name(self) -> str:
        return self._name

    @property
    def sink_add_info(self) -> str | None:
        return self._sink_add_info

    @sink_add_info.setter
    def sink_add_info(self, value: str | None) -> None:
        self._sink_add_info = value

    def set_sink_add_info(self, value: str | None) -> None:
        self._sink_add_info = value

    def add_field(self, schema_field: SchemaField) -> None:
        """Insert the field at its id. Position gaps and bounds are not checked."""
        self._fields_by_position[schema_field.id] = schema_field

    def fields(self) -> list[SchemaField]:
        """Return a new list of the fields, ordered by id."""
        return sorted(self._fields_by_position.values(), key=attrgetter("id"))

    def positions(self) -> list[int]:
        return sorted(self._fields_by_position)

    def field_by_position(self, position: int) -> SchemaField | None:
        return self._fields_by_position.get(position)

    def field_by_name(self, name: str) -> SchemaField | None:
        """Return the field called ``name``, or None.

        Names are not unique within a schema; when several fields share one,
        the field with the lowest id is returned.
        """
        for schema_field in self.fields():
            if schema_field.name == name:
                return schema_field
        return None

    def __len__(self) -> int:
        return len(self._fields_by_position)

    def __contains__(self, position: object) -> bool:
        return position in self._fields_by_position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GoodwillSchema):
            return NotImplemented
        return (
            self._name == other._name
            and self.fields() == other.fields()
            and self._sink_add_info == other._sink_add_info
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"GoodwillSchema(name={self._name!r}, fields={self.fields()!r}, "
            f"sink_add_info={self._sink_add_info!r})"
        )
