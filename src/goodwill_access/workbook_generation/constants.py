"""Shared schema workbook constants."""

from __future__ import annotations

FIELDS_SHEET_NAME = "Fields"
SCHEMA_SHEET_NAME = "Schema"

FIELD_COLUMNS: tuple[str, ...] = ("Position", "Name", "Type", "Description")
SQL_COLUMNS: tuple[str, ...] = ("SQL Type", "Length", "Scale", "Precision")

SCHEMA_NAME_KEY = "schema_name"
SINK_ADD_INFO_KEY = "sink_add_info"
SCHEMA_HASH_KEY = "schema_hash"
