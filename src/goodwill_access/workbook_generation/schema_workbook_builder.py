"""Excel export of a schema's fields and SQL mapping hints."""

from __future__ import annotations

import hashlib
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from goodwill_access.schema_codec import encode_schema
from goodwill_access.schema_model import GoodwillSchema, SchemaField

from .constants import (
    FIELD_COLUMNS,
    FIELDS_SHEET_NAME,
    SCHEMA_HASH_KEY,
    SCHEMA_NAME_KEY,
    SCHEMA_SHEET_NAME,
    SINK_ADD_INFO_KEY,
    SQL_COLUMNS,
)


class WorkbookGenerationError(Exception):
    """Raised when a schema cannot be written as a workbook."""


def generate_schema_workbook(schema: GoodwillSchema, output_path: Path | str) -> Path:
    """Write the schema to an Excel workbook, one row per field ordered by position."""
    # Encode first so an unserializable schema leaves no file behind.
    canonical = encode_schema(schema)

    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = FIELDS_SHEET_NAME

    all_columns = list(FIELD_COLUMNS + SQL_COLUMNS)
    _write_group_headers(sheet, len(FIELD_COLUMNS), len(SQL_COLUMNS))
    for column_index, name in enumerate(all_columns, start=1):
        sheet.cell(row=2, column=column_index, value=name)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )

    try:
        for row_index, schema_field in enumerate(schema.fields(), start=3):
            for column_index, value in enumerate(_field_row(schema_field), start=1):
                _write_value(sheet, row_index, column_index, value)
        _write_schema_sheet(workbook, schema, canonical)
    except IllegalCharacterError as exc:
        raise WorkbookGenerationError(
            f"Schema {schema.name!r} contains characters a workbook cannot store."
        ) from exc

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path.resolve()


def _field_row(schema_field: SchemaField) -> tuple[object, ...]:
    sql = schema_field.sql
    return (
        schema_field.id,
        schema_field.name,
        schema_field.type,
        schema_field.description,
        sql.type,
        sql.length,
        sql.scale,
        sql.precision,
    )


def _write_group_headers(sheet, field_count: int, sql_count: int) -> None:
    groups = [
        ("Field", 1, field_count),
        ("SQL", field_count + 1, sql_count),
    ]
    for label, start_column, count in groups:
        end_column = start_column + count - 1
        start_letter = get_column_letter(start_column)
        end_letter = get_column_letter(end_column)
        sheet.merge_cells(f"{start_letter}1:{end_letter}1")
        sheet[f"{start_letter}1"].value = label
        sheet[f"{start_letter}1"].style = "Headline 1"


def _write_schema_sheet(workbook: Workbook, schema: GoodwillSchema, canonical: bytes) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    entries = [
        (SCHEMA_NAME_KEY, schema.name),
        (SINK_ADD_INFO_KEY, schema.sink_add_info),
        (SCHEMA_HASH_KEY, hashlib.sha256(canonical).hexdigest()),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        _write_value(sheet, row_index, 2, value)


def _write_value(sheet, row: int, column: int, value: object) -> None:
    cell = sheet.cell(row=row, column=column, value=value)
    # Text is stored verbatim, never as a formula.
    if isinstance(value, str):
        cell.data_type = "s"
