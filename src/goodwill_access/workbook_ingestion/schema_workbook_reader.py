"""Schema workbook ingestion and validation service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from goodwill_access.schema_model import GoodwillSchema, SchemaField, SqlTypeHint
from goodwill_access.workbook_generation.constants import (
    FIELD_COLUMNS,
    FIELDS_SHEET_NAME,
    SCHEMA_NAME_KEY,
    SCHEMA_SHEET_NAME,
    SINK_ADD_INFO_KEY,
    SQL_COLUMNS,
)


class WorkbookValidationError(Exception):
    """Raised when a schema workbook is invalid."""


def read_schema_workbook(workbook_path: Path | str) -> GoodwillSchema:
    """Read a workbook written by generate_schema_workbook back into a schema.

    Rows sharing a position follow the schema's last-write-wins rule.
    """
    path = Path(workbook_path)
    if not path.exists():
        raise WorkbookValidationError(f"Workbook file not found: {path}")

    try:
        workbook = load_workbook(path, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError) as exc:
        raise WorkbookValidationError(f"Unable to open workbook {path}: {exc}") from exc
    for sheet_name in (FIELDS_SHEET_NAME, SCHEMA_SHEET_NAME):
        if sheet_name not in workbook.sheetnames:
            raise WorkbookValidationError(f"Workbook is missing the '{sheet_name}' sheet.")
    fields_sheet = workbook[FIELDS_SHEET_NAME]
    schema_sheet = workbook[SCHEMA_SHEET_NAME]
    assert isinstance(fields_sheet, Worksheet)
    assert isinstance(schema_sheet, Worksheet)

    metadata = _read_metadata(schema_sheet)
    schema_name = _optional_string(metadata.get(SCHEMA_NAME_KEY))
    if not schema_name:
        raise WorkbookValidationError(f"Schema sheet requires a '{SCHEMA_NAME_KEY}' value.")
    sink_add_info = _optional_string(metadata.get(SINK_ADD_INFO_KEY)) or None

    _validate_group_headers(fields_sheet)
    expected_columns = list(FIELD_COLUMNS + SQL_COLUMNS)
    header_values = [
        fields_sheet.cell(row=2, column=index + 1).value for index in range(len(expected_columns))
    ]
    if header_values != expected_columns:
        raise WorkbookValidationError("Fields sheet columns do not match the schema layout.")
    _ensure_no_extra_columns(fields_sheet, len(expected_columns))

    header_map = {name: idx + 1 for idx, name in enumerate(expected_columns)}
    fields = _parse_rows(fields_sheet, header_map)

    return GoodwillSchema(schema_name, fields, sink_add_info=sink_add_info)


def _read_metadata(sheet) -> dict[str, object]:
    metadata: dict[str, object] = {}
    for row_idx in range(1, sheet.max_row + 1):
        key = sheet.cell(row=row_idx, column=1).value
        if isinstance(key, str) and key.strip():
            metadata[key.strip()] = sheet.cell(row=row_idx, column=2).value
    return metadata


def _validate_group_headers(sheet) -> None:
    field_label = sheet.cell(row=1, column=1).value
    sql_label = sheet.cell(row=1, column=len(FIELD_COLUMNS) + 1).value
    if field_label != "Field" or sql_label != "SQL":
        raise WorkbookValidationError("Fields sheet missing required group headers.")


def _ensure_no_extra_columns(sheet, expected_count: int) -> None:
    for column in range(expected_count + 1, sheet.max_column + 1):
        value = sheet.cell(row=2, column=column).value
        if value not in (None, ""):
            raise WorkbookValidationError("Fields sheet contains unexpected additional columns.")


def _parse_rows(sheet, header_map: Mapping[str, int]) -> list[SchemaField]:
    fields: list[SchemaField] = []
    for row_idx in range(3, sheet.max_row + 1):
        row_data = {
            name: sheet.cell(row=row_idx, column=col_index).value
            for name, col_index in header_map.items()
        }
        if _row_is_empty(row_data):
            continue
        fields.append(_build_field(row_idx, row_data))
    if not fields:
        raise WorkbookValidationError("Fields sheet does not contain any field rows.")
    return fields


def _row_is_empty(row_data: Mapping[str, object]) -> bool:
    return all(_is_empty(value) for value in row_data.values())


def _build_field(row_number: int, row_data: Mapping[str, object]) -> SchemaField:
    position = _require_int(row_data["Position"], "Position", row_number)
    name = _require_text(row_data["Name"], "Name", row_number)
    type_tag = _require_text(row_data["Type"], "Type", row_number)
    description = _optional_string(row_data.get("Description"))
    sql = SqlTypeHint(
        type=_optional_string(row_data.get("SQL Type")) or None,
        length=_optional_int(row_data.get("Length"), "Length", row_number),
        scale=_optional_int(row_data.get("Scale"), "Scale", row_number),
        precision=_optional_int(row_data.get("Precision"), "Precision", row_number),
    )
    return SchemaField(id=position, name=name, type=type_tag, description=description, sql=sql)


def _optional_int(value: object, column_name: str, row_number: int) -> int | None:
    if _is_empty(value):
        return None
    return _require_int(value, column_name, row_number)


def _require_int(value: object, column_name: str, row_number: int) -> int:
    if _is_empty(value):
        raise WorkbookValidationError(f"Row {row_number}: column '{column_name}' is required.")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise WorkbookValidationError(
        f"Row {row_number}: column '{column_name}' must be an integer, got {value!r}."
    )


def _optional_string(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _is_empty(value: object) -> bool:
    return _optional_string(value) == ""


def _require_text(value: object, column_name: str, row_number: int) -> str:
    if _is_empty(value):
        raise WorkbookValidationError(f"Row {row_number}: column '{column_name}' is required.")
    return str(value).strip()
