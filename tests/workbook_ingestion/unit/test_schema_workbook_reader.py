"""Schema workbook ingestion tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from goodwill_access.schema_model import GoodwillSchema, SchemaField, SqlTypeHint
from goodwill_access.workbook_generation import (
    FIELDS_SHEET_NAME,
    SCHEMA_SHEET_NAME,
    generate_schema_workbook,
)
from goodwill_access.workbook_ingestion import WorkbookValidationError, read_schema_workbook
from openpyxl import load_workbook


def _schema(sink_add_info: str | None = "table=orders") -> GoodwillSchema:
    return GoodwillSchema(
        "orders",
        [
            SchemaField(
                id=2,
                name="amount",
                type="double",
                description="order total",
                sql=SqlTypeHint("numeric", scale=2, precision=18),
            ),
            SchemaField(id=1, name="order_id", type="i64", sql=SqlTypeHint("bigint")),
        ],
        sink_add_info=sink_add_info,
    )


def _write_workbook(tmp_path: Path, schema: GoodwillSchema | None = None) -> Path:
    output_path = tmp_path / "orders.xlsx"
    generate_schema_workbook(schema or _schema(), output_path)
    return output_path


def test_generated_workbook_reads_back_to_equal_schema(tmp_path: Path) -> None:
    schema = _schema()

    assert read_schema_workbook(_write_workbook(tmp_path, schema)) == schema


def test_unset_sink_info_reads_back_as_none(tmp_path: Path) -> None:
    schema = _schema(sink_add_info=None)

    assert read_schema_workbook(_write_workbook(tmp_path, schema)).sink_add_info is None


def test_edited_rows_are_read_and_duplicate_positions_keep_last(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    sheet = workbook[FIELDS_SHEET_NAME]
    sheet.append(["7", "created", "date", None, "date", None, None, None])
    sheet.append([1.0, "order_key", "string", "renamed", "nvarchar", 64, None, None])
    sheet.append([None] * 8)
    workbook.save(path)

    schema = read_schema_workbook(path)

    assert schema.positions() == [1, 2, 7]
    assert schema.field_by_position(1) == SchemaField(
        id=1,
        name="order_key",
        type="string",
        description="renamed",
        sql=SqlTypeHint("nvarchar", length=64),
    )
    created = schema.field_by_position(7)
    assert created is not None
    assert created.sql == SqlTypeHint("date")


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(WorkbookValidationError, match="not found"):
        read_schema_workbook(tmp_path / "missing.xlsx")


def test_missing_schema_sheet_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    del workbook[SCHEMA_SHEET_NAME]
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match="'Schema' sheet"):
        read_schema_workbook(path)


def test_missing_schema_name_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    workbook[SCHEMA_SHEET_NAME]["B1"].value = None
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match="schema_name"):
        read_schema_workbook(path)


def test_renamed_column_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    workbook[FIELDS_SHEET_NAME].cell(row=2, column=3, value="Kind")
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match="columns do not match"):
        read_schema_workbook(path)


def test_extra_column_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    workbook[FIELDS_SHEET_NAME].cell(row=2, column=9, value="Nullable")
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match="additional columns"):
        read_schema_workbook(path)


def test_missing_group_header_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    sheet = workbook[FIELDS_SHEET_NAME]
    sheet.unmerge_cells("E1:H1")
    sheet["E1"].value = None
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match="group headers"):
        read_schema_workbook(path)


def test_workbook_without_rows_raises(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path, GoodwillSchema("empty"))

    with pytest.raises(WorkbookValidationError, match="any field rows"):
        read_schema_workbook(path)


@pytest.mark.parametrize(
    ("row", "message"),
    [
        ([None, "a", "string", None, None, None, None, None], "'Position' is required"),
        (["one", "a", "string", None, None, None, None, None], "'Position' must be an integer"),
        ([True, "a", "string", None, None, None, None, None], "'Position' must be an integer"),
        ([3, None, "string", None, None, None, None, None], "'Name' is required"),
        ([3, "a", " ", None, None, None, None, None], "'Type' is required"),
        ([3, "a", "double", None, "numeric", None, 2.5, None], "'Scale' must be an integer"),
    ],
)
def test_invalid_rows_raise(tmp_path: Path, row: list[object], message: str) -> None:
    path = _write_workbook(tmp_path)
    workbook = load_workbook(path)
    workbook[FIELDS_SHEET_NAME].append(row)
    workbook.save(path)

    with pytest.raises(WorkbookValidationError, match=message):
        read_schema_workbook(path)


def test_formula_like_text_reads_back_verbatim(tmp_path: Path) -> None:
    schema = GoodwillSchema(
        "=ledger",
        [
            SchemaField(
                id=1,
                name="=net",
                type="double",
                description="=total-tax",
                sql=SqlTypeHint("=numeric"),
            )
        ],
        sink_add_info="=SUM(A1:A3)",
    )
    path = _write_workbook(tmp_path, schema)

    assert read_schema_workbook(path) == schema
    cell = load_workbook(path)[FIELDS_SHEET_NAME].cell(row=3, column=4)
    assert cell.data_type == "s"
    assert cell.value == "=total-tax"


def test_non_workbook_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "orders.xlsx"
    path.write_text("not a workbook", encoding="utf-8")

    with pytest.raises(WorkbookValidationError, match="Unable to open workbook"):
        read_schema_workbook(path)
