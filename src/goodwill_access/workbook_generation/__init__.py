"""Schema workbook generation exports."""

from .constants import FIELD_COLUMNS, FIELDS_SHEET_NAME, SCHEMA_SHEET_NAME, SQL_COLUMNS
from .schema_workbook_builder import WorkbookGenerationError, generate_schema_workbook

__all__ = [
    "FIELDS_SHEET_NAME",
    "SCHEMA_SHEET_NAME",
    "FIELD_COLUMNS",
    "SQL_COLUMNS",
    "WorkbookGenerationError",
    "generate_schema_workbook",
]
