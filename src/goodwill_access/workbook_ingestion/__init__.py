"""Schema workbook ingestion exports."""

from .schema_workbook_reader import WorkbookValidationError, read_schema_workbook

__all__ = [
    "WorkbookValidationError",
    "read_schema_workbook",
]
