"""Imports module for CSV/Excel import."""

from app.imports.bulk import bulk_create
from app.imports.parsers import (
    COLUMN_MAPPINGS,
    IMPORT_RESOURCES,
    generate_csv_template,
    normalize_column_name,
    parse_file,
)
from app.imports.schemas import ImportResponse, ImportResult, ImportRowError

__all__ = [
    "bulk_create",
    "parse_file",
    "normalize_column_name",
    "generate_csv_template",
    "COLUMN_MAPPINGS",
    "IMPORT_RESOURCES",
    "ImportResponse",
    "ImportResult",
    "ImportRowError",
]
