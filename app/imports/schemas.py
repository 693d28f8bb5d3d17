"""Pydantic schemas for the import endpoints."""

from pydantic import BaseModel, Field


class ImportRowError(BaseModel):
    """A rejected row.

    Attributes:
        row: 1-based data row number (the header is not counted).
        data: The row as read from the file, after column normalization.
        errors: Human-readable problems with the row.
    """

    row: int
    data: dict = Field(default_factory=dict)
    errors: list[str]


class ImportResult(BaseModel):
    """Result of import validation."""

    valid_rows: list[dict]
    errors: list[ImportRowError]
    total_rows: int

    @property
    def valid_count(self) -> int:
        return len(self.valid_rows)

    @property
    def error_count(self) -> int:
        return len(self.errors)


class ImportResponse(BaseModel):
    """Summary returned by the import endpoints."""

    resource: str
    total_rows: int
    imported: int
    error_count: int
    errors: list[ImportRowError] = Field(default_factory=list)
