"""Imports API routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.imports.parsers import IMPORT_RESOURCES, generate_csv_template, parse_file
from app.imports.schemas import ImportResponse
from app.imports.service import ImportService, get_import_service

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> ImportService:
    """Get import service dependency (authenticated)."""
    return get_import_service(db)


def get_resource(resource: Annotated[str, Path()]) -> str:
    """Validate the ``{resource}`` path segment.

    Raises:
        HTTPException: 404 for resources that cannot be imported.
    """
    if resource not in IMPORT_RESOURCES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown import resource '{resource}'",
        )
    return resource


def _parse_upload(file: UploadFile, resource: str) -> list[dict]:
    """Parse an uploaded file into normalized rows.

    Raises:
        HTTPException: If the file format is unsupported or unreadable.
    """
    try:
        return parse_file(file.filename or "", file.file, resource)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{resource}/template")
async def download_template(resource: Annotated[str, Depends(get_resource)]):
    """Download a CSV import template for a resource.

    Returns:
        Response: CSV file with headers and example rows.
    """
    content = generate_csv_template(resource)
    filename = f"herdlist_{resource}_template.csv"

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/{resource}/validate", response_model=ImportResponse)
async def validate_import(
    resource: Annotated[str, Depends(get_resource)],
    file: Annotated[UploadFile, File(description="CSV or Excel file")],
    service: Annotated[ImportService, Depends(get_service)],
):
    """Check a file without importing anything.

    Returns:
        ImportResponse: Row errors; ``imported`` is always 0.
    """
    rows = _parse_upload(file, resource)
    result = service.validate(resource, rows)
    return ImportResponse(
        resource=resource,
        total_rows=result.total_rows,
        imported=0,
        error_count=result.error_count,
        errors=result.errors,
    )


@router.post("/{resource}", response_model=ImportResponse)
async def execute_import(
    resource: Annotated[str, Depends(get_resource)],
    file: Annotated[UploadFile, File(description="CSV or Excel file")],
    service: Annotated[ImportService, Depends(get_service)],
):
    """Import rows from a CSV or Excel file.

    Valid rows are inserted; invalid rows are reported with their 1-based
    row number and skipped.

    Returns:
        ImportResponse: Import summary.
    """
    rows = _parse_upload(file, resource)
    logger.info("Import of %d %s rows from %s", len(rows), resource, file.filename)
    return service.import_rows(resource, rows)
