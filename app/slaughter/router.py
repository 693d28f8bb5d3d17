"""API router for slaughter records."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.slaughter.schemas import (
    SlaughterRecordCreate,
    SlaughterRecordResponse,
    SlaughterRecordUpdate,
)
from app.slaughter.service import SlaughterService, get_slaughter_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> SlaughterService:
    """Get slaughter service dependency (authenticated)."""
    return get_slaughter_service(db)


@router.get("", response_model=list[SlaughterRecordResponse])
async def list_slaughter_records(service: Annotated[SlaughterService, Depends(get_service)]):
    """List all slaughter records."""
    return service.list_slaughter_records()


@router.get("/{record_id}", response_model=SlaughterRecordResponse)
async def get_slaughter_record(
    record_id: str,
    service: Annotated[SlaughterService, Depends(get_service)],
):
    """Get a slaughter record by ID."""
    record = service.get_slaughter_record(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Slaughter record not found")
    return record


@router.post("", response_model=SlaughterRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_slaughter_record(
    data: SlaughterRecordCreate,
    service: Annotated[SlaughterService, Depends(get_service)],
):
    """Record a slaughter."""
    try:
        return service.create_slaughter_record(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{record_id}", response_model=SlaughterRecordResponse)
async def update_slaughter_record(
    record_id: str,
    data: SlaughterRecordUpdate,
    service: Annotated[SlaughterService, Depends(get_service)],
):
    """Update a slaughter record."""
    try:
        record = service.update_slaughter_record(record_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not record:
        raise HTTPException(status_code=404, detail="Slaughter record not found")
    return record


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slaughter_record(
    record_id: str,
    service: Annotated[SlaughterService, Depends(get_service)],
):
    """Delete a slaughter record."""
    if not service.delete_slaughter_record(record_id):
        raise HTTPException(status_code=404, detail="Slaughter record not found")
