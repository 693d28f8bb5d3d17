"""API router for calving records."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.calving.schemas import CalvingRecordCreate, CalvingRecordResponse, CalvingRecordUpdate
from app.calving.service import CalvingService, get_calving_service
from app.dependencies import CurrentUser, get_db

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> CalvingService:
    """Get calving service dependency (authenticated)."""
    return get_calving_service(db)


@router.get("", response_model=list[CalvingRecordResponse])
async def list_calving_records(service: Annotated[CalvingService, Depends(get_service)]):
    """List all calving records."""
    return service.list_calving_records()


@router.get("/dam/{dam_id}", response_model=list[CalvingRecordResponse])
async def calving_records_for_dam(
    dam_id: str,
    service: Annotated[CalvingService, Depends(get_service)],
):
    """Calving history of a dam."""
    return service.list_by_dam(dam_id)


@router.get("/{record_id}", response_model=CalvingRecordResponse)
async def get_calving_record(
    record_id: str,
    service: Annotated[CalvingService, Depends(get_service)],
):
    """Get a calving record by ID."""
    record = service.get_calving_record(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Calving record not found")
    return record


@router.post("", response_model=CalvingRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_calving_record(
    data: CalvingRecordCreate,
    service: Annotated[CalvingService, Depends(get_service)],
):
    """Record a calving."""
    try:
        return service.create_calving_record(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{record_id}", response_model=CalvingRecordResponse)
async def update_calving_record(
    record_id: str,
    data: CalvingRecordUpdate,
    service: Annotated[CalvingService, Depends(get_service)],
):
    """Update a calving record."""
    try:
        record = service.update_calving_record(record_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not record:
        raise HTTPException(status_code=404, detail="Calving record not found")
    return record


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calving_record(
    record_id: str,
    service: Annotated[CalvingService, Depends(get_service)],
):
    """Delete a calving record."""
    if not service.delete_calving_record(record_id):
        raise HTTPException(status_code=404, detail="Calving record not found")
