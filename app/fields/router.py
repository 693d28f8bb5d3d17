"""API router for fields."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.fields.schemas import (
    FieldAnimalCount,
    FieldCreate,
    FieldResponse,
    FieldUpdate,
    PropertyAnimalCount,
)
from app.fields.service import FieldService, get_field_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> FieldService:
    """Get field service dependency (authenticated)."""
    return get_field_service(db)


@router.get("", response_model=list[FieldResponse])
async def list_fields(service: Annotated[FieldService, Depends(get_service)]):
    """List all fields."""
    return service.list_fields()


@router.get("/animal-counts", response_model=list[PropertyAnimalCount])
async def animal_counts(service: Annotated[FieldService, Depends(get_service)]):
    """Dairy/beef head count per property."""
    return service.animal_counts_by_property()


@router.get("/animal-counts/by-field", response_model=list[FieldAnimalCount])
async def animal_counts_by_field(service: Annotated[FieldService, Depends(get_service)]):
    """Dairy/beef head count per field."""
    return service.animal_counts_by_field()


@router.get("/property/{property_id}", response_model=list[FieldResponse])
async def list_fields_by_property(
    property_id: str,
    service: Annotated[FieldService, Depends(get_service)],
):
    """List the fields of a property."""
    return service.list_by_property(property_id)


@router.get("/{field_id}", response_model=FieldResponse)
async def get_field(
    field_id: str,
    service: Annotated[FieldService, Depends(get_service)],
):
    """Get a field by ID."""
    field = service.get_field(field_id)
    if not field:
        raise HTTPException(status_code=404, detail="Field not found")
    return field


@router.post("", response_model=FieldResponse, status_code=status.HTTP_201_CREATED)
async def create_field(
    data: FieldCreate,
    service: Annotated[FieldService, Depends(get_service)],
):
    """Create a new field."""
    try:
        return service.create_field(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{field_id}", response_model=FieldResponse)
async def update_field(
    field_id: str,
    data: FieldUpdate,
    service: Annotated[FieldService, Depends(get_service)],
):
    """Update a field."""
    try:
        field = service.update_field(field_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not field:
        raise HTTPException(status_code=404, detail="Field not found")
    return field


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_field(
    field_id: str,
    service: Annotated[FieldService, Depends(get_service)],
):
    """Delete a field."""
    if not service.delete_field(field_id):
        raise HTTPException(status_code=404, detail="Field not found")
