"""API router for properties."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.properties.schemas import PropertyCreate, PropertyResponse, PropertyUpdate
from app.properties.service import PropertyService, get_property_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> PropertyService:
    """Get property service dependency (authenticated)."""
    return get_property_service(db)


@router.get("", response_model=list[PropertyResponse])
async def list_properties(service: Annotated[PropertyService, Depends(get_service)]):
    """List all properties."""
    return service.list_properties()


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: str,
    service: Annotated[PropertyService, Depends(get_service)],
):
    """Get a property by ID."""
    prop = service.get_property(property_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    data: PropertyCreate,
    service: Annotated[PropertyService, Depends(get_service)],
):
    """Create a new property."""
    try:
        return service.create_property(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    data: PropertyUpdate,
    service: Annotated[PropertyService, Depends(get_service)],
):
    """Update a property."""
    try:
        prop = service.update_property(property_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    property_id: str,
    service: Annotated[PropertyService, Depends(get_service)],
):
    """Delete a property."""
    if not service.delete_property(property_id):
        raise HTTPException(status_code=404, detail="Property not found")
