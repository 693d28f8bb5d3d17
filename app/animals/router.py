"""API router for animals."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.animals.schemas import AnimalCreate, AnimalListItem, AnimalResponse, AnimalUpdate
from app.animals.service import AnimalService, get_animal_service
from app.dependencies import CurrentUser, get_db

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> AnimalService:
    """Get animal service dependency (authenticated)."""
    return get_animal_service(db)


@router.get("", response_model=list[AnimalListItem])
async def list_animals(service: Annotated[AnimalService, Depends(get_service)]):
    """List all animals with field and parent names."""
    return service.list_animals()


@router.get("/ready-to-breed", response_model=list[AnimalResponse])
async def ready_to_breed(
    service: Annotated[AnimalService, Depends(get_service)],
    reference_date: date | None = None,
):
    """Females whose last calving was at least 57 days before ``reference_date`` (default today)."""
    return service.get_ready_to_breed(reference_date)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(
    animal_id: str,
    service: Annotated[AnimalService, Depends(get_service)],
):
    """Get an animal by ID."""
    animal = service.get_animal(animal_id)
    if not animal:
        raise HTTPException(status_code=404, detail="Animal not found")
    return animal


@router.get("/{animal_id}/offspring", response_model=list[AnimalListItem])
async def get_offspring(
    animal_id: str,
    service: Annotated[AnimalService, Depends(get_service)],
):
    """List animals sired or mothered by this animal."""
    return service.get_offspring(animal_id)


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal(
    data: AnimalCreate,
    service: Annotated[AnimalService, Depends(get_service)],
):
    """Create a new animal."""
    try:
        return service.create_animal(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{animal_id}", response_model=AnimalResponse)
async def update_animal(
    animal_id: str,
    data: AnimalUpdate,
    service: Annotated[AnimalService, Depends(get_service)],
):
    """Update an animal."""
    try:
        animal = service.update_animal(animal_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not animal:
        raise HTTPException(status_code=404, detail="Animal not found")
    return animal


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal(
    animal_id: str,
    service: Annotated[AnimalService, Depends(get_service)],
):
    """Delete an animal."""
    if not service.delete_animal(animal_id):
        raise HTTPException(status_code=404, detail="Animal not found")
