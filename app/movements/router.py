"""API router for movements."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.movements.schemas import MovementCreate, MovementDetail, MovementResponse, MovementUpdate
from app.movements.service import MovementService, get_movement_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> MovementService:
    """Get movement service dependency (authenticated)."""
    return get_movement_service(db)


@router.get("/recent", response_model=list[MovementDetail])
async def recent_movements(
    service: Annotated[MovementService, Depends(get_service)],
    limit: Annotated[int, Query(ge=1, le=500)] = 10,
):
    """Most recent movements across all animals."""
    return service.recent(limit)


@router.get("/animal/{animal_id}", response_model=list[MovementDetail])
async def movements_for_animal(
    animal_id: str,
    service: Annotated[MovementService, Depends(get_service)],
):
    """Movement history of an animal."""
    return service.list_by_animal(animal_id)


@router.get("/{movement_id}", response_model=MovementResponse)
async def get_movement(
    movement_id: str,
    service: Annotated[MovementService, Depends(get_service)],
):
    """Get a movement by ID."""
    movement = service.get_movement(movement_id)
    if not movement:
        raise HTTPException(status_code=404, detail="Movement not found")
    return movement


@router.post("", response_model=MovementResponse, status_code=status.HTTP_201_CREATED)
async def create_movement(
    data: MovementCreate,
    service: Annotated[MovementService, Depends(get_service)],
):
    """Record a movement; the animal is moved to the destination field."""
    try:
        return service.create_movement(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{movement_id}", response_model=MovementResponse)
async def update_movement(
    movement_id: str,
    data: MovementUpdate,
    service: Annotated[MovementService, Depends(get_service)],
):
    """Correct a movement's date or notes."""
    try:
        movement = service.update_movement(movement_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not movement:
        raise HTTPException(status_code=404, detail="Movement not found")
    return movement


@router.delete("/{movement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_movement(
    movement_id: str,
    service: Annotated[MovementService, Depends(get_service)],
):
    """Delete a movement."""
    if not service.delete_movement(movement_id):
        raise HTTPException(status_code=404, detail="Movement not found")
