"""API router for vaccinations."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.vaccinations.schemas import VaccinationCreate, VaccinationResponse, VaccinationUpdate
from app.vaccinations.service import VaccinationService, get_vaccination_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> VaccinationService:
    """Get vaccination service dependency (authenticated)."""
    return get_vaccination_service(db)


@router.get("", response_model=list[VaccinationResponse])
async def list_vaccinations(service: Annotated[VaccinationService, Depends(get_service)]):
    """List all vaccinations."""
    return service.list_vaccinations()


@router.get("/animal/{animal_id}", response_model=list[VaccinationResponse])
async def vaccinations_for_animal(
    animal_id: str,
    service: Annotated[VaccinationService, Depends(get_service)],
):
    """Vaccination history of an animal."""
    return service.list_by_animal(animal_id)


@router.get("/{vaccination_id}", response_model=VaccinationResponse)
async def get_vaccination(
    vaccination_id: str,
    service: Annotated[VaccinationService, Depends(get_service)],
):
    """Get a vaccination by ID."""
    vaccination = service.get_vaccination(vaccination_id)
    if not vaccination:
        raise HTTPException(status_code=404, detail="Vaccination not found")
    return vaccination


@router.post("", response_model=VaccinationResponse, status_code=status.HTTP_201_CREATED)
async def create_vaccination(
    data: VaccinationCreate,
    service: Annotated[VaccinationService, Depends(get_service)],
):
    """Record a vaccination."""
    try:
        return service.create_vaccination(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{vaccination_id}", response_model=VaccinationResponse)
async def update_vaccination(
    vaccination_id: str,
    data: VaccinationUpdate,
    service: Annotated[VaccinationService, Depends(get_service)],
):
    """Update a vaccination."""
    try:
        vaccination = service.update_vaccination(vaccination_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not vaccination:
        raise HTTPException(status_code=404, detail="Vaccination not found")
    return vaccination


@router.delete("/{vaccination_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vaccination(
    vaccination_id: str,
    service: Annotated[VaccinationService, Depends(get_service)],
):
    """Delete a vaccination."""
    if not service.delete_vaccination(vaccination_id):
        raise HTTPException(status_code=404, detail="Vaccination not found")
