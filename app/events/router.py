"""API router for events."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.dependencies import CurrentUser, get_db
from app.events.schemas import EventCreate, EventResponse, EventUpdate
from app.events.service import EventService, get_event_service

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _user: CurrentUser,
) -> EventService:
    """Get event service dependency (authenticated)."""
    return get_event_service(db)


@router.get("", response_model=list[EventResponse])
async def list_events(service: Annotated[EventService, Depends(get_service)]):
    """List all events."""
    return service.list_events()


@router.get("/animal/{animal_id}", response_model=list[EventResponse])
async def events_for_animal(
    animal_id: str,
    service: Annotated[EventService, Depends(get_service)],
):
    """Event history of an animal."""
    return service.list_by_animal(animal_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    service: Annotated[EventService, Depends(get_service)],
):
    """Get an event by ID."""
    event = service.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    service: Annotated[EventService, Depends(get_service)],
):
    """Record an event."""
    try:
        return service.create_event(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    data: EventUpdate,
    service: Annotated[EventService, Depends(get_service)],
):
    """Update an event."""
    try:
        event = service.update_event(event_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    service: Annotated[EventService, Depends(get_service)],
):
    """Delete an event."""
    if not service.delete_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
