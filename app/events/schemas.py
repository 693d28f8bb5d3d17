"""Pydantic schemas for health and management events."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    """Base schema for events."""

    animal_id: str
    event_type: str = Field(..., min_length=1, max_length=100)
    event_date: date
    description: str | None = None
    notes: str | None = None


class EventCreate(EventBase):
    """Schema for recording an event."""

    pass


class EventUpdate(BaseModel):
    """Schema for updating an event."""

    event_type: str | None = Field(None, min_length=1, max_length=100)
    event_date: date | None = None
    description: str | None = None
    notes: str | None = None


class EventResponse(EventBase):
    """Schema for event response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
