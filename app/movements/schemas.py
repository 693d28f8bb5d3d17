"""Pydantic schemas for movements."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class MovementCreate(BaseModel):
    """Schema for recording a movement.

    When ``from_field_id`` is omitted it defaults to the animal's current field.
    """

    animal_id: str
    from_field_id: str | None = None
    to_field_id: str | None = None
    movement_date: date = Field(default_factory=date.today)
    notes: str | None = None


class MovementUpdate(BaseModel):
    """Schema for correcting a movement's date or notes."""

    movement_date: date | None = None
    notes: str | None = None


class MovementResponse(BaseModel):
    """Schema for movement response."""

    id: str
    animal_id: str
    from_field_id: str | None = None
    to_field_id: str | None = None
    movement_date: date
    notes: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MovementDetail(MovementResponse):
    """Movement with field names and the animal's tag number."""

    from_field_name: str | None = None
    to_field_name: str | None = None
    animal_tag_number: str | None = None
