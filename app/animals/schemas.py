"""Pydantic schemas for animals."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.db.models import AnimalSex, AnimalType


class AnimalBase(BaseModel):
    """Base schema for animals."""

    tag_number: str = Field(..., min_length=1, max_length=100)
    name: str | None = Field(None, max_length=255)
    type: AnimalType
    sex: AnimalSex
    date_of_birth: date | None = None
    breeding_method: str | None = Field(None, max_length=100)
    sire_id: str | None = None
    dam_id: str | None = None
    current_field_id: str | None = None


class AnimalCreate(AnimalBase):
    """Schema for creating an animal."""

    pass


class AnimalUpdate(BaseModel):
    """Schema for updating an animal. Explicit nulls clear a reference."""

    tag_number: str | None = Field(None, min_length=1, max_length=100)
    name: str | None = Field(None, max_length=255)
    type: AnimalType | None = None
    sex: AnimalSex | None = None
    date_of_birth: date | None = None
    breeding_method: str | None = Field(None, max_length=100)
    sire_id: str | None = None
    dam_id: str | None = None
    current_field_id: str | None = None


class AnimalResponse(AnimalBase):
    """Schema for animal response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AnimalListItem(AnimalResponse):
    """Animal with the display names of its field and parents."""

    current_field_name: str | None = None
    sire_tag_number: str | None = None
    dam_tag_number: str | None = None
