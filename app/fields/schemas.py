"""Pydantic schemas for fields."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FieldBase(BaseModel):
    """Base schema for fields."""

    name: str = Field(..., min_length=1, max_length=255)
    property_id: str
    size_acres: float | None = Field(None, ge=0)
    notes: str | None = None


class FieldCreate(FieldBase):
    """Schema for creating a field."""

    pass


class FieldUpdate(BaseModel):
    """Schema for updating a field."""

    name: str | None = Field(None, min_length=1, max_length=255)
    property_id: str | None = None
    size_acres: float | None = Field(None, ge=0)
    notes: str | None = None


class FieldResponse(FieldBase):
    """Schema for field response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PropertyAnimalCount(BaseModel):
    """Animals currently on a property, by type."""

    property_id: str
    property: str
    dairy: int = 0
    beef: int = 0
    total: int = 0


class FieldAnimalCount(BaseModel):
    """Animals currently in a field, by type."""

    field_id: str
    field: str
    property_id: str
    property: str | None = None
    dairy: int = 0
    beef: int = 0
    total: int = 0
