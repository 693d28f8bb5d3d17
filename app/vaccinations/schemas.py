"""Pydantic schemas for vaccinations."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class VaccinationBase(BaseModel):
    """Base schema for vaccinations."""

    animal_id: str
    vaccine_name: str = Field(..., min_length=1, max_length=255)
    administered_date: date
    dose: str | None = Field(None, max_length=100)
    administered_by: str | None = Field(None, max_length=255)
    next_due_date: date | None = None
    notes: str | None = None


class VaccinationCreate(VaccinationBase):
    """Schema for recording a vaccination."""

    pass


class VaccinationUpdate(BaseModel):
    """Schema for updating a vaccination."""

    vaccine_name: str | None = Field(None, min_length=1, max_length=255)
    administered_date: date | None = None
    dose: str | None = Field(None, max_length=100)
    administered_by: str | None = Field(None, max_length=255)
    next_due_date: date | None = None
    notes: str | None = None


class VaccinationResponse(VaccinationBase):
    """Schema for vaccination response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
