"""Pydantic schemas for properties."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PropertyBase(BaseModel):
    """Base schema for properties."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    size_acres: float | None = Field(None, ge=0)
    is_leased: bool = False
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    lessor_name: str | None = Field(None, max_length=255)
    lease_notes: str | None = None


class PropertyCreate(PropertyBase):
    """Schema for creating a property."""

    @model_validator(mode="after")
    def lease_dates_ordered(self) -> "PropertyCreate":
        """Validate the lease does not end before it starts."""
        if (
            self.lease_start_date
            and self.lease_end_date
            and self.lease_end_date < self.lease_start_date
        ):
            raise ValueError("Lease end date must be on or after the start date")
        return self


class PropertyUpdate(BaseModel):
    """Schema for updating a property. Only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    size_acres: float | None = Field(None, ge=0)
    is_leased: bool | None = None
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    lessor_name: str | None = Field(None, max_length=255)
    lease_notes: str | None = None


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
