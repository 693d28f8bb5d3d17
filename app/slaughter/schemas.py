"""Pydantic schemas for slaughter records."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SlaughterRecordBase(BaseModel):
    """Base schema for slaughter records."""

    animal_id: str
    slaughter_date: date
    live_weight: float | None = Field(None, ge=0)
    carcass_weight: float | None = Field(None, ge=0)
    processor: str | None = Field(None, max_length=255)
    notes: str | None = None


class SlaughterRecordCreate(SlaughterRecordBase):
    """Schema for recording a slaughter."""

    @model_validator(mode="after")
    def carcass_not_heavier(self) -> "SlaughterRecordCreate":
        """Validate the carcass weight does not exceed the live weight."""
        if (
            self.live_weight is not None
            and self.carcass_weight is not None
            and self.carcass_weight > self.live_weight
        ):
            raise ValueError("Carcass weight cannot exceed live weight")
        return self


class SlaughterRecordUpdate(BaseModel):
    """Schema for updating a slaughter record."""

    slaughter_date: date | None = None
    live_weight: float | None = Field(None, ge=0)
    carcass_weight: float | None = Field(None, ge=0)
    processor: str | None = Field(None, max_length=255)
    notes: str | None = None


class SlaughterRecordResponse(SlaughterRecordBase):
    """Schema for slaughter record response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
