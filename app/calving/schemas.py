"""Pydantic schemas for calving records."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.db.models import AnimalSex


class CalvingRecordBase(BaseModel):
    """Base schema for calving records."""

    dam_id: str
    calving_date: date
    calf_id: str | None = None
    calf_tag_number: str | None = Field(None, max_length=100)
    calf_sex: AnimalSex | None = None
    birth_weight: float | None = Field(None, ge=0)
    complications: str | None = None
    notes: str | None = None


class CalvingRecordCreate(CalvingRecordBase):
    """Schema for recording a calving."""

    pass


class CalvingRecordUpdate(BaseModel):
    """Schema for updating a calving record."""

    dam_id: str | None = None
    calving_date: date | None = None
    calf_id: str | None = None
    calf_tag_number: str | None = Field(None, max_length=100)
    calf_sex: AnimalSex | None = None
    birth_weight: float | None = Field(None, ge=0)
    complications: str | None = None
    notes: str | None = None


class CalvingRecordResponse(CalvingRecordBase):
    """Schema for calving record response."""

    id: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
