"""Pydantic schemas for user administration and the signup whitelist."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class AdminUserUpdate(BaseModel):
    """Schema for granting or revoking admin rights."""

    is_admin: bool


class WhitelistEmailCreate(BaseModel):
    """Schema for whitelisting an email address."""

    email: EmailStr


class WhitelistEmailResponse(BaseModel):
    """Schema for a whitelist entry."""

    id: str
    email: str
    added_by_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
