"""Pydantic schemas for authentication."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserSignup(BaseModel):
    """Schema for user signup.

    Attributes:
        email: User's email address (must be whitelisted).
        password: User's password.
        first_name: Optional first name.
        last_name: Optional last name.
    """

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """Schema for user login.

    Attributes:
        email: User's email address.
        password: User's password.
    """

    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash or reset token."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PasswordChange(BaseModel):
    """Schema for password change.

    Attributes:
        current_password: Current password.
        new_password: New password.
    """

    current_password: str
    new_password: str = Field(..., min_length=8, max_length=100)


class PasswordResetRequest(BaseModel):
    """Schema for requesting a password reset."""

    email: EmailStr


class PasswordResetRequestResponse(BaseModel):
    """Response for a password reset request.

    ``reset_token`` is only populated outside production.
    """

    message: str
    reset_token: str | None = None


class PasswordReset(BaseModel):
    """Schema for completing a password reset.

    Attributes:
        token: Reset token from the reset link.
        new_password: New password.
    """

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
