"""Authentication API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.auth.schemas import (
    MessageResponse,
    PasswordChange,
    PasswordReset,
    PasswordResetRequest,
    PasswordResetRequestResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from app.auth.service import INVALID_CREDENTIALS, AuthService, get_auth_service
from app.auth.utils import sign_session_id
from app.config import get_settings
from app.dependencies import CurrentUser, SessionId, get_db

router = APIRouter()


def get_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
    """Get auth service dependency."""
    return get_auth_service(db)


def _set_session_cookie(response: Response, session_id: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_id(session_id),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        path="/",
    )


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: UserSignup,
    response: Response,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Register a new user and log them in.

    Args:
        data: Signup data.
        response: FastAPI response object.
        service: Auth service.

    Returns:
        UserResponse: The new user.

    Raises:
        HTTPException: 403 if the email is not whitelisted, 400 if taken.
    """
    try:
        user = service.signup(data)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    _set_session_cookie(response, service.start_session(user))
    return user


@router.post("/login", response_model=UserResponse)
async def login(
    data: UserLogin,
    response: Response,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Login with email and password.

    Args:
        data: Login credentials.
        response: FastAPI response object.
        service: Auth service.

    Returns:
        UserResponse: The logged-in user.

    Raises:
        HTTPException: If credentials are invalid.
    """
    user, session_id = service.login(data)
    if not user or not session_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    _set_session_cookie(response, session_id)
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_id: SessionId,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Logout by destroying the session and clearing the cookie."""
    service.logout(session_id)
    response.delete_cookie(get_settings().session_cookie_name, path="/")
    return {"message": "Logged out"}


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser):
    """Get current user information."""
    return current_user


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    current_user: CurrentUser,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Change current user's password.

    Raises:
        HTTPException: If the current password is wrong.
    """
    if not service.change_password(current_user, data.current_password, data.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    return {"message": "Password changed successfully"}


@router.post("/request-password-reset", response_model=PasswordResetRequestResponse)
async def request_password_reset(
    data: PasswordResetRequest,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Request a password reset.

    Always succeeds so the response does not reveal which emails exist.
    Outside production the token is echoed back for local testing.
    """
    token = service.request_password_reset(data.email)
    message = "If an account with that email exists, a password reset link has been sent."
    if token and not get_settings().is_production:
        return PasswordResetRequestResponse(message=message, reset_token=token)
    return PasswordResetRequestResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: PasswordReset,
    service: Annotated[AuthService, Depends(get_service)],
):
    """Reset password using a reset token.

    Raises:
        HTTPException: If token is invalid, consumed or expired.
    """
    if not service.reset_password(data.token, data.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token",
        )
    return {"message": "Password has been reset successfully. You can now log in."}
