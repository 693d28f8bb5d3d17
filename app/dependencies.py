"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.auth.sessions import SessionStore
from app.auth.utils import unsign_session_id
from app.config import get_settings
from app.db.database import get_db
from app.db.models import User


def get_session_id(request: Request) -> str | None:
    """Read and verify the signed session cookie.

    Args:
        request: FastAPI request object.

    Returns:
        str | None: The session id, or None if absent or tampered with.
    """
    cookie = request.cookies.get(get_settings().session_cookie_name)
    if not cookie:
        return None
    return unsign_session_id(cookie)


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    session_id: Annotated[str | None, Depends(get_session_id)],
) -> User:
    """Get the current authenticated user from the session cookie.

    The user row is re-fetched on every request, so a deleted user loses
    access immediately.

    Args:
        db: Database session.
        session_id: Verified session id from the cookie.

    Returns:
        User: The authenticated user.

    Raises:
        HTTPException: If there is no live session or the user is gone.
    """
    if session_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    session = SessionStore(db).get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    user = db.query(User).filter(User.id == session.user_id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return user


def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current user and verify they are an admin.

    The admin flag is read from a fresh row, so revoking it takes effect on
    the very next request.

    Args:
        current_user: The authenticated user.
        db: Database session.

    Returns:
        User: The admin user.

    Raises:
        HTTPException: If user is not an admin.
    """
    user = db.query(User).filter(User.id == current_user.id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )
    return user


# Type aliases for cleaner dependency injection
DbSession = Annotated[Session, Depends(get_db)]
SessionId = Annotated[str | None, Depends(get_session_id)]
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[User, Depends(get_current_admin_user)]
