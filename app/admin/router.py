"""Admin API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.admin.schemas import AdminUserUpdate, WhitelistEmailCreate, WhitelistEmailResponse
from app.admin.service import AdminService, get_admin_service
from app.auth.schemas import UserResponse
from app.dependencies import CurrentAdmin, get_db

router = APIRouter()


def get_service(
    db: Annotated[Session, Depends(get_db)],
    _admin: CurrentAdmin,  # Ensures only admins can access
) -> AdminService:
    """Get admin service dependency (admin only)."""
    return get_admin_service(db)


@router.get("/users", response_model=list[UserResponse])
async def list_users(service: Annotated[AdminService, Depends(get_service)]):
    """List all users.

    Args:
        service: Admin service.

    Returns:
        list[UserResponse]: All registered users.
    """
    return service.list_users()


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: AdminUserUpdate,
    admin: CurrentAdmin,
    service: Annotated[AdminService, Depends(get_service)],
):
    """Grant or revoke admin rights.

    Raises:
        HTTPException: 404 if the user does not exist, 400 on self-demotion.
    """
    try:
        user = service.set_admin(user_id, data.is_admin, acting_user_id=admin.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/whitelist", response_model=list[WhitelistEmailResponse])
async def list_whitelist(service: Annotated[AdminService, Depends(get_service)]):
    """List whitelisted signup emails."""
    return service.list_whitelist()


@router.post(
    "/whitelist", response_model=WhitelistEmailResponse, status_code=status.HTTP_201_CREATED
)
async def add_whitelist_email(
    data: WhitelistEmailCreate,
    admin: CurrentAdmin,
    service: Annotated[AdminService, Depends(get_service)],
):
    """Whitelist an email for signup."""
    try:
        return service.add_whitelist_email(data.email, added_by_id=admin.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/whitelist/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_whitelist_email(
    email: str,
    service: Annotated[AdminService, Depends(get_service)],
):
    """Remove an email from the whitelist."""
    if not service.remove_whitelist_email(email):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Email not found in whitelist"
        )
