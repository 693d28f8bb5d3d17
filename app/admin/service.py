"""Admin service for user management and the signup whitelist."""

import logging

from sqlalchemy.orm import Session

from app.auth.service import normalize_email
from app.db.models import User, WhitelistEmail, generate_uuid

logger = logging.getLogger(__name__)


class AdminService:
    """Service class for admin-only operations."""

    def __init__(self, db: Session):
        """Initialize admin service.

        Args:
            db: Database session.
        """
        self.db = db

    def list_users(self) -> list[User]:
        """List all users, newest first."""
        return self.db.query(User).order_by(User.created_at.desc(), User.email).all()

    def get_user(self, user_id: str) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def set_admin(self, user_id: str, is_admin: bool, acting_user_id: str) -> User | None:
        """Grant or revoke admin rights.

        Args:
            user_id: User to change.
            is_admin: New admin flag.
            acting_user_id: Admin making the change.

        Returns:
            User | None: Updated user, or None if not found.

        Raises:
            ValueError: If an admin tries to revoke their own rights.
        """
        user = self.get_user(user_id)
        if not user:
            return None
        if user.id == acting_user_id and not is_admin:
            raise ValueError("You cannot remove your own admin rights")

        user.is_admin = is_admin
        self.db.commit()
        logger.info(
            "Admin %s set is_admin=%s for user %s", acting_user_id, is_admin, user_id
        )
        return self.get_user(user_id)

    def list_whitelist(self) -> list[WhitelistEmail]:
        """List whitelisted emails alphabetically."""
        return self.db.query(WhitelistEmail).order_by(WhitelistEmail.email).all()

    def add_whitelist_email(self, email: str, added_by_id: str | None = None) -> WhitelistEmail:
        """Whitelist an email address for signup.

        Args:
            email: Address to allow (case-insensitive).
            added_by_id: Admin adding the entry.

        Returns:
            WhitelistEmail: The stored entry.

        Raises:
            ValueError: If the email is already whitelisted.
        """
        email = normalize_email(email)
        if self.db.query(WhitelistEmail).filter(WhitelistEmail.email == email).first():
            raise ValueError(f"{email} is already whitelisted")

        entry_id = generate_uuid()
        self.db.add(WhitelistEmail(id=entry_id, email=email, added_by_id=added_by_id))
        self.db.commit()
        logger.info("Whitelisted %s", email)
        return self.db.query(WhitelistEmail).filter(WhitelistEmail.id == entry_id).first()

    def remove_whitelist_email(self, email: str) -> bool:
        """Remove an email from the whitelist.

        Existing accounts are not affected; the address just can no longer
        be used to sign up.

        Returns:
            bool: True if an entry was removed.
        """
        deleted = (
            self.db.query(WhitelistEmail)
            .filter(WhitelistEmail.email == normalize_email(email))
            .delete()
        )
        self.db.commit()
        return deleted > 0


def get_admin_service(db: Session) -> AdminService:
    """Factory function for AdminService."""
    return AdminService(db)
