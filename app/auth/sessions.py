"""Database-backed session store."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.auth.utils import generate_session_id
from app.config import get_settings
from app.db.models import UserSession, utcnow

logger = logging.getLogger(__name__)


class SessionStore:
    """Stores login sessions in the ``sessions`` table, keyed by session id."""

    def __init__(self, db: Session, ttl_days: int | None = None):
        """Initialize the session store.

        Args:
            db: Database session.
            ttl_days: Session lifetime; defaults to the configured value.
        """
        self.db = db
        self.ttl = timedelta(days=ttl_days or get_settings().session_ttl_days)

    def create(self, user_id: str, data: dict | None = None) -> str:
        """Open a new session for a user.

        Args:
            user_id: User UUID.
            data: Optional extra session payload.

        Returns:
            str: The new session id.
        """
        session_id = generate_session_id()
        self.db.add(
            UserSession(
                session_id=session_id,
                user_id=user_id,
                expires=utcnow() + self.ttl,
                data=data or {},
            )
        )
        self.db.commit()
        return session_id

    def get(self, session_id: str) -> UserSession | None:
        """Get a live (non-expired) session.

        Args:
            session_id: Session id from the cookie.

        Returns:
            UserSession | None: The session row, or None if missing or expired.
        """
        return (
            self.db.query(UserSession)
            .filter(UserSession.session_id == session_id, UserSession.expires > utcnow())
            .first()
        )

    def destroy(self, session_id: str) -> None:
        """Delete a single session."""
        self.db.query(UserSession).filter(UserSession.session_id == session_id).delete()
        self.db.commit()

    def destroy_user_sessions(self, user_id: str) -> int:
        """Delete every session belonging to a user.

        Returns:
            int: Number of sessions removed.
        """
        count = self.db.query(UserSession).filter(UserSession.user_id == user_id).delete()
        self.db.commit()
        return count

    def purge_expired(self) -> int:
        """Reap expired sessions.

        Returns:
            int: Number of sessions removed.
        """
        count = self.db.query(UserSession).filter(UserSession.expires <= utcnow()).delete()
        self.db.commit()
        if count:
            logger.info("Purged %d expired sessions", count)
        return count
