"""Authentication service layer."""

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.auth.schemas import UserLogin, UserSignup
from app.auth.sessions import SessionStore
from app.auth.utils import (
    generate_reset_token,
    get_password_hash,
    hash_reset_token,
    verify_password,
)
from app.config import get_settings
from app.db.models import User, WhitelistEmail, utcnow
from app.email.service import get_email_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address for storage and lookup."""
    return email.strip().lower()


class AuthService:
    """Service class for authentication operations."""

    def __init__(self, db: Session):
        """Initialize auth service.

        Args:
            db: Database session.
        """
        self.db = db
        self.sessions = SessionStore(db)
        self.settings = get_settings()

    def get_user(self, user_id: str) -> User | None:
        """Get a user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def is_whitelisted(self, email: str) -> bool:
        """Check whether an email may sign up."""
        return (
            self.db.query(WhitelistEmail)
            .filter(WhitelistEmail.email == normalize_email(email))
            .first()
            is not None
        )

    def signup(self, data: UserSignup) -> User:
        """Register a new user.

        The very first user of an empty installation is created as an admin
        without a whitelist entry; everyone else must be whitelisted.

        Args:
            data: Signup data.

        Returns:
            User: Created user.

        Raises:
            PermissionError: If the email is not whitelisted.
            ValueError: If the email is already registered.
        """
        email = normalize_email(data.email)
        first_user = self.db.query(User).first() is None

        if not first_user and not self.is_whitelisted(email):
            logger.info("Signup rejected for non-whitelisted email %s", email)
            raise PermissionError("This email is not approved to register")

        if self.get_user_by_email(email):
            raise ValueError("An account with this email already exists")

        user = self.create_user(
            email=email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            is_admin=first_user,
        )
        logger.info("New user %s signed up (admin=%s)", email, first_user)
        return user

    def create_user(
        self,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        is_admin: bool = False,
    ) -> User:
        """Insert a user row and re-read it.

        Args:
            email: Login email.
            password: Plain text password.
            first_name: Optional first name.
            last_name: Optional last name.
            is_admin: Admin flag.

        Returns:
            User: The stored user.
        """
        user = User(
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            first_name=first_name or None,
            last_name=last_name or None,
            is_admin=is_admin,
        )
        self.db.add(user)
        self.db.commit()
        return self.get_user(user.id)

    def authenticate(self, data: UserLogin) -> User | None:
        """Check credentials.

        Unknown email and wrong password are indistinguishable to the caller.

        Args:
            data: Login credentials.

        Returns:
            User | None: The user if the credentials are valid.
        """
        user = self.get_user_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Failed login attempt for %s", normalize_email(data.email))
            return None
        return user

    def login(self, data: UserLogin) -> tuple[User | None, str | None]:
        """Authenticate and open a session.

        Args:
            data: Login credentials.

        Returns:
            tuple: (User or None, session id or None).
        """
        user = self.authenticate(data)
        if not user:
            return None, None

        self.sessions.purge_expired()
        session_id = self.sessions.create(user.id)
        logger.info("User %s logged in", user.email)
        return user, session_id

    def start_session(self, user: User) -> str:
        """Open a session for an already verified user (e.g. right after signup)."""
        return self.sessions.create(user.id)

    def logout(self, session_id: str | None) -> None:
        """Close a session if one is open."""
        if session_id:
            self.sessions.destroy(session_id)

    def change_password(self, user: User, current_password: str, new_password: str) -> bool:
        """Change user's password.

        Args:
            user: User model.
            current_password: Current password.
            new_password: New password.

        Returns:
            bool: True if successful, False if the current password is wrong.
        """
        if not verify_password(current_password, user.password_hash):
            return False

        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        return True

    def request_password_reset(self, email: str) -> str | None:
        """Issue a password reset token for a user.

        Only the token's digest is persisted. The plain token is emailed as a
        reset link and returned so the caller can decide whether to expose it.
        A second request replaces any outstanding token.

        Args:
            email: User's email address.

        Returns:
            str | None: The plain token, or None if no such user exists.
        """
        user = self.get_user_by_email(email)
        if not user:
            return None

        token = generate_reset_token()
        user.password_reset_token = hash_reset_token(token)
        user.password_reset_expires = utcnow() + timedelta(
            minutes=self.settings.password_reset_expire_minutes
        )
        self.db.commit()
        logger.info("Password reset token issued for %s", user.email)

        reset_url = f"{self.settings.app_base_url}/reset-password?token={token}"
        get_email_service().send_password_reset_email(
            to_email=user.email,
            name=user.first_name or user.email,
            reset_url=reset_url,
        )
        return token

    def get_user_by_reset_token(self, token: str) -> User | None:
        """Find the user owning a live reset token.

        Expired tokens never match, so they are dead without any cleanup.

        Args:
            token: Plain reset token.

        Returns:
            User | None: The owner, or None if unknown, consumed or expired.
        """
        return (
            self.db.query(User)
            .filter(
                User.password_reset_token == hash_reset_token(token),
                User.password_reset_expires >= utcnow(),
            )
            .first()
        )

    def reset_password(self, token: str, new_password: str) -> bool:
        """Reset a user's password using a reset token.

        Consumes the token and signs the user out everywhere.

        Args:
            token: Password reset token.
            new_password: New password to set.

        Returns:
            bool: True on success, False if the token is invalid or expired.
        """
        user = self.get_user_by_reset_token(token)
        if not user:
            return False

        user.password_hash = get_password_hash(new_password)
        user.password_reset_token = None
        user.password_reset_expires = None
        self.db.commit()
        self.sessions.destroy_user_sessions(user.id)
        logger.info("Password reset completed for %s", user.email)
        return True


def get_auth_service(db: Session) -> AuthService:
    """Factory function for AuthService.

    Args:
        db: Database session.

    Returns:
        AuthService: Auth service instance.
    """
    return AuthService(db)
