"""Authentication utilities for passwords, reset tokens and session cookies."""

import hashlib
import hmac
import secrets

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from app.config import get_settings

settings = get_settings()

_serializer = URLSafeTimedSerializer(settings.session_secret, salt="herdlist-session")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password.
        hashed_password: Hashed password to compare against.

    Returns:
        bool: True if password matches, False otherwise.
    """
    password_bytes = plain_password.encode("utf-8")
    hash_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(password_bytes, hash_bytes)


def get_password_hash(password: str) -> str:
    """Hash a password.

    Args:
        password: Plain text password.

    Returns:
        str: Hashed password.
    """
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=10)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def generate_reset_token() -> str:
    """Generate an opaque password reset token.

    Returns:
        str: 64-character hex token.
    """
    return secrets.token_hex(32)


def hash_reset_token(token: str) -> str:
    """Digest a reset token for storage.

    The digest is keyed with the session secret, so a leaked users table
    alone cannot be used to forge reset requests.

    Args:
        token: Plain reset token as handed to the user.

    Returns:
        str: 64-character hex HMAC-SHA256 digest.
    """
    key = settings.session_secret.encode("utf-8")
    return hmac.new(key, token.encode("utf-8"), hashlib.sha256).hexdigest()


def generate_session_id() -> str:
    """Generate a new random server-side session identifier."""
    return secrets.token_urlsafe(32)


def sign_session_id(session_id: str) -> str:
    """Sign a session id for use as the cookie value."""
    return _serializer.dumps(session_id)


def unsign_session_id(cookie_value: str) -> str | None:
    """Validate a session cookie.

    Args:
        cookie_value: Raw cookie value.

    Returns:
        str | None: The session id, or None if the signature is bad or too old.
    """
    try:
        return _serializer.loads(cookie_value, max_age=settings.session_ttl_days * 86400)
    except (BadSignature, SignatureExpired):
        return None
