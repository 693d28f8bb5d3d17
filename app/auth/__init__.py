"""Authentication module: passwords, server-side sessions and reset tokens."""

from app.auth.service import AuthService
from app.auth.sessions import SessionStore
from app.auth.utils import (
    get_password_hash,
    hash_reset_token,
    verify_password,
)

__all__ = [
    "AuthService",
    "SessionStore",
    "verify_password",
    "get_password_hash",
    "hash_reset_token",
]
