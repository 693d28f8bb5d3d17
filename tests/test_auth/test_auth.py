"""Tests for authentication module."""

from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.db.models import User, UserSession, WhitelistEmail, utcnow

SESSION_COOKIE = "herdlist_session"


def _signup(client: TestClient, email: str, password: str = "securepassword123"):
    return client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "first_name": "Sam", "last_name": "Farmer"},
    )


def _login(client: TestClient, email: str, password: str):
    return client.post("/api/auth/login", json={"email": email, "password": password})


class TestSignup:
    """Tests for user signup and the whitelist gate."""

    def test_first_user_becomes_admin(self, client: TestClient, db: Session):
        """Test the first account needs no whitelist entry and is an admin."""
        response = _signup(client, "owner@farm.com")

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "owner@farm.com"
        assert data["is_admin"] is True
        assert "password_hash" not in data
        assert SESSION_COOKIE in response.cookies

        user = db.query(User).filter(User.email == "owner@farm.com").first()
        assert user.is_admin is True

    def test_signup_logs_user_in(self, client: TestClient):
        """Test the signup response cookie opens a session."""
        _signup(client, "owner@farm.com")

        response = client.get("/api/auth/user")
        assert response.status_code == 200
        assert response.json()["email"] == "owner@farm.com"

    def test_signup_requires_whitelist(self, client: TestClient, test_user: User):
        """Test signup is rejected once a user exists and the email is not whitelisted."""
        response = _signup(client, "stranger@farm.com")
        assert response.status_code == 403

    def test_signup_whitelisted(self, client: TestClient, db: Session, test_user: User):
        """Test a whitelisted email can sign up, case-insensitively, as a regular user."""
        db.add(WhitelistEmail(email="hand@farm.com"))
        db.commit()

        response = _signup(client, "Hand@Farm.com")

        assert response.status_code == 201
        assert response.json()["email"] == "hand@farm.com"
        assert response.json()["is_admin"] is False

    def test_signup_duplicate_email(self, client: TestClient, db: Session, test_user: User):
        """Test signing up twice with the same email fails."""
        db.add(WhitelistEmail(email=test_user.email))
        db.commit()

        response = _signup(client, test_user.email)
        assert response.status_code == 400

    def test_signup_short_password(self, client: TestClient):
        """Test passwords shorter than 8 characters are rejected."""
        response = _signup(client, "owner@farm.com", password="short")
        assert response.status_code == 422


class TestLogin:
    """Tests for login, logout and session checks."""

    def test_login_success(self, client: TestClient, test_user: User):
        """Test login sets a session cookie and returns the user."""
        response = _login(client, "test@example.com", "testpassword123")

        assert response.status_code == 200
        assert response.json()["id"] == test_user.id
        assert SESSION_COOKIE in response.cookies
        assert client.get("/api/auth/user").status_code == 200

    def test_login_wrong_password(self, client: TestClient, test_user: User):
        """Test wrong password returns generic 401."""
        response = _login(client, "test@example.com", "wrongpassword")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_unknown_email(self, client: TestClient):
        """Test unknown email returns the same generic 401."""
        response = _login(client, "nobody@example.com", "testpassword123")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_user_requires_session(self, client: TestClient):
        """Test protected endpoint without a cookie."""
        response = client.get("/api/auth/user")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_tampered_cookie_rejected(self, client: TestClient, test_user: User):
        """Test a cookie with a bad signature is ignored."""
        client.cookies.set(SESSION_COOKIE, "not-a-signed-session")
        assert client.get("/api/auth/user").status_code == 401

    def test_entity_routes_require_session(self, client: TestClient):
        """Test entity routes are closed to anonymous requests."""
        for path in ("/api/animals", "/api/properties", "/api/fields", "/api/movements/recent"):
            assert client.get(path).status_code == 401

    def test_logout(self, client: TestClient, db: Session, test_user: User):
        """Test logout destroys the server-side session."""
        _login(client, "test@example.com", "testpassword123")
        assert db.query(UserSession).count() == 1

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert db.query(UserSession).count() == 0
        assert client.get("/api/auth/user").status_code == 401

    def test_deleted_user_loses_access(self, client: TestClient, db: Session, test_user: User):
        """Test a live session stops working once the user row is gone."""
        _login(client, "test@example.com", "testpassword123")
        assert client.get("/api/auth/user").status_code == 200

        db.query(User).filter(User.id == test_user.id).delete()
        db.commit()

        assert client.get("/api/auth/user").status_code == 401

    def test_expired_session_rejected(self, client: TestClient, db: Session, test_user: User):
        """Test a session row past its expiry no longer authenticates."""
        _login(client, "test@example.com", "testpassword123")
        session = db.query(UserSession).first()
        session.expires = utcnow() - timedelta(minutes=1)
        db.commit()

        assert client.get("/api/auth/user").status_code == 401


class TestChangePassword:
    """Tests for password change."""

    def test_change_password(self, client: TestClient, test_user: User):
        """Test changing password with the correct current password."""
        _login(client, "test@example.com", "testpassword123")

        response = client.post(
            "/api/auth/change-password",
            json={"current_password": "testpassword123", "new_password": "newpassword456"},
        )

        assert response.status_code == 200
        assert _login(client, "test@example.com", "newpassword456").status_code == 200

    def test_change_password_wrong_current(self, client: TestClient, test_user: User):
        """Test changing password with a wrong current password fails."""
        _login(client, "test@example.com", "testpassword123")

        response = client.post(
            "/api/auth/change-password",
            json={"current_password": "wrongpassword", "new_password": "newpassword456"},
        )
        assert response.status_code == 400


class TestPasswordReset:
    """Tests for the password reset flow."""

    def _request_token(self, client: TestClient, email: str = "test@example.com") -> str:
        response = client.post("/api/auth/request-password-reset", json={"email": email})
        assert response.status_code == 200
        return response.json()["reset_token"]

    def test_only_digest_is_stored(self, client: TestClient, db: Session, test_user: User):
        """Test the plain token never reaches the database."""
        from app.auth.utils import hash_reset_token

        token = self._request_token(client)

        db.refresh(test_user)
        assert test_user.password_reset_token != token
        assert test_user.password_reset_token == hash_reset_token(token)
        assert test_user.password_reset_expires > utcnow()

    def test_unknown_email_still_succeeds(self, client: TestClient):
        """Test the response does not reveal whether an email is registered."""
        response = client.post(
            "/api/auth/request-password-reset", json={"email": "nobody@example.com"}
        )

        assert response.status_code == 200
        assert response.json().get("reset_token") is None

    def test_token_hidden_in_production(self, client: TestClient, test_user: User, monkeypatch):
        """Test the token is only emailed in production."""
        from app.config import get_settings

        monkeypatch.setattr(get_settings(), "environment", "production")
        response = client.post(
            "/api/auth/request-password-reset", json={"email": "test@example.com"}
        )

        assert response.status_code == 200
        assert response.json().get("reset_token") is None

    def test_reset_password(self, client: TestClient, test_user: User):
        """Test resetting the password with a fresh token."""
        token = self._request_token(client)

        response = client.post(
            "/api/auth/reset-password", json={"token": token, "new_password": "brandnew123"}
        )

        assert response.status_code == 200
        assert _login(client, "test@example.com", "brandnew123").status_code == 200
        assert _login(client, "test@example.com", "testpassword123").status_code == 401

    def test_token_cannot_be_reused(self, client: TestClient, test_user: User):
        """Test a consumed token is dead."""
        token = self._request_token(client)
        client.post("/api/auth/reset-password", json={"token": token, "new_password": "brandnew123"})

        response = client.post(
            "/api/auth/reset-password", json={"token": token, "new_password": "another123"}
        )
        assert response.status_code == 400

    def test_expired_token_rejected(self, client: TestClient, db: Session, test_user: User):
        """Test a token past its expiry is dead."""
        token = self._request_token(client)
        db.refresh(test_user)
        test_user.password_reset_expires = utcnow() - timedelta(seconds=1)
        db.commit()

        response = client.post(
            "/api/auth/reset-password", json={"token": token, "new_password": "brandnew123"}
        )
        assert response.status_code == 400

    def test_new_request_replaces_old_token(self, client: TestClient, test_user: User):
        """Test only the most recent token works."""
        first = self._request_token(client)
        second = self._request_token(client)

        bad = client.post(
            "/api/auth/reset-password", json={"token": first, "new_password": "brandnew123"}
        )
        good = client.post(
            "/api/auth/reset-password", json={"token": second, "new_password": "brandnew123"}
        )
        assert bad.status_code == 400
        assert good.status_code == 200

    def test_reset_signs_user_out(self, client: TestClient, db: Session, test_user: User):
        """Test completing a reset drops every session of the user."""
        _login(client, "test@example.com", "testpassword123")
        token = self._request_token(client)

        client.post("/api/auth/reset-password", json={"token": token, "new_password": "brandnew123"})

        assert db.query(UserSession).filter(UserSession.user_id == test_user.id).count() == 0
        assert client.get("/api/auth/user").status_code == 401


class TestSessionStore:
    """Tests for SessionStore."""

    def test_create_and_get(self, db: Session, test_user: User):
        """Test a new session can be loaded by id."""
        from app.auth.sessions import SessionStore

        store = SessionStore(db)
        session_id = store.create(test_user.id)

        session = store.get(session_id)
        assert session is not None
        assert session.user_id == test_user.id

    def test_purge_expired(self, db: Session, test_user: User):
        """Test purge removes only expired rows."""
        from app.auth.sessions import SessionStore

        store = SessionStore(db)
        live = store.create(test_user.id)
        stale = store.create(test_user.id)
        db.query(UserSession).filter(UserSession.session_id == stale).update(
            {UserSession.expires: utcnow() - timedelta(days=1)}
        )
        db.commit()

        assert store.purge_expired() == 1
        assert store.get(live) is not None
        assert store.get(stale) is None

    def test_startup_purges_expired_sessions(
        self, client: TestClient, db: Session, test_user: User, caplog
    ):
        """Test app startup reaps stale sessions without logging a failure."""
        from app.auth.sessions import SessionStore
        from app.main import app

        stale = SessionStore(db).create(test_user.id)
        db.query(UserSession).filter(UserSession.session_id == stale).update(
            {UserSession.expires: utcnow() - timedelta(days=1)}
        )
        db.commit()

        with caplog.at_level("WARNING", logger="app.main"):
            with TestClient(app):
                pass

        db.expire_all()
        assert db.query(UserSession).count() == 0
        assert "Could not purge expired sessions" not in caplog.text

    def test_cookie_signing(self):
        """Test signed session ids round-trip and tampering is detected."""
        from app.auth.utils import sign_session_id, unsign_session_id

        signed = sign_session_id("abc123")
        assert signed != "abc123"
        assert unsign_session_id(signed) == "abc123"
        assert unsign_session_id(signed + "x") is None


class TestEmailService:
    """Tests for the reset email sender."""

    def test_unconfigured_smtp_skips_sending(self, monkeypatch):
        """Test mail is skipped, not attempted, when no SMTP host is set."""
        from unittest.mock import patch

        from app.config import Settings
        from app.email.service import EmailService

        monkeypatch.delenv("SMTP_HOST", raising=False)
        settings = Settings(_env_file=None)
        assert settings.smtp_host == ""

        service = EmailService()
        service.settings = settings
        with patch("smtplib.SMTP_SSL") as smtp_ssl, patch("smtplib.SMTP") as smtp:
            sent = service.send_password_reset_email(
                "owner@farm.com", "Sam", "http://localhost/reset-password?token=x"
            )

        assert sent is False
        smtp_ssl.assert_not_called()
        smtp.assert_not_called()
