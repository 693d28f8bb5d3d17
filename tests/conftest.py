"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import date
from uuid import uuid4

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SESSION_SECRET"] = "test-session-secret-for-testing-only"
os.environ["ENVIRONMENT"] = "development"
os.environ["SMTP_HOST"] = ""
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.utils import get_password_hash
from app.db.models import (
    Animal,
    AnimalSex,
    AnimalType,
    Base,
    Field,
    Property,
    User,
)

# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(
    db: Session, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """Create a test client with database override.

    Startup housekeeping runs against the test engine as well.
    """
    # Import here to ensure env vars are set
    from app.dependencies import get_db
    from app.main import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    monkeypatch.setattr("app.main.SessionLocal", TestingSessionLocal)
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def _make_user(db: Session, email: str, password: str, is_admin: bool) -> User:
    first_name = email.split("@")[0].capitalize()
    return _save(
        db,
        User(
            id=str(uuid4()),
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name="User",
            is_admin=is_admin,
        ),
    )


def _logged_in_as(client: TestClient, user: User) -> Generator[TestClient, None, None]:
    """Serve every request as ``user`` without going through login."""
    from app.dependencies import get_current_user
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: user
    yield client
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def test_user(db: Session) -> User:
    """A regular user."""
    return _make_user(db, "test@example.com", "testpassword123", is_admin=False)


@pytest.fixture
def test_admin(db: Session) -> User:
    """An admin user."""
    return _make_user(db, "admin@example.com", "adminpassword123", is_admin=True)


@pytest.fixture
def authenticated_client(client: TestClient, test_user: User) -> Generator[TestClient, None, None]:
    """Client acting as the regular user."""
    yield from _logged_in_as(client, test_user)


@pytest.fixture
def admin_client(client: TestClient, test_admin: User) -> Generator[TestClient, None, None]:
    """Client acting as the admin user."""
    yield from _logged_in_as(client, test_admin)


@pytest.fixture
def test_property(db: Session) -> Property:
    """Create a test property."""
    return _save(db, Property(id=str(uuid4()), name="Home Farm", size_acres=240.0))


@pytest.fixture
def test_field(db: Session, test_property: Property) -> Field:
    """Create a field on the test property."""
    return _save(db, Field(id=str(uuid4()), name="North Paddock", property_id=test_property.id))


@pytest.fixture
def second_field(db: Session, test_property: Property) -> Field:
    """Create a second field on the test property."""
    return _save(db, Field(id=str(uuid4()), name="South Paddock", property_id=test_property.id))


@pytest.fixture
def test_cow(db: Session, test_field: Field) -> Animal:
    """Create a dairy cow grazing the test field."""
    return _save(
        db,
        Animal(
            id=str(uuid4()),
            tag_number="101",
            name="Daisy",
            type=AnimalType.DAIRY,
            sex=AnimalSex.FEMALE,
            date_of_birth=date(2020, 3, 14),
            current_field_id=test_field.id,
        ),
    )


@pytest.fixture
def test_bull(db: Session) -> Animal:
    """Create a beef bull with no field."""
    return _save(
        db,
        Animal(
            id=str(uuid4()),
            tag_number="900",
            name="Duke",
            type=AnimalType.BEEF,
            sex=AnimalSex.MALE,
        ),
    )
