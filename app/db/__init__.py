"""Database module."""

from app.db.database import SessionLocal, engine, get_db, init_db
from app.db.models import (
    Animal,
    Base,
    CalvingRecord,
    Event,
    Field,
    Movement,
    Property,
    SlaughterRecord,
    User,
    UserSession,
    Vaccination,
    WhitelistEmail,
)

__all__ = [
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
    "Base",
    "Animal",
    "Property",
    "Field",
    "Movement",
    "Vaccination",
    "Event",
    "CalvingRecord",
    "SlaughterRecord",
    "User",
    "UserSession",
    "WhitelistEmail",
]
