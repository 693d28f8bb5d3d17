"""SQLAlchemy database models.

Reference columns (``sire_id``, ``current_field_id``, ``animal_id`` ...) are
plain indexed ``CHAR(36)`` columns without database-level foreign key
constraints. Deleting a referenced row never cascades and is never rejected;
referencing rows keep the now-dangling id.
"""

import enum
from datetime import UTC, date, datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.mysql import CHAR
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys.

    Returns:
        str: UUID as 36-character string.
    """
    return str(uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching how DateTime columns are stored."""
    return datetime.now(UTC).replace(tzinfo=None)


class AnimalType(str, enum.Enum):
    """Production type of an animal."""

    DAIRY = "dairy"
    BEEF = "beef"


class AnimalSex(str, enum.Enum):
    """Animal sex. Sires must be male, dams female."""

    MALE = "male"
    FEMALE = "female"


def _enum_column(enum_cls: type[enum.Enum], **kwargs):
    return mapped_column(Enum(enum_cls, values_callable=lambda x: [e.value for e in x]), **kwargs)


class Property(Base):
    """A farm property (owned or leased) that contains fields.

    Attributes:
        id: Primary key UUID.
        name: Unique property name.
        address: Optional postal address.
        size_acres: Optional total size.
        is_leased: Whether the property is leased rather than owned.
        lease_start_date: Lease start, if leased.
        lease_end_date: Lease end, if leased.
        lessor_name: Who the property is leased from.
        lease_notes: Free-form lease terms.
        created_at: Creation timestamp.
    """

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    size_acres: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_leased: Mapped[bool] = mapped_column(Boolean, default=False)
    lease_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lease_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lessor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lease_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Field(Base):
    """A paddock/field belonging to a property.

    Attributes:
        id: Primary key UUID.
        name: Field name, unique within its property for lookups.
        property_id: Owning property.
        size_acres: Optional field size.
        notes: Free-form notes.
        created_at: Creation timestamp.
    """

    __tablename__ = "fields"
    __table_args__ = (
        Index("ix_fields_property_id", "property_id"),
        Index("ix_fields_name_property", "name", "property_id"),
    )

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    size_acres: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Animal(Base):
    """An animal in the herd.

    Attributes:
        id: Primary key UUID.
        tag_number: Unique ear-tag number.
        name: Optional name.
        type: Dairy or beef.
        sex: Male or female.
        date_of_birth: Optional birth date.
        breeding_method: How the animal was bred (e.g. "natural", "AI").
        sire_id: Father (must be a male animal when set).
        dam_id: Mother (must be a female animal when set).
        current_field_id: Field the animal is currently in.
        created_at: Creation timestamp.
    """

    __tablename__ = "animals"
    __table_args__ = (
        Index("ix_animals_sire_id", "sire_id"),
        Index("ix_animals_dam_id", "dam_id"),
        Index("ix_animals_current_field_id", "current_field_id"),
    )

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    tag_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[AnimalType] = _enum_column(AnimalType, nullable=False)
    sex: Mapped[AnimalSex] = _enum_column(AnimalSex, nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    breeding_method: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sire_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    dam_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    current_field_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Movement(Base):
    """A relocation of an animal between fields.

    Attributes:
        id: Primary key UUID.
        animal_id: Animal that moved.
        from_field_id: Origin field, if known.
        to_field_id: Destination field, if any.
        movement_date: Date of the move.
        notes: Free-form notes.
        created_at: Creation timestamp.
    """

    __tablename__ = "movements"
    __table_args__ = (
        Index("ix_movements_animal_id", "animal_id"),
        Index("ix_movements_movement_date", "movement_date"),
    )

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    animal_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    from_field_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    to_field_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    movement_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Vaccination(Base):
    """A vaccine administered to an animal."""

    __tablename__ = "vaccinations"
    __table_args__ = (Index("ix_vaccinations_animal_id", "animal_id"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    animal_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    vaccine_name: Mapped[str] = mapped_column(String(255), nullable=False)
    administered_date: Mapped[date] = mapped_column(Date, nullable=False)
    dose: Mapped[str | None] = mapped_column(String(100), nullable=True)
    administered_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Event(Base):
    """A health or management event recorded against an animal."""

    __tablename__ = "events"
    __table_args__ = (Index("ix_events_animal_id", "animal_id"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    animal_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class CalvingRecord(Base):
    """A calving (birth) event linking a dam to her calf.

    Attributes:
        id: Primary key UUID.
        dam_id: Mother animal.
        calving_date: Date of birth of the calf.
        calf_id: The calf's own animal row, once registered.
        calf_tag_number: Tag number given to the calf.
        calf_sex: Sex of the calf.
        birth_weight: Birth weight in kg.
        complications: Description of any difficulties.
        notes: Free-form notes.
        created_at: Creation timestamp.
    """

    __tablename__ = "calving_records"
    __table_args__ = (
        Index("ix_calving_records_dam_id", "dam_id"),
        Index("ix_calving_records_calving_date", "calving_date"),
    )

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    dam_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    calving_date: Mapped[date] = mapped_column(Date, nullable=False)
    calf_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    calf_tag_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    calf_sex: Mapped[AnimalSex | None] = _enum_column(AnimalSex, nullable=True)
    birth_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    complications: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class SlaughterRecord(Base):
    """Slaughter and processing details for an animal."""

    __tablename__ = "slaughter_records"
    __table_args__ = (Index("ix_slaughter_records_animal_id", "animal_id"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    animal_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    slaughter_date: Mapped[date] = mapped_column(Date, nullable=False)
    live_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    carcass_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    processor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class User(Base):
    """User model.

    Attributes:
        id: Primary key UUID.
        email: Unique login email.
        password_hash: bcrypt hash.
        first_name: Optional first name.
        last_name: Optional last name.
        is_admin: Whether the user can manage users and the whitelist.
        password_reset_token: HMAC digest of the outstanding reset token.
        password_reset_expires: When the outstanding reset token stops working.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    password_reset_token: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    password_reset_expires: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, onupdate=utcnow)


class UserSession(Base):
    """Server-side login session, referenced by the signed session cookie."""

    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_user_id", "user_id"),
        Index("ix_sessions_expires", "expires"),
    )

    session_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(CHAR(36), nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    data: Mapped[dict] = mapped_column(JSON, default=dict)


class WhitelistEmail(Base):
    """An email address pre-approved to sign up."""

    __tablename__ = "whitelist_emails"
    __table_args__ = (UniqueConstraint("email", name="uq_whitelist_email"),)

    id: Mapped[str] = mapped_column(CHAR(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    added_by_id: Mapped[str | None] = mapped_column(CHAR(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
