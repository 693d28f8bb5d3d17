"""Initial database schema.

Revision ID: 001
Revises:
Create Date: 2026-10-18

Complete schema for HerdList:
- Properties and their fields
- Animals with sire/dam links and current field
- Movements between fields
- Vaccinations, events, calving and slaughter records
- Users, server-side sessions and the signup whitelist

Reference columns are indexed but carry no foreign key constraints.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "properties",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("size_acres", sa.Float(), nullable=True),
        sa.Column("is_leased", sa.Boolean(), default=False, server_default="0"),
        sa.Column("lease_start_date", sa.Date(), nullable=True),
        sa.Column("lease_end_date", sa.Date(), nullable=True),
        sa.Column("lessor_name", sa.String(255), nullable=True),
        sa.Column("lease_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "fields",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("property_id", mysql.CHAR(36), nullable=False),
        sa.Column("size_acres", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_fields_property_id", "fields", ["property_id"])
    op.create_index("ix_fields_name_property", "fields", ["name", "property_id"])

    op.create_table(
        "animals",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("tag_number", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("type", sa.Enum("dairy", "beef", name="animaltype"), nullable=False),
        sa.Column("sex", sa.Enum("male", "female", name="animalsex"), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("breeding_method", sa.String(100), nullable=True),
        sa.Column("sire_id", mysql.CHAR(36), nullable=True),
        sa.Column("dam_id", mysql.CHAR(36), nullable=True),
        sa.Column("current_field_id", mysql.CHAR(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint("tag_number"),
    )
    op.create_index("ix_animals_sire_id", "animals", ["sire_id"])
    op.create_index("ix_animals_dam_id", "animals", ["dam_id"])
    op.create_index("ix_animals_current_field_id", "animals", ["current_field_id"])

    op.create_table(
        "movements",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("animal_id", mysql.CHAR(36), nullable=False),
        sa.Column("from_field_id", mysql.CHAR(36), nullable=True),
        sa.Column("to_field_id", mysql.CHAR(36), nullable=True),
        sa.Column("movement_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_movements_animal_id", "movements", ["animal_id"])
    op.create_index("ix_movements_movement_date", "movements", ["movement_date"])

    op.create_table(
        "vaccinations",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("animal_id", mysql.CHAR(36), nullable=False),
        sa.Column("vaccine_name", sa.String(255), nullable=False),
        sa.Column("administered_date", sa.Date(), nullable=False),
        sa.Column("dose", sa.String(100), nullable=True),
        sa.Column("administered_by", sa.String(255), nullable=True),
        sa.Column("next_due_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_vaccinations_animal_id", "vaccinations", ["animal_id"])

    op.create_table(
        "events",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("animal_id", mysql.CHAR(36), nullable=False),
        sa.Column("event_type", sa.String(100), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_events_animal_id", "events", ["animal_id"])

    op.create_table(
        "calving_records",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("dam_id", mysql.CHAR(36), nullable=False),
        sa.Column("calving_date", sa.Date(), nullable=False),
        sa.Column("calf_id", mysql.CHAR(36), nullable=True),
        sa.Column("calf_tag_number", sa.String(100), nullable=True),
        sa.Column("calf_sex", sa.Enum("male", "female", name="animalsex"), nullable=True),
        sa.Column("birth_weight", sa.Float(), nullable=True),
        sa.Column("complications", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_calving_records_dam_id", "calving_records", ["dam_id"])
    op.create_index("ix_calving_records_calving_date", "calving_records", ["calving_date"])

    op.create_table(
        "slaughter_records",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("animal_id", mysql.CHAR(36), nullable=False),
        sa.Column("slaughter_date", sa.Date(), nullable=False),
        sa.Column("live_weight", sa.Float(), nullable=True),
        sa.Column("carcass_weight", sa.Float(), nullable=True),
        sa.Column("processor", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_slaughter_records_animal_id", "slaughter_records", ["animal_id"])

    op.create_table(
        "users",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("is_admin", sa.Boolean(), default=False, server_default="0"),
        sa.Column("password_reset_token", sa.String(64), nullable=True),
        sa.Column("password_reset_expires", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("password_reset_token"),
    )

    op.create_table(
        "sessions",
        sa.Column("session_id", sa.String(128), primary_key=True),
        sa.Column("user_id", mysql.CHAR(36), nullable=False),
        sa.Column("expires", sa.DateTime(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])
    op.create_index("ix_sessions_expires", "sessions", ["expires"])

    op.create_table(
        "whitelist_emails",
        sa.Column("id", mysql.CHAR(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("added_by_id", mysql.CHAR(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="uq_whitelist_email"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("whitelist_emails")
    op.drop_table("sessions")
    op.drop_table("users")
    op.drop_table("slaughter_records")
    op.drop_table("calving_records")
    op.drop_table("events")
    op.drop_table("vaccinations")
    op.drop_table("movements")
    op.drop_table("animals")
    op.drop_table("fields")
    op.drop_table("properties")
