"""Slaughter record service layer."""

from sqlalchemy.orm import Session

from app.db.models import Animal, SlaughterRecord, generate_uuid
from app.slaughter.schemas import SlaughterRecordCreate, SlaughterRecordUpdate


class SlaughterService:
    """Service class for slaughter records."""

    def __init__(self, db: Session):
        """Initialize slaughter service.

        Args:
            db: Database session.
        """
        self.db = db

    def list_slaughter_records(self) -> list[SlaughterRecord]:
        """List every slaughter record, most recent first."""
        return (
            self.db.query(SlaughterRecord)
            .order_by(SlaughterRecord.slaughter_date.desc(), SlaughterRecord.created_at.desc())
            .all()
        )

    def get_slaughter_record(self, record_id: str) -> SlaughterRecord | None:
        """Get a slaughter record by ID."""
        return self.db.query(SlaughterRecord).filter(SlaughterRecord.id == record_id).first()

    def create_slaughter_record(self, data: SlaughterRecordCreate) -> SlaughterRecord:
        """Record a slaughter.

        The animal row is kept; the record is the animal's end-of-life entry.

        Raises:
            ValueError: If the animal does not exist.
        """
        if not self.db.query(Animal.id).filter(Animal.id == data.animal_id).first():
            raise ValueError("Animal not found")

        record_id = generate_uuid()
        self.db.add(SlaughterRecord(id=record_id, **data.model_dump()))
        self.db.commit()
        return self.get_slaughter_record(record_id)

    def update_slaughter_record(
        self, record_id: str, data: SlaughterRecordUpdate
    ) -> SlaughterRecord | None:
        record = self.get_slaughter_record(record_id)
        if not record:
            return None

        changes = data.model_dump(exclude_unset=True)
        if "slaughter_date" in changes and changes["slaughter_date"] is None:
            raise ValueError("slaughter_date cannot be cleared")

        live = changes.get("live_weight", record.live_weight)
        carcass = changes.get("carcass_weight", record.carcass_weight)
        if live is not None and carcass is not None and carcass > live:
            raise ValueError("Carcass weight cannot exceed live weight")

        for key, value in changes.items():
            setattr(record, key, value)

        self.db.commit()
        return self.get_slaughter_record(record_id)

    def delete_slaughter_record(self, record_id: str) -> bool:
        deleted = self.db.query(SlaughterRecord).filter(SlaughterRecord.id == record_id).delete()
        self.db.commit()
        return deleted > 0


def get_slaughter_service(db: Session) -> SlaughterService:
    """Factory function for SlaughterService."""
    return SlaughterService(db)
