"""Calving record service layer."""

import logging

from sqlalchemy.orm import Session

from app.calving.schemas import CalvingRecordCreate, CalvingRecordUpdate
from app.db.models import Animal, AnimalSex, CalvingRecord, generate_uuid

logger = logging.getLogger(__name__)


class CalvingService:
    """Service class for calving records.

    The most recent calving of each dam drives the ready-to-breed list
    (see ``AnimalService.get_ready_to_breed``).
    """

    def __init__(self, db: Session):
        """Initialize calving service.

        Args:
            db: Database session.
        """
        self.db = db

    def _validate(self, values: dict, current_dam_id: str | None = None) -> None:
        """Check dam and calf references.

        Raises:
            ValueError: If the dam is missing or not female, or the calf is unknown.
        """
        if values.get("dam_id"):
            dam = self.db.query(Animal).filter(Animal.id == values["dam_id"]).first()
            if not dam:
                raise ValueError("Dam not found")
            if dam.sex != AnimalSex.FEMALE:
                raise ValueError("Dam must be a female animal")
        if values.get("calf_id"):
            if values["calf_id"] == values.get("dam_id", current_dam_id):
                raise ValueError("A dam cannot be her own calf")
            if not self.db.query(Animal.id).filter(Animal.id == values["calf_id"]).first():
                raise ValueError("Calf not found")

    def list_calving_records(self) -> list[CalvingRecord]:
        """List every calving record, most recent first."""
        return (
            self.db.query(CalvingRecord)
            .order_by(CalvingRecord.calving_date.desc(), CalvingRecord.created_at.desc())
            .all()
        )

    def get_calving_record(self, record_id: str) -> CalvingRecord | None:
        """Get a calving record by ID."""
        return self.db.query(CalvingRecord).filter(CalvingRecord.id == record_id).first()

    def list_by_dam(self, dam_id: str) -> list[CalvingRecord]:
        """Calvings of a dam, most recent first.

        Args:
            dam_id: Dam animal UUID.

        Returns:
            list[CalvingRecord]: The dam's calving history.
        """
        return (
            self.db.query(CalvingRecord)
            .filter(CalvingRecord.dam_id == dam_id)
            .order_by(CalvingRecord.calving_date.desc(), CalvingRecord.created_at.desc())
            .all()
        )

    def create_calving_record(self, data: CalvingRecordCreate) -> CalvingRecord:
        """Record a calving.

        Args:
            data: Calving data.

        Returns:
            CalvingRecord: The stored record.

        Raises:
            ValueError: If the dam or calf reference is invalid.
        """
        values = data.model_dump()
        self._validate(values)

        record_id = generate_uuid()
        self.db.add(CalvingRecord(id=record_id, **values))
        self.db.commit()
        logger.info("Recorded calving for dam %s on %s", data.dam_id, data.calving_date)
        return self.get_calving_record(record_id)

    def update_calving_record(
        self, record_id: str, data: CalvingRecordUpdate
    ) -> CalvingRecord | None:
        """Partially update a calving record.

        Raises:
            ValueError: If a required value is cleared or a reference is invalid.
        """
        record = self.get_calving_record(record_id)
        if not record:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("dam_id", "calving_date"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")
        self._validate(changes, current_dam_id=record.dam_id)

        for key, value in changes.items():
            setattr(record, key, value)

        self.db.commit()
        return self.get_calving_record(record_id)

    def delete_calving_record(self, record_id: str) -> bool:
        """Delete a calving record. Returns False if it did not exist."""
        deleted = self.db.query(CalvingRecord).filter(CalvingRecord.id == record_id).delete()
        self.db.commit()
        return deleted > 0


def get_calving_service(db: Session) -> CalvingService:
    """Factory function for CalvingService."""
    return CalvingService(db)
