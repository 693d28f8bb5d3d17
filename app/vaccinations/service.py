"""Vaccination service layer."""

from sqlalchemy.orm import Session

from app.db.models import Animal, Vaccination, generate_uuid
from app.vaccinations.schemas import VaccinationCreate, VaccinationUpdate


class VaccinationService:
    """Service class for the vaccination log."""

    def __init__(self, db: Session):
        """Initialize vaccination service.

        Args:
            db: Database session.
        """
        self.db = db

    def list_vaccinations(self) -> list[Vaccination]:
        """List every vaccination, most recent first."""
        return (
            self.db.query(Vaccination)
            .order_by(Vaccination.administered_date.desc(), Vaccination.created_at.desc())
            .all()
        )

    def get_vaccination(self, vaccination_id: str) -> Vaccination | None:
        """Get a vaccination by ID."""
        return self.db.query(Vaccination).filter(Vaccination.id == vaccination_id).first()

    def list_by_animal(self, animal_id: str) -> list[Vaccination]:
        """Vaccinations given to an animal, most recent first.

        Args:
            animal_id: Animal UUID.

        Returns:
            list[Vaccination]: The animal's vaccination history.
        """
        return (
            self.db.query(Vaccination)
            .filter(Vaccination.animal_id == animal_id)
            .order_by(Vaccination.administered_date.desc(), Vaccination.created_at.desc())
            .all()
        )

    def create_vaccination(self, data: VaccinationCreate) -> Vaccination:
        """Record a vaccination.

        Raises:
            ValueError: If the animal does not exist.
        """
        if not self.db.query(Animal.id).filter(Animal.id == data.animal_id).first():
            raise ValueError("Animal not found")

        vaccination_id = generate_uuid()
        self.db.add(Vaccination(id=vaccination_id, **data.model_dump()))
        self.db.commit()
        return self.get_vaccination(vaccination_id)

    def update_vaccination(
        self, vaccination_id: str, data: VaccinationUpdate
    ) -> Vaccination | None:
        """Partially update a vaccination.

        Raises:
            ValueError: If a required value is cleared.
        """
        vaccination = self.get_vaccination(vaccination_id)
        if not vaccination:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("vaccine_name", "administered_date"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")

        for key, value in changes.items():
            setattr(vaccination, key, value)

        self.db.commit()
        return self.get_vaccination(vaccination_id)

    def delete_vaccination(self, vaccination_id: str) -> bool:
        """Delete a vaccination. Returns False if it did not exist."""
        deleted = self.db.query(Vaccination).filter(Vaccination.id == vaccination_id).delete()
        self.db.commit()
        return deleted > 0


def get_vaccination_service(db: Session) -> VaccinationService:
    """Factory function for VaccinationService."""
    return VaccinationService(db)
