"""Animal service layer."""

from datetime import date, timedelta

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, aliased

from app.animals.schemas import AnimalCreate, AnimalListItem, AnimalResponse, AnimalUpdate
from app.db.models import Animal, AnimalSex, CalvingRecord, Field, generate_uuid

# Days after calving before a cow is rebred
READY_TO_BREED_DAYS = 57


def ready_to_breed_threshold(reference_date: date | None = None) -> date:
    """Latest calving date that still counts as ready to breed on ``reference_date``."""
    return (reference_date or date.today()) - timedelta(days=READY_TO_BREED_DAYS)


def _list_item(animal: Animal, **extra) -> AnimalListItem:
    return AnimalListItem(**AnimalResponse.model_validate(animal).model_dump(), **extra)


class AnimalService:
    """Service class for animal operations."""

    def __init__(self, db: Session):
        """Initialize animal service.

        Args:
            db: Database session.
        """
        self.db = db

    def _check_parent(
        self, parent_id: str, expected_sex: AnimalSex, role: str, animal_id: str | None
    ) -> None:
        if animal_id and parent_id == animal_id:
            raise ValueError("An animal cannot be its own parent")
        parent = self.get_animal(parent_id)
        if not parent:
            raise ValueError(f"{role} not found")
        if parent.sex != expected_sex:
            raise ValueError(f"{role} must be a {expected_sex.value} animal")

    def _validate_references(self, values: dict, animal_id: str | None = None) -> None:
        """Check sire/dam/field references.

        Raises:
            ValueError: If a reference is missing or has the wrong sex.
        """
        if values.get("sire_id"):
            self._check_parent(values["sire_id"], AnimalSex.MALE, "Sire", animal_id)
        if values.get("dam_id"):
            self._check_parent(values["dam_id"], AnimalSex.FEMALE, "Dam", animal_id)
        if values.get("current_field_id"):
            field = self.db.query(Field.id).filter(Field.id == values["current_field_id"]).first()
            if not field:
                raise ValueError("Field not found")

    def _check_sex_change(self, animal: Animal, new_sex: AnimalSex) -> None:
        """Refuse a sex change that would break an existing parent role.

        Raises:
            ValueError: If the animal is recorded as a sire, dam or calving dam.
        """
        if new_sex == animal.sex:
            return
        is_parent = (
            self.db.query(Animal.id)
            .filter(or_(Animal.sire_id == animal.id, Animal.dam_id == animal.id))
            .first()
        )
        has_calved = (
            self.db.query(CalvingRecord.id).filter(CalvingRecord.dam_id == animal.id).first()
        )
        if is_parent or has_calved:
            raise ValueError("Cannot change the sex of an animal recorded as a parent")

    def _ensure_unique_tag(self, tag_number: str, exclude_id: str | None = None) -> None:
        query = self.db.query(Animal).filter(Animal.tag_number == tag_number)
        if exclude_id:
            query = query.filter(Animal.id != exclude_id)
        if query.first():
            raise ValueError(f"Tag number '{tag_number}' already exists")

    def list_animals(self) -> list[AnimalListItem]:
        """List all animals with field name and parent tag numbers.

        Returns:
            list[AnimalListItem]: Animals ordered by tag number.
        """
        sire = aliased(Animal, name="sire_animals")
        dam = aliased(Animal, name="dam_animals")

        rows = (
            self.db.query(Animal, Field.name, sire.tag_number, dam.tag_number)
            .outerjoin(Field, Animal.current_field_id == Field.id)
            .outerjoin(sire, Animal.sire_id == sire.id)
            .outerjoin(dam, Animal.dam_id == dam.id)
            .order_by(Animal.tag_number)
            .all()
        )
        return [
            _list_item(
                animal,
                current_field_name=field_name,
                sire_tag_number=sire_tag,
                dam_tag_number=dam_tag,
            )
            for animal, field_name, sire_tag, dam_tag in rows
        ]

    def get_animal(self, animal_id: str) -> Animal | None:
        """Get an animal by ID.

        Args:
            animal_id: Animal UUID.

        Returns:
            Animal | None: Animal if found.
        """
        return self.db.query(Animal).filter(Animal.id == animal_id).first()

    def get_animal_by_tag_number(self, tag_number: str) -> Animal | None:
        """Get an animal by its unique tag number."""
        return self.db.query(Animal).filter(Animal.tag_number == tag_number).first()

    def create_animal(self, data: AnimalCreate) -> Animal:
        """Create a new animal.

        Args:
            data: Animal creation data.

        Returns:
            Animal: The stored animal, re-read by its new ID.

        Raises:
            ValueError: If the tag is taken or a reference is invalid.
        """
        values = data.model_dump()
        self._ensure_unique_tag(data.tag_number)
        self._validate_references(values)

        animal_id = generate_uuid()
        self.db.add(Animal(id=animal_id, **values))
        self.db.commit()
        return self.get_animal(animal_id)

    def update_animal(self, animal_id: str, data: AnimalUpdate) -> Animal | None:
        """Partially update an animal.

        Args:
            animal_id: Animal UUID.
            data: Fields to change.

        Returns:
            Animal | None: Updated animal if found.

        Raises:
            ValueError: If the new tag is taken or a reference is invalid.
        """
        animal = self.get_animal(animal_id)
        if not animal:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("tag_number", "type", "sex"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")

        if changes.get("tag_number") and changes["tag_number"] != animal.tag_number:
            self._ensure_unique_tag(changes["tag_number"], exclude_id=animal_id)
        if "sex" in changes:
            self._check_sex_change(animal, changes["sex"])
        self._validate_references(changes, animal_id=animal_id)

        for key, value in changes.items():
            setattr(animal, key, value)

        self.db.commit()
        return self.get_animal(animal_id)

    def delete_animal(self, animal_id: str) -> bool:
        """Delete an animal. Offspring and log entries keep the dangling ID.

        Returns:
            bool: True if deleted, False if not found.
        """
        deleted = self.db.query(Animal).filter(Animal.id == animal_id).delete()
        self.db.commit()
        return deleted > 0

    def get_ready_to_breed(self, reference_date: date | None = None) -> list[Animal]:
        """Females whose most recent calving was at least 57 days ago.

        Females that have never calved are not included. A calving exactly
        57 days before ``reference_date`` qualifies.

        Args:
            reference_date: Day to evaluate on (defaults to today).

        Returns:
            list[Animal]: Matching animals ordered by tag number.
        """
        threshold = ready_to_breed_threshold(reference_date)
        return (
            self.db.query(Animal)
            .outerjoin(CalvingRecord, CalvingRecord.dam_id == Animal.id)
            .filter(Animal.sex == AnimalSex.FEMALE)
            .group_by(Animal.id)
            .having(func.max(CalvingRecord.calving_date) <= threshold)
            .order_by(Animal.tag_number)
            .all()
        )

    def get_offspring(self, parent_id: str) -> list[AnimalListItem]:
        """Animals whose sire or dam is ``parent_id``.

        Args:
            parent_id: Parent animal UUID.

        Returns:
            list[AnimalListItem]: Offspring with their current field name.
        """
        rows = (
            self.db.query(Animal, Field.name)
            .outerjoin(Field, Animal.current_field_id == Field.id)
            .filter(or_(Animal.sire_id == parent_id, Animal.dam_id == parent_id))
            .order_by(Animal.date_of_birth, Animal.tag_number)
            .all()
        )
        return [_list_item(animal, current_field_name=field_name) for animal, field_name in rows]


def get_animal_service(db: Session) -> AnimalService:
    """Factory function for AnimalService."""
    return AnimalService(db)
