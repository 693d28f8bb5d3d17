"""Movement service layer."""

import logging

from sqlalchemy.orm import Query, Session, aliased

from app.db.models import Animal, Field, Movement, generate_uuid
from app.movements.schemas import MovementCreate, MovementDetail, MovementResponse, MovementUpdate

logger = logging.getLogger(__name__)


class MovementService:
    """Service class for movement operations."""

    def __init__(self, db: Session):
        """Initialize movement service.

        Args:
            db: Database session.
        """
        self.db = db

    def _detail_query(self) -> Query:
        from_field = aliased(Field, name="from_fields")
        to_field = aliased(Field, name="to_fields")
        return (
            self.db.query(Movement, from_field.name, to_field.name, Animal.tag_number)
            .outerjoin(from_field, Movement.from_field_id == from_field.id)
            .outerjoin(to_field, Movement.to_field_id == to_field.id)
            .outerjoin(Animal, Movement.animal_id == Animal.id)
        )

    @staticmethod
    def _to_detail(rows) -> list[MovementDetail]:
        return [
            MovementDetail(
                **MovementResponse.model_validate(movement).model_dump(),
                from_field_name=from_name,
                to_field_name=to_name,
                animal_tag_number=tag_number,
            )
            for movement, from_name, to_name, tag_number in rows
        ]

    def _field_exists(self, field_id: str) -> bool:
        return self.db.query(Field.id).filter(Field.id == field_id).first() is not None

    def get_movement(self, movement_id: str) -> Movement | None:
        """Get a movement by ID."""
        return self.db.query(Movement).filter(Movement.id == movement_id).first()

    def create_movement(self, data: MovementCreate) -> Movement:
        """Record a movement and relocate the animal.

        The movement row and the animal's ``current_field_id`` change are
        committed together; if either fails neither is stored.

        Args:
            data: Movement data.

        Returns:
            Movement: The stored movement.

        Raises:
            ValueError: If the animal or a field does not exist.
        """
        animal = self.db.query(Animal).filter(Animal.id == data.animal_id).first()
        if not animal:
            raise ValueError("Animal not found")

        from_field_id = data.from_field_id
        if "from_field_id" not in data.model_fields_set:
            from_field_id = animal.current_field_id

        for field_id in (data.from_field_id, data.to_field_id):
            if field_id and not self._field_exists(field_id):
                raise ValueError("Field not found")

        movement_id = generate_uuid()
        try:
            self.db.add(
                Movement(
                    id=movement_id,
                    animal_id=animal.id,
                    from_field_id=from_field_id,
                    to_field_id=data.to_field_id,
                    movement_date=data.movement_date,
                    notes=data.notes,
                )
            )
            if data.to_field_id:
                animal.current_field_id = data.to_field_id
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to record movement for animal %s", data.animal_id)
            raise

        return self.get_movement(movement_id)

    def update_movement(self, movement_id: str, data: MovementUpdate) -> Movement | None:
        """Correct a movement's date or notes. Does not relocate the animal."""
        movement = self.get_movement(movement_id)
        if not movement:
            return None

        changes = data.model_dump(exclude_unset=True)
        if "movement_date" in changes and changes["movement_date"] is None:
            raise ValueError("movement_date cannot be cleared")
        for key, value in changes.items():
            setattr(movement, key, value)

        self.db.commit()
        return self.get_movement(movement_id)

    def delete_movement(self, movement_id: str) -> bool:
        """Delete a movement. The animal stays in whatever field it is in."""
        deleted = self.db.query(Movement).filter(Movement.id == movement_id).delete()
        self.db.commit()
        return deleted > 0

    def list_by_animal(self, animal_id: str) -> list[MovementDetail]:
        """Movement history of an animal, newest first."""
        rows = (
            self._detail_query()
            .filter(Movement.animal_id == animal_id)
            .order_by(Movement.movement_date.desc(), Movement.created_at.desc())
            .all()
        )
        return self._to_detail(rows)

    def recent(self, limit: int = 10) -> list[MovementDetail]:
        """Most recent movements across the herd."""
        rows = (
            self._detail_query()
            .order_by(Movement.movement_date.desc(), Movement.created_at.desc())
            .limit(limit)
            .all()
        )
        return self._to_detail(rows)


def get_movement_service(db: Session) -> MovementService:
    """Factory function for MovementService."""
    return MovementService(db)
