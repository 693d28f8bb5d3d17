"""Field service layer."""

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.db.models import Animal, AnimalType, Field, Property, generate_uuid
from app.fields.schemas import FieldAnimalCount, FieldCreate, FieldUpdate, PropertyAnimalCount


def _type_count(animal_type: AnimalType):
    return func.count(case((Animal.type == animal_type, 1)))


class FieldService:
    """Service class for field operations."""

    def __init__(self, db: Session):
        """Initialize field service.

        Args:
            db: Database session.
        """
        self.db = db

    def _validate(self, name: str, property_id: str, exclude_id: str | None = None) -> None:
        if not self.db.query(Property.id).filter(Property.id == property_id).first():
            raise ValueError("Property not found")

        query = self.db.query(Field).filter(Field.name == name, Field.property_id == property_id)
        if exclude_id:
            query = query.filter(Field.id != exclude_id)
        if query.first():
            raise ValueError(f"Field '{name}' already exists on this property")

    def list_fields(self) -> list[Field]:
        """List all fields ordered by name."""
        return self.db.query(Field).order_by(Field.name).all()

    def get_field(self, field_id: str) -> Field | None:
        """Get a field by ID.

        Args:
            field_id: Field UUID.

        Returns:
            Field | None: Field if found.
        """
        return self.db.query(Field).filter(Field.id == field_id).first()

    def list_by_property(self, property_id: str) -> list[Field]:
        """List the fields of a property."""
        return (
            self.db.query(Field)
            .filter(Field.property_id == property_id)
            .order_by(Field.name)
            .all()
        )

    def get_by_name_and_property(self, name: str, property_id: str) -> Field | None:
        """Look up a field by its name within a property."""
        return (
            self.db.query(Field)
            .filter(Field.name == name, Field.property_id == property_id)
            .first()
        )

    def create_field(self, data: FieldCreate) -> Field:
        """Create a new field.

        Args:
            data: Field creation data.

        Returns:
            Field: The stored field.

        Raises:
            ValueError: If the property is unknown or the name is taken on it.
        """
        self._validate(data.name, data.property_id)

        field_id = generate_uuid()
        self.db.add(Field(id=field_id, **data.model_dump()))
        self.db.commit()
        return self.get_field(field_id)

    def update_field(self, field_id: str, data: FieldUpdate) -> Field | None:
        """Partially update a field.

        Returns:
            Field | None: Updated field if found.

        Raises:
            ValueError: If the new name/property combination is invalid.
        """
        field = self.get_field(field_id)
        if not field:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("name", "property_id"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")

        name = changes.get("name") or field.name
        property_id = changes.get("property_id") or field.property_id
        if name != field.name or property_id != field.property_id:
            self._validate(name, property_id, exclude_id=field_id)

        for key, value in changes.items():
            setattr(field, key, value)

        self.db.commit()
        return self.get_field(field_id)

    def delete_field(self, field_id: str) -> bool:
        """Delete a field. Animals and movements keep the dangling field ID.

        Returns:
            bool: True if deleted, False if not found.
        """
        deleted = self.db.query(Field).filter(Field.id == field_id).delete()
        self.db.commit()
        return deleted > 0

    def animal_counts_by_property(self) -> list[PropertyAnimalCount]:
        """Count animals currently on each property, by type.

        Properties without fields or animals are reported with zero counts.

        Returns:
            list[PropertyAnimalCount]: One entry per property, ordered by name.
        """
        rows = (
            self.db.query(
                Property.id,
                Property.name,
                _type_count(AnimalType.DAIRY),
                _type_count(AnimalType.BEEF),
                func.count(Animal.id),
            )
            .select_from(Property)
            .outerjoin(Field, Field.property_id == Property.id)
            .outerjoin(Animal, Animal.current_field_id == Field.id)
            .group_by(Property.id, Property.name)
            .order_by(Property.name)
            .all()
        )
        return [
            PropertyAnimalCount(
                property_id=property_id,
                property=name,
                dairy=dairy,
                beef=beef,
                total=total,
            )
            for property_id, name, dairy, beef, total in rows
        ]

    def animal_counts_by_field(self) -> list[FieldAnimalCount]:
        """Count animals currently in each field, by type.

        Returns:
            list[FieldAnimalCount]: One entry per field, including empty fields.
        """
        rows = (
            self.db.query(
                Field.id,
                Field.name,
                Field.property_id,
                Property.name,
                _type_count(AnimalType.DAIRY),
                _type_count(AnimalType.BEEF),
                func.count(Animal.id),
            )
            .select_from(Field)
            .outerjoin(Property, Property.id == Field.property_id)
            .outerjoin(Animal, Animal.current_field_id == Field.id)
            .group_by(Field.id, Field.name, Field.property_id, Property.name)
            .order_by(Property.name, Field.name)
            .all()
        )
        return [
            FieldAnimalCount(
                field_id=field_id,
                field=field_name,
                property_id=property_id,
                property=property_name,
                dairy=dairy,
                beef=beef,
                total=total,
            )
            for field_id, field_name, property_id, property_name, dairy, beef, total in rows
        ]


def get_field_service(db: Session) -> FieldService:
    """Factory function for FieldService."""
    return FieldService(db)
