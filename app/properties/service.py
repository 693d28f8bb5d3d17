"""Property service layer."""

from sqlalchemy.orm import Session

from app.db.models import Property, generate_uuid
from app.properties.schemas import PropertyCreate, PropertyUpdate


class PropertyService:
    """Service class for property operations."""

    def __init__(self, db: Session):
        """Initialize property service.

        Args:
            db: Database session.
        """
        self.db = db

    def _ensure_unique_name(self, name: str, exclude_id: str | None = None) -> None:
        query = self.db.query(Property).filter(Property.name == name)
        if exclude_id:
            query = query.filter(Property.id != exclude_id)
        if query.first():
            raise ValueError(f"Property '{name}' already exists")

    def list_properties(self) -> list[Property]:
        """List all properties ordered by name."""
        return self.db.query(Property).order_by(Property.name).all()

    def get_property(self, property_id: str) -> Property | None:
        """Get a property by ID.

        Args:
            property_id: Property UUID.

        Returns:
            Property | None: Property if found.
        """
        return self.db.query(Property).filter(Property.id == property_id).first()

    def get_property_by_name(self, name: str) -> Property | None:
        """Get a property by its unique name."""
        return self.db.query(Property).filter(Property.name == name).first()

    def create_property(self, data: PropertyCreate) -> Property:
        """Create a new property.

        Args:
            data: Property creation data.

        Returns:
            Property: The stored property, re-read by its new ID.

        Raises:
            ValueError: If the name already exists.
        """
        self._ensure_unique_name(data.name)

        property_id = generate_uuid()
        self.db.add(Property(id=property_id, **data.model_dump()))
        self.db.commit()
        return self.get_property(property_id)

    def update_property(self, property_id: str, data: PropertyUpdate) -> Property | None:
        """Partially update a property.

        Args:
            property_id: Property UUID.
            data: Fields to change.

        Returns:
            Property | None: Updated property if found.

        Raises:
            ValueError: If the new name already exists, a required value is
                cleared, or the lease would end before it starts.
        """
        prop = self.get_property(property_id)
        if not prop:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("name", "is_leased"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")

        start = changes.get("lease_start_date", prop.lease_start_date)
        end = changes.get("lease_end_date", prop.lease_end_date)
        if start and end and end < start:
            raise ValueError("Lease end date must be on or after the start date")

        if changes.get("name") and changes["name"] != prop.name:
            self._ensure_unique_name(changes["name"], exclude_id=property_id)

        for key, value in changes.items():
            setattr(prop, key, value)

        self.db.commit()
        return self.get_property(property_id)

    def delete_property(self, property_id: str) -> bool:
        """Delete a property. Its fields keep pointing at the deleted ID.

        Returns:
            bool: True if deleted, False if not found.
        """
        deleted = self.db.query(Property).filter(Property.id == property_id).delete()
        self.db.commit()
        return deleted > 0


def get_property_service(db: Session) -> PropertyService:
    """Factory function for PropertyService."""
    return PropertyService(db)
