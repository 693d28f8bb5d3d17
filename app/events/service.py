"""Event service layer."""

from sqlalchemy.orm import Session

from app.db.models import Animal, Event, generate_uuid
from app.events.schemas import EventCreate, EventUpdate


class EventService:
    """Service class for the health/management event log."""

    def __init__(self, db: Session):
        """Initialize event service.

        Args:
            db: Database session.
        """
        self.db = db

    def list_events(self) -> list[Event]:
        """List every event, most recent first."""
        return self.db.query(Event).order_by(Event.event_date.desc(), Event.created_at.desc()).all()

    def get_event(self, event_id: str) -> Event | None:
        """Get an event by ID."""
        return self.db.query(Event).filter(Event.id == event_id).first()

    def list_by_animal(self, animal_id: str) -> list[Event]:
        """Events recorded for an animal, most recent first."""
        return (
            self.db.query(Event)
            .filter(Event.animal_id == animal_id)
            .order_by(Event.event_date.desc(), Event.created_at.desc())
            .all()
        )

    def create_event(self, data: EventCreate) -> Event:
        """Record an event.

        Args:
            data: Event data.

        Returns:
            Event: The stored event.

        Raises:
            ValueError: If the animal does not exist.
        """
        if not self.db.query(Animal.id).filter(Animal.id == data.animal_id).first():
            raise ValueError("Animal not found")

        event_id = generate_uuid()
        self.db.add(Event(id=event_id, **data.model_dump()))
        self.db.commit()
        return self.get_event(event_id)

    def update_event(self, event_id: str, data: EventUpdate) -> Event | None:
        event = self.get_event(event_id)
        if not event:
            return None

        changes = data.model_dump(exclude_unset=True)
        for required in ("event_type", "event_date"):
            if required in changes and changes[required] is None:
                raise ValueError(f"{required} cannot be cleared")

        for key, value in changes.items():
            setattr(event, key, value)

        self.db.commit()
        return self.get_event(event_id)

    def delete_event(self, event_id: str) -> bool:
        deleted = self.db.query(Event).filter(Event.id == event_id).delete()
        self.db.commit()
        return deleted > 0


def get_event_service(db: Session) -> EventService:
    """Factory function for EventService."""
    return EventService(db)
