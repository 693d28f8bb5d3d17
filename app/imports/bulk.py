"""Multi-row insert helper used by the importers."""

import logging

from sqlalchemy import insert
from sqlalchemy.orm import Session

from app.db.models import Base, generate_uuid

logger = logging.getLogger(__name__)


def bulk_create(db: Session, model: type[Base], rows: list[dict]) -> list:
    """Insert many rows of ``model`` with a single INSERT statement.

    Every row gets a fresh UUID (any ``id`` in the input is replaced). The
    stored rows are not read back: the return value is always an empty list
    and callers count ``rows`` themselves.

    Args:
        db: Database session.
        model: Mapped class to insert into.
        rows: Column values, one dict per row.

    Returns:
        list: Always ``[]``.
    """
    if not rows:
        return []

    values = [{**row, "id": generate_uuid()} for row in rows]
    db.execute(insert(model).values(values))
    db.commit()
    logger.info("Bulk inserted %d rows into %s", len(values), model.__tablename__)
    return []
