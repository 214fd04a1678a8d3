"""Repository functions for the people table."""

import uuid
from typing import List, Optional

from sqlalchemy import literal_column
from sqlalchemy.orm import Session

from ..records.record_models import Record
from ..utils.logging import get_logger
from ..utils.time import utc_now_z
from .schema import Person

logger = get_logger(__name__)


def person_to_record(row: Person) -> Record:
    """Convert a Person row to a Record, defaulting missing text to ''."""
    return Record(
        id=row.id,
        full_name=row.full_name or "",
        tax_id=row.tax_id or "",
        registration_code=row.registration_code or "",
        registration_date=row.registration_date or "",
        contact_info=row.contact_info or "",
        notes=row.notes or "",
        status=row.status or "Pending",
    )


def list_people(session: Session) -> List[Person]:
    """All people, most recently created first (insertion order breaks ties)."""
    return (
        session.query(Person)
        .order_by(Person.created_at_utc.desc(), literal_column("people.rowid").desc())
        .all()
    )


def find_person_by_id(session: Session, person_id: str) -> Optional[Person]:
    return session.get(Person, person_id)


def insert_person(session: Session, record: Record) -> Person:
    """
    Insert a new person row with a freshly assigned id.
    
    Any id carried by `record` is ignored; the store owns identifiers.
    
    Args:
        session: SQLAlchemy session
        record: Record data to persist
        
    Returns:
        Created Person row
    """
    row = Person(
        id=str(uuid.uuid4()),
        full_name=record.full_name,
        tax_id=record.tax_id,
        registration_code=record.registration_code,
        registration_date=record.registration_date,
        contact_info=record.contact_info,
        notes=record.notes,
        status=record.status,
        created_at_utc=utc_now_z(),
    )
    session.add(row)
    session.commit()
    logger.debug(f"Inserted person {row.id}")
    return row


def update_person(session: Session, row: Person, record: Record) -> Person:
    """Overwrite every editable column of `row` with the values in `record`."""
    row.full_name = record.full_name
    row.tax_id = record.tax_id
    row.registration_code = record.registration_code
    row.registration_date = record.registration_date
    row.contact_info = record.contact_info
    row.notes = record.notes
    row.status = record.status
    row.updated_at_utc = utc_now_z()
    session.commit()
    logger.debug(f"Updated person {row.id}")
    return row


def delete_person(session: Session, person_id: str) -> bool:
    """Delete a person row. Returns False if no row had that id."""
    row = find_person_by_id(session, person_id)
    if row is None:
        return False
    session.delete(row)
    session.commit()
    return True
