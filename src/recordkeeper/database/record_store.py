"""Record store adapters: the narrow CRUD contract the records API consumes."""

import uuid
from typing import Dict, List, Optional, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..records.record_models import Record
from .person_repo import (
    delete_person,
    find_person_by_id,
    insert_person,
    list_people,
    person_to_record,
    update_person,
)
from .sqlite_client import session_context


class StoreError(Exception):
    """Transport, auth or validation failure raised by a record store."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class RecordStore(Protocol):
    def fetch_all(self) -> List[Record]: ...
    def upsert(self, record: Record) -> Record: ...
    def delete(self, record_id: str) -> None: ...


def validate_for_persistence(record: Record) -> None:
    """Reject records missing the fields the store requires."""
    if not record.full_name.strip():
        raise StoreError("Record full_name is required", operation="upsert")
    if not record.contact_info.strip():
        raise StoreError("Record contact_info is required", operation="upsert")
    if not record.registration_date.strip():
        raise StoreError("Record registration_date is required", operation="upsert")


class SqliteRecordStore:
    """RecordStore backed by the SQLite people table."""

    def __init__(self, sqlite_path: str):
        self.sqlite_path = sqlite_path

    def fetch_all(self) -> List[Record]:
        try:
            with session_context(self.sqlite_path) as session:
                return [person_to_record(row) for row in list_people(session)]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch records: {e}", operation="fetch_all") from e

    def upsert(self, record: Record) -> Record:
        """
        Create or update a record.
        
        Creates when `record.id` is None or names no stored row (the new row
        gets a store-assigned id); otherwise updates that row in place.
        
        Returns:
            The canonical persisted record
            
        Raises:
            StoreError: On validation or database failure
        """
        validate_for_persistence(record)
        try:
            with session_context(self.sqlite_path) as session:
                row = find_person_by_id(session, record.id) if record.id else None
                if row is None:
                    row = insert_person(session, record)
                else:
                    row = update_person(session, row, record)
                return person_to_record(row)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to save record: {e}", operation="upsert") from e

    def delete(self, record_id: str) -> None:
        try:
            with session_context(self.sqlite_path) as session:
                deleted = delete_person(session, record_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete record: {e}", operation="delete") from e
        if not deleted:
            raise StoreError(f"Record not found: {record_id}", operation="delete")


class InMemoryRecordStore:
    """RecordStore over a dict, newest-created first. Used by tests and demos."""

    def __init__(self, records: Sequence[Record] = ()):
        self._rows: Dict[str, Record] = {}
        for record in records:
            self.upsert(record)

    def fetch_all(self) -> List[Record]:
        return list(reversed(list(self._rows.values())))

    def upsert(self, record: Record) -> Record:
        validate_for_persistence(record)
        if record.id is not None and record.id in self._rows:
            self._rows[record.id] = record
            return record
        saved = record.model_copy(update={"id": str(uuid.uuid4())})
        self._rows[saved.id] = saved
        return saved

    def delete(self, record_id: str) -> None:
        if self._rows.pop(record_id, None) is None:
            raise StoreError(f"Record not found: {record_id}", operation="delete")
