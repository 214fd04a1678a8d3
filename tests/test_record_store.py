"""Tests for record store adapters and the people repository."""

import pytest

from recordkeeper.database.person_repo import delete_person, insert_person, list_people, person_to_record
from recordkeeper.database.record_store import InMemoryRecordStore, StoreError
from recordkeeper.records.record_models import Record


def _draft(name="Ana Paula", **kwargs):
    values = {
        "full_name": name,
        "registration_date": "2024-01-01",
        "contact_info": "ana@email.com",
        "status": "Pending",
    }
    values.update(kwargs)
    return Record(**values)


def test_repo_insert_assigns_id_and_timestamps(session):
    row = insert_person(session, _draft(id="client-side-id"))
    assert row.id != "client-side-id"
    assert len(row.id) == 36
    assert row.created_at_utc.endswith("Z")
    assert person_to_record(row).full_name == "Ana Paula"


def test_repo_lists_newest_first(session):
    insert_person(session, _draft("First"))
    insert_person(session, _draft("Second"))
    assert [row.full_name for row in list_people(session)] == ["Second", "First"]


def test_repo_delete_reports_missing(session):
    row = insert_person(session, _draft())
    assert delete_person(session, row.id) is True
    assert delete_person(session, row.id) is False


@pytest.fixture(params=["memory", "sqlite"])
def store(request, memory_store, sqlite_store):
    return memory_store if request.param == "memory" else sqlite_store


def test_upsert_creates_unsaved_record(store):
    saved = store.upsert(_draft())
    assert saved.id is not None
    assert saved.is_persisted
    assert store.fetch_all() == [saved]


def test_upsert_updates_persisted_record(store):
    saved = store.upsert(_draft())
    updated = store.upsert(saved.model_copy(update={"status": "Authorized"}))
    assert updated.id == saved.id
    assert [r.status for r in store.fetch_all()] == ["Authorized"]


def test_upsert_with_unknown_id_creates(store):
    saved = store.upsert(_draft(id="never-stored"))
    assert saved.id != "never-stored"
    assert len(store.fetch_all()) == 1


def test_fetch_all_newest_first(store):
    store.upsert(_draft("First"))
    store.upsert(_draft("Second"))
    assert [r.full_name for r in store.fetch_all()] == ["Second", "First"]


def test_upsert_rejects_missing_required_fields(store):
    with pytest.raises(StoreError, match="full_name"):
        store.upsert(_draft(name="   "))
    with pytest.raises(StoreError, match="contact_info") as excinfo:
        store.upsert(_draft(contact_info=""))
    assert excinfo.value.operation == "upsert"
    assert store.fetch_all() == []


def test_delete_removes_and_rejects_unknown(store):
    saved = store.upsert(_draft())
    store.delete(saved.id)
    assert store.fetch_all() == []
    with pytest.raises(StoreError, match="not found"):
        store.delete(saved.id)


def test_unknown_status_round_trips(store):
    saved = store.upsert(_draft(status="Legacy"))
    assert store.fetch_all()[0].status == "Legacy"
    assert saved.known_status is None


def test_in_memory_store_seeded_from_records():
    store = InMemoryRecordStore([_draft("A"), _draft("B")])
    assert [r.full_name for r in store.fetch_all()] == ["B", "A"]
