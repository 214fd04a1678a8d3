"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from recordkeeper.database.record_store import InMemoryRecordStore, SqliteRecordStore
from recordkeeper.database.schema import Base
from recordkeeper.records.record_models import Record

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_record(full_name: str, status: str = "Pending", registration_date: str = "2024-01-01", **kwargs) -> Record:
    """Build a persisted-looking record with sensible defaults."""
    values = {
        "id": kwargs.pop("id", f"id-{full_name.lower().replace(' ', '-')}"),
        "full_name": full_name,
        "tax_id": "000.000.000-00",
        "registration_code": "123456789",
        "registration_date": registration_date,
        "contact_info": f"{full_name.split()[0].lower()}@email.com",
        "status": status,
    }
    values.update(kwargs)
    return Record(**values)


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_records():
    """Small collection covering several statuses and dates."""
    return [
        make_record("Ricardo Oliveira", "Authorized", "2024-01-15", tax_id="123.456.789-00",
                    registration_code="202400001", contact_info="ricardo@email.com, (11) 98888-7777"),
        make_record("fernanda Souza", "UnderReview", "2024-02-10", tax_id="234.567.890-11",
                    registration_code="202400002", contact_info="fernanda.s@email.com"),
        make_record("Carlos Eduardo", "Pending", "2024-03-05", tax_id="345.678.901-22",
                    registration_code="202400003", contact_info="(21) 97777-6666"),
        make_record("Beatriz Santos", "Released", "2024-03-12", tax_id="456.789.012-33",
                    registration_code="202400004", contact_info="beatriz.adm@empresa.com"),
        make_record("Marcos Vinicius", "TaxFlagged", "2024-03-20", tax_id="567.890.123-44",
                    registration_code="202400005", contact_info="marcos@email.com"),
    ]


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteRecordStore(str(tmp_path / "records.db"))


@pytest.fixture
def people_fixture_path():
    return FIXTURES_DIR / "people.json"


@pytest.fixture
def record_factory():
    return make_record
