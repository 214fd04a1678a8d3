from sqlalchemy import Column, String, Text, create_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Person(Base):
    __tablename__ = "people"

    id = Column(String, primary_key=True)  # UUID assigned on insert
    full_name = Column(String, nullable=False)
    tax_id = Column(String, nullable=False, default="")
    registration_code = Column(String, nullable=False, default="", index=True)
    registration_date = Column(String, nullable=False)  # ISO YYYY-MM-DD
    contact_info = Column(String, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="Pending", index=True)
    created_at_utc = Column(String, nullable=False)  # ISO 8601 string
    updated_at_utc = Column(String, nullable=True)  # ISO 8601 string


def create_all(engine_url: str) -> None:
    engine = create_engine(engine_url, future=True)
    Base.metadata.create_all(engine)
