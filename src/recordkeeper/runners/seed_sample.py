from pathlib import Path
from typing import Any, Dict

from recordkeeper.config.loader import load_config_or_defaults
from recordkeeper.database.record_store import RecordStore, SqliteRecordStore
from recordkeeper.ingestion.record_ingestor import load_records_from_json
from recordkeeper.utils.logging import get_logger

logger = get_logger(__name__)


def seed_store(store: RecordStore, fixture_path: Path) -> int:
    """
    Load the sample fixture collection into a record store.
    
    Returns:
        Number of records created
        
    Raises:
        FileNotFoundError: If the fixture doesn't exist
    """
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")

    records = load_records_from_json(fixture_path)
    for record in records:
        store.upsert(record)
    logger.info(f"Seeded {len(records)} records from {fixture_path}")
    return len(records)


def main(config: Dict[str, Any] | None = None) -> int:
    """Seed the configured SQLite store with the sample fixture."""
    config = config or load_config_or_defaults()
    sqlite_path = config["storage"]["sqlite_path"]
    fixture_path = Path(config["seed"]["fixture_json"])
    return seed_store(SqliteRecordStore(sqlite_path), fixture_path)


if __name__ == "__main__":
    main()
