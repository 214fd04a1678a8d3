import csv
import json
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..api.export import CSV_COLUMNS
from ..records.record_models import Record
from ..utils.logging import get_logger

logger = get_logger(__name__)

CSV_FIELD_MAP = {
    "Name": "full_name",
    "TaxId": "tax_id",
    "RegistrationCode": "registration_code",
    "Date": "registration_date",
    "Status": "status",
    "ContactInfo": "contact_info",
}


def load_records_from_json(json_path: Path) -> List[Record]:
    """
    Load records from a JSON list of objects with Record field names.
    
    Ids in the file are dropped so that every loaded record is an unsaved draft.
    Entries that fail validation are skipped with a warning.
    """
    if not json_path.exists():
        logger.warning(f"JSON file not found: {json_path}")
        return []

    data = json.loads(json_path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of records in {json_path}")

    records = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping entry {index} in {json_path}: not an object")
            continue
        entry = {k: v for k, v in entry.items() if k != "id"}
        try:
            records.append(Record(**entry))
        except ValidationError as e:
            logger.warning(f"Skipping entry {index} in {json_path}: {e.error_count()} validation errors")
    logger.info(f"Loaded {len(records)} records from {json_path}")
    return records


def load_records_from_csv(csv_path: Path) -> List[Record]:
    """
    Load records from a CSV in the export format.
    
    Expected CSV columns: Name, TaxId, RegistrationCode, Date, Status, ContactInfo
    """
    if not csv_path.exists():
        logger.warning(f"CSV file not found: {csv_path}")
        return []

    records = []
    with csv_path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"CSV {csv_path} is missing columns: {missing}")
        for row in reader:
            values = {field: (row.get(column) or "") for column, field in CSV_FIELD_MAP.items()}
            if not values["full_name"].strip():
                logger.warning(f"Skipping CSV row {reader.line_num} in {csv_path}: empty name")
                continue
            records.append(Record(**values))
    logger.info(f"Loaded {len(records)} records from {csv_path}")
    return records


def load_records(path: Path) -> List[Record]:
    """Dispatch on file extension (.json or .csv)."""
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_records_from_json(path)
    elif suffix == ".csv":
        return load_records_from_csv(path)
    else:
        raise ValueError(f"Unsupported import format: {suffix or path.name}")
