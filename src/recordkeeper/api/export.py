"""Export API: CSV and rich-text report documents for download.

Exports always take the whole filtered and sorted set. Passing a page of
results here would silently drop every record on the other pages.
"""

import csv
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Any, Dict, Sequence

from ..output.report import render_report_html
from ..records.record_models import Record
from ..utils.logging import get_logger
from ..utils.time import epoch_millis, utc_now
from .models import ExportDocument

logger = get_logger(__name__)

CSV_COLUMNS = ["Name", "TaxId", "RegistrationCode", "Date", "Status", "ContactInfo"]
CSV_FILENAME = "relatorio-gestao.csv"
CSV_MIME_TYPE = "text/csv"

REPORT_FILENAME_PREFIX = "relatorio-gestao"
REPORT_MIME_TYPE = "application/msword"

EXPORT_FORMATS = ("csv", "report")


def _csv_row(record: Record) -> list[str]:
    return [
        record.full_name,
        record.tax_id,
        record.registration_code,
        record.registration_date,
        record.status,
        record.contact_info,
    ]


def export_csv(records: Sequence[Record]) -> bytes:
    """
    Serialize records as CSV.
    
    Header line is unquoted; every data field is quoted, with embedded double
    quotes doubled. Lines are joined with "\\n" and there is no trailing newline.
    
    Args:
        records: Filtered and sorted records (not a page)
        
    Returns:
        UTF-8 encoded CSV document
    """
    buffer = StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow(_csv_row(record))
    body = buffer.getvalue()
    if body.endswith("\n"):
        body = body[:-1]

    output = ",".join(CSV_COLUMNS) + "\n" + body
    return output.encode("utf-8")


def export_report(
    records: Sequence[Record],
    generated_at: datetime | None = None,
    **report_options: Any,
) -> bytes:
    """
    Serialize records as an HTML report that opens in a word processor.
    
    Args:
        records: Filtered and sorted records (not a page)
        generated_at: Generation timestamp (defaults to now, UTC)
        **report_options: title / subtitle / footer overrides
        
    Returns:
        UTF-8 encoded HTML document
    """
    html = render_report_html(records, generated_at or utc_now(), **report_options)
    return html.encode("utf-8")


def report_filename(generated_at: datetime) -> str:
    return f"{REPORT_FILENAME_PREFIX}-{epoch_millis(generated_at)}.doc"


def build_export(
    records: Sequence[Record],
    format: str = "csv",
    generated_at: datetime | None = None,
    report_options: Dict[str, Any] | None = None,
) -> ExportDocument:
    """
    Build a downloadable export document.
    
    Args:
        records: Filtered and sorted records (not a page)
        format: "csv" or "report"
        generated_at: Timestamp for the report title block and filename
        report_options: title / subtitle / footer for the report
        
    Returns:
        ExportDocument with filename, MIME type and encoded content
        
    Raises:
        ValueError: On an unsupported format
    """
    if format == "csv":
        return ExportDocument(
            filename=CSV_FILENAME,
            mime_type=CSV_MIME_TYPE,
            content=export_csv(records),
        )
    elif format == "report":
        when = generated_at or utc_now()
        return ExportDocument(
            filename=report_filename(when),
            mime_type=REPORT_MIME_TYPE,
            content=export_report(records, generated_at=when, **(report_options or {})),
        )
    else:
        raise ValueError(f"Unsupported format: {format}")


def write_export(document: ExportDocument, out_dir: Path) -> Path:
    """Write an export document into `out_dir` (created if missing) and return its path."""
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / document.filename
    path.write_bytes(document.content)
    logger.info(f"Exported {len(document.content)} bytes to {path}")
    return path
