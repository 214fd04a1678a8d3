"""Records workspace: the call site between the record store and the query API.

The workspace holds the current collection snapshot and the QueryState.
Store failures are caught here, logged, and turned into notifications; the
snapshot is only replaced after a store call succeeds.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..database.record_store import RecordStore, StoreError
from ..records.record_models import QueryState, Record
from ..utils.logging import get_logger
from .export import build_export
from .models import DashboardSummary, ExportDocument, Notification, RecordsView
from .query_api import get_records_view, query_records
from .summary_api import get_summary

logger = get_logger(__name__)


class RecordWorkspace:
    def __init__(
        self,
        store: RecordStore,
        state: Optional[QueryState] = None,
        report_options: Optional[Dict[str, Any]] = None,
    ):
        self.store = store
        self.state = state or QueryState()
        self.report_options = report_options or {}
        self._records: Tuple[Record, ...] = ()

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    def refresh(self) -> Notification:
        """Replace the snapshot with the store's collection; keep the old one on failure."""
        try:
            fetched = self.store.fetch_all()
        except StoreError as e:
            logger.warning(f"Fetch failed, keeping {len(self._records)} cached records: {e}")
            return Notification(level="error", message="Failed to load records.")
        self._records = tuple(fetched)
        logger.info(f"Loaded {len(self._records)} records")
        return Notification(level="info", message=f"Loaded {len(self._records)} records.")

    def save(self, record: Record) -> Notification:
        """
        Persist a record and patch the snapshot with the canonical result.
        
        A record whose id is already in the snapshot is replaced in place;
        anything else is prepended as a new entry.
        """
        try:
            saved = self.store.upsert(record)
        except StoreError as e:
            logger.warning(f"Save failed for {record.full_name!r}: {e}")
            return Notification(level="error", message="Failed to save record.")

        if record.id is not None and any(r.id == record.id for r in self._records):
            self._records = tuple(saved if r.id == record.id else r for r in self._records)
            return Notification(level="success", message=f"Record for {saved.full_name} updated.")
        self._records = (saved,) + self._records
        return Notification(level="success", message=f"New record for {saved.full_name} created.")

    def remove(self, record_id: str) -> Notification:
        try:
            self.store.delete(record_id)
        except StoreError as e:
            logger.warning(f"Delete failed for {record_id}: {e}")
            return Notification(level="error", message="Failed to delete record.")
        self._records = tuple(r for r in self._records if r.id != record_id)
        return Notification(level="info", message="Record removed.")

    def update_query(self, **changes) -> QueryState:
        """Change query parameters or page size; the page re-anchors to 1 on any change."""
        self.state = self.state.update(**changes)
        return self.state

    def go_to_page(self, page: int) -> QueryState:
        self.state = self.state.go_to(page)
        return self.state

    def view(self) -> RecordsView:
        return get_records_view(self._records, self.state)

    def summary(self) -> DashboardSummary:
        return get_summary(self._records)

    def export(self, format: str = "csv", generated_at: Optional[datetime] = None) -> ExportDocument:
        """Export every record matching the current query, in sort order (never just the page)."""
        processed = query_records(self._records, self.state.params)
        return build_export(
            processed,
            format=format,
            generated_at=generated_at,
            report_options=self.report_options,
        )
