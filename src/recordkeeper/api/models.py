"""Composition DTOs for API layer.

These are thin wrappers that compose Record. Do not duplicate record
fields here - reuse the model directly.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

from ..records.record_models import Record


class Page(BaseModel):
    """One 1-indexed page of the filtered and sorted set."""
    model_config = ConfigDict(frozen=True)

    items: List[Record]
    total_items: int
    total_pages: int
    page: int  # clamped to >= 1, may exceed total_pages
    has_previous: bool
    has_next: bool


class RecordsView(BaseModel):
    """Composition DTO: visible page plus the counts shown beside it."""
    page: Page
    filtered_total: int
    collection_total: int


class StatusCount(BaseModel):
    status: str
    count: int
    color: str


class SummaryCards(BaseModel):
    under_review: int = 0
    authorized: int = 0
    pending: int = 0
    total: int = 0


class DashboardSummary(BaseModel):
    """Dashboard read model, always computed from the full collection."""
    total: int
    counts: Dict[str, int]  # sparse: statuses with zero records are absent
    cards: SummaryCards
    chart: List[StatusCount]
    recent: List[Record]


class ExportDocument(BaseModel):
    filename: str
    mime_type: str
    content: bytes


class Notification(BaseModel):
    """Transient user-visible message produced at the store call site."""
    level: Literal["success", "error", "info"]
    message: str

    @property
    def ok(self) -> bool:
        return self.level != "error"
