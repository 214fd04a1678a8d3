from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

STATUS_FILTER_ALL = "all"

SortField = Literal["full_name", "registration_date"]
SortOrder = Literal["asc", "desc"]


class Status(str, Enum):
    """Closed review-state classification of a record.

    Values are written verbatim to filters, CSV and report output; adding or
    removing a member changes the export format.
    """
    PENDING = "Pending"
    AUTHORIZED = "Authorized"
    RELEASED = "Released"
    UNDER_REVIEW = "UnderReview"
    REJECTED = "Rejected"
    BLOCKED = "Blocked"
    TAX_FLAGGED = "TaxFlagged"

    @classmethod
    def parse(cls, value: str) -> Optional["Status"]:
        """Return the member for `value`, or None for an unrecognized status."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def color(self) -> str:
        return STATUS_COLORS[self]


STATUS_LABELS = {
    Status.PENDING: "Pending",
    Status.AUTHORIZED: "Authorized",
    Status.RELEASED: "Released",
    Status.UNDER_REVIEW: "IH",
    Status.REJECTED: "Rejected",
    Status.BLOCKED: "Blocked",
    Status.TAX_FLAGGED: "RFB",
}

# Chart palette; unknown statuses fall back to UNKNOWN_STATUS_COLOR
STATUS_COLORS = {
    Status.AUTHORIZED: "#10b981",
    Status.RELEASED: "#3b82f6",
    Status.UNDER_REVIEW: "#f59e0b",
    Status.PENDING: "#6366f1",
    Status.REJECTED: "#ef4444",
    Status.BLOCKED: "#4b5563",
    Status.TAX_FLAGGED: "#d946ef",
}
UNKNOWN_STATUS_COLOR = "#cccccc"


def status_color(status: str) -> str:
    known = Status.parse(status)
    return known.color if known else UNKNOWN_STATUS_COLOR


class Record(BaseModel):
    """A person entry.

    `id is None` marks an unsaved draft; a persisted record always carries the
    store-assigned id. `status` stays a plain string so that values outside the
    enumeration are carried through as their own bucket.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    full_name: str
    tax_id: str = ""
    registration_code: str = ""
    registration_date: str  # ISO YYYY-MM-DD
    contact_info: str = ""
    notes: str = ""
    status: str = Status.PENDING.value

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def known_status(self) -> Optional[Status]:
        return Status.parse(self.status)


class QueryParams(BaseModel):
    """User-selected query parameters: text search AND status filter, then sort."""
    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    status_filter: str = STATUS_FILTER_ALL  # "all" or one Status value
    sort_field: SortField = "full_name"
    sort_order: SortOrder = "asc"

    @property
    def normalized_search(self) -> str:
        return self.search_text.strip().lower()


class QueryState(BaseModel):
    """Query parameters plus pagination position.

    The page is derived state: it re-anchors to 1 whenever a query parameter
    or the page size changes, and is kept otherwise.
    """
    model_config = ConfigDict(frozen=True)

    params: QueryParams = Field(default_factory=QueryParams)
    page_size: int = 10
    page: int = 1

    def update(self, **changes) -> "QueryState":
        """
        Return a new state with the given query fields changed.
        
        Accepts any QueryParams field plus `page_size`. The page resets to 1
        if any value actually changed.
        
        Raises:
            ValueError: On an unknown field or a page size below 1
        """
        page_size = changes.pop("page_size", self.page_size)
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        unknown = set(changes) - set(QueryParams.model_fields)
        if unknown:
            raise ValueError(f"Unknown query fields: {sorted(unknown)}")

        params = self.params.model_copy(update=changes) if changes else self.params
        # model_copy skips validation
        params = QueryParams.model_validate(params.model_dump())
        if params == self.params and page_size == self.page_size:
            return self
        return QueryState(params=params, page_size=page_size, page=1)

    def go_to(self, page: int) -> "QueryState":
        return self.model_copy(update={"page": max(1, page)})

    def toggle_sort(self, field: SortField) -> "QueryState":
        """Header-click sort: flip order on the active field, else select `field` ascending."""
        if self.params.sort_field == field:
            order = "desc" if self.params.sort_order == "asc" else "asc"
            return self.update(sort_order=order)
        return self.update(sort_field=field, sort_order="asc")
