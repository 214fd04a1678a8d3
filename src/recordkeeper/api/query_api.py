"""Records query API: filtering, sorting and pagination over a snapshot.

All functions here are pure - they never mutate the input sequence or the
records in it, and they never raise for empty input or unmatched filters.
"""

import math
from typing import Callable, List, Sequence

from ..records.formatting import registration_timestamp
from ..records.record_models import STATUS_FILTER_ALL, QueryParams, QueryState, Record
from .models import Page, RecordsView

SEARCH_FIELDS = ("full_name", "tax_id", "registration_code", "contact_info")


def _matches_search(record: Record, term: str) -> bool:
    """Case-insensitive substring match across the searchable fields (OR)."""
    if not term:
        return True
    return any(term in getattr(record, field).lower() for field in SEARCH_FIELDS)


def _matches_status(record: Record, status_filter: str) -> bool:
    return status_filter == STATUS_FILTER_ALL or record.status == status_filter


def _sort_key(sort_field: str) -> Callable[[Record], object]:
    if sort_field == "registration_date":
        return lambda r: registration_timestamp(r.registration_date)
    return lambda r: r.full_name.lower()


def filter_records(records: Sequence[Record], params: QueryParams) -> List[Record]:
    """Apply the text search AND the status filter, keeping input order."""
    term = params.normalized_search
    return [
        r for r in records
        if _matches_search(r, term) and _matches_status(r, params.status_filter)
    ]


def sort_records(records: Sequence[Record], params: QueryParams) -> List[Record]:
    """
    Stable sort by the active field.
    
    `reverse=True` inverts the comparison rather than the result, so records
    with equal keys keep their input order for both asc and desc.
    """
    return sorted(
        records,
        key=_sort_key(params.sort_field),
        reverse=params.sort_order == "desc",
    )


def query_records(records: Sequence[Record], params: QueryParams) -> List[Record]:
    """
    Filter then sort a record collection.
    
    Args:
        records: Collection snapshot (not mutated)
        params: Search text, status filter, sort field and order
        
    Returns:
        New list with the filtered set in sort order (may be empty)
    """
    return sort_records(filter_records(records, params), params)


def paginate(records: Sequence[Record], page_size: int, page: int) -> Page:
    """
    Slice a filtered and sorted sequence into a 1-indexed page.
    
    Args:
        records: Filtered and sorted records
        page_size: Items per page (must be >= 1)
        page: Requested page; values below 1 are clamped to 1
        
    Returns:
        Page with the slice [(page-1)*page_size, page*page_size). A page past
        the end is empty; navigation flags are both False when there are no pages.
        
    Raises:
        ValueError: If page_size < 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total_items = len(records)
    total_pages = math.ceil(total_items / page_size)
    current = max(1, page)
    start = (current - 1) * page_size
    items = list(records[start:start + page_size])

    return Page(
        items=items,
        total_items=total_items,
        total_pages=total_pages,
        page=current,
        has_previous=total_pages > 0 and current > 1,
        has_next=current < total_pages,
    )


def get_records_view(records: Sequence[Record], state: QueryState) -> RecordsView:
    """Query then paginate a snapshot for display."""
    processed = query_records(records, state.params)
    return RecordsView(
        page=paginate(processed, state.page_size, state.page),
        filtered_total=len(processed),
        collection_total=len(records),
    )
