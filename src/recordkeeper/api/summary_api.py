"""Summary read model API: status counts and recent activity for the dashboard.

Everything here is computed from the full collection, never from a page.
"""

from typing import Dict, List, Sequence

from ..records.formatting import registration_timestamp
from ..records.record_models import Record, Status, status_color
from .models import DashboardSummary, StatusCount, SummaryCards

RECENT_ACTIVITY_LIMIT = 5


def aggregate_statuses(records: Sequence[Record]) -> Dict[str, int]:
    """
    Count records per status.
    
    Statuses with no records are absent from the result (callers default to 0).
    Unrecognized status strings are counted under their own key. Keys appear
    in order of first occurrence.
    """
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.status] = counts.get(record.status, 0) + 1
    return counts


def recent_activity(records: Sequence[Record], limit: int = RECENT_ACTIVITY_LIMIT) -> List[Record]:
    """Most recent records by registration date, ties kept in input order."""
    ordered = sorted(
        records,
        key=lambda r: registration_timestamp(r.registration_date),
        reverse=True,
    )
    return ordered[:limit]


def get_summary(records: Sequence[Record]) -> DashboardSummary:
    """
    Build the dashboard read model.
    
    Args:
        records: Full collection snapshot
        
    Returns:
        DashboardSummary with sparse counts, headline cards, chart series
        (one entry per present status) and the recent-activity feed
    """
    counts = aggregate_statuses(records)
    cards = SummaryCards(
        under_review=counts.get(Status.UNDER_REVIEW.value, 0),
        authorized=counts.get(Status.AUTHORIZED.value, 0),
        pending=counts.get(Status.PENDING.value, 0),
        total=len(records),
    )
    chart = [
        StatusCount(status=status, count=count, color=status_color(status))
        for status, count in counts.items()
    ]
    return DashboardSummary(
        total=len(records),
        counts=counts,
        cards=cards,
        chart=chart,
        recent=recent_activity(records),
    )
