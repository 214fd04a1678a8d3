"""Time utilities for UTC timestamps and the fixed display locale."""

from datetime import date, datetime, timezone
from typing import Optional

# dd/mm/yyyy, the single display convention used by reports and the CLI
LOCALE_DATE_FORMAT = "%d/%m/%Y"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_z() -> str:
    """
    Get current UTC time as ISO 8601 string with Z suffix.
    
    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-12-23T00:27:07.804867Z')
    """
    return to_utc_z(utc_now())


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.
    
    Args:
        dt: Datetime object (must be timezone-aware)
        
    Returns:
        ISO 8601 UTC timestamp ending with 'Z'
        
    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat().replace('+00:00', 'Z')


def epoch_millis(dt: datetime) -> int:
    """Milliseconds since the Unix epoch (naive datetimes are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def format_locale_date(value: date | datetime) -> str:
    return value.strftime(LOCALE_DATE_FORMAT)


def today_iso(now: Optional[datetime] = None) -> str:
    """Today's date as YYYY-MM-DD (UTC)."""
    return (now or utc_now()).date().isoformat()
