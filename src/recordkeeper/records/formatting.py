"""Field masks and date handling for person records."""

import re
from datetime import datetime, timezone
from typing import Optional

from ..utils.time import format_locale_date

TAX_ID_DIGITS = 11
REGISTRATION_CODE_DIGITS = 9

_NON_DIGITS = re.compile(r"\D")


def format_tax_id(value: str) -> str:
    """
    Apply the 000.000.000-00 tax-id mask to the digits in `value`.
    
    Partial input is masked as far as it goes ("1234" -> "123.4") and digits
    beyond the eleventh are dropped.
    """
    digits = _NON_DIGITS.sub("", value)[:TAX_ID_DIGITS]
    parts = [digits[0:3], digits[3:6], digits[6:9]]
    head = ".".join(p for p in parts if p)
    tail = digits[9:]
    return f"{head}-{tail}" if tail else head


def format_registration_code(value: str) -> str:
    """Keep digits only, truncated to the fixed registration-code length."""
    return _NON_DIGITS.sub("", value)[:REGISTRATION_CODE_DIGITS]


def parse_registration_date(value: str) -> Optional[datetime]:
    """Parse an ISO date (or datetime) string; None when unparsable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        # date-only values are midnight UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def registration_timestamp(value: str) -> float:
    """Numeric sort key for a registration date; 0 (the epoch) when unparsable."""
    parsed = parse_registration_date(value)
    return parsed.timestamp() if parsed else 0.0


def display_date(value: str) -> str:
    """Render a registration date as dd/mm/yyyy, or verbatim when unparsable."""
    parsed = parse_registration_date(value)
    return format_locale_date(parsed) if parsed else value
