"""Date and number normalization at the record boundary.

Invoice and deduction dates are user-entered as DD/MM/YYYY but stored rows
and API payloads carry ISO dates. Everything that compares dates goes through
normalize_date() so that both forms land on the same calendar day.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional


_DMY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])")

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def normalize_date(value: Any) -> Optional[date]:
    """Convert a date-like value to a calendar date.

    Accepts date/datetime objects (time of day dropped), DD/MM/YYYY strings
    and ISO strings, with or without a time component.

    Returns:
        date, or None if the value is empty or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    s = str(value).strip()
    if not s:
        return None

    m = _DMY_RE.match(s)
    if m:
        day, month, year = (int(g) for g in m.groups())
    else:
        m = _ISO_RE.match(s)
        if not m:
            return None
        year, month, day = (int(g) for g in m.groups())

    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_db_date(value: Any) -> Optional[str]:
    """Normalize a date-like value to YYYY-MM-DD for storage."""
    d = normalize_date(value)
    return d.isoformat() if d else None


def format_date_my(d: date) -> str:
    """Format as DD/MM/YYYY (Malaysian display format)."""
    return d.strftime("%d/%m/%Y")


def format_date_long(d: date) -> str:
    """Format as '15 Jun 2024'."""
    return f"{d.day} {MONTH_ABBR[d.month - 1]} {d.year}"


def to_number(value: Any) -> float:
    """Coerce a value to a finite float, treating anything else as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(n) or math.isinf(n):
        return 0.0
    return n
