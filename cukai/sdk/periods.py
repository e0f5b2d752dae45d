"""SST filing period utilities.

SST-02 taxable periods are monthly. The return for a period is due on the
15th of the following month, e.g. May (1-31 May) is due 15 June.

All functions take "today" explicitly; nothing here reads the clock.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Tuple, Union

from .dates import format_date_long


# Filings for a month stay open until this day of the following month.
DUE_DAY = 15

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass(frozen=True)
class FilingPeriod:
    """One monthly SST taxable period."""

    year: int
    month: int
    start: date
    end: date
    due_date: date

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    @property
    def due_date_str(self) -> str:
        return format_date_long(self.due_date)

    @property
    def period_start_str(self) -> str:
        return self.start.isoformat()

    @property
    def period_end_str(self) -> str:
        return self.end.isoformat()

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "label": self.label,
            "period_start": self.period_start_str,
            "period_end": self.period_end_str,
            "due_date": self.due_date.isoformat(),
        }


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}. Must be 1-12.")


def _next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def period_dates(year: int, month: int) -> Tuple[date, date]:
    """Get first and last calendar day of a month.

    Returns:
        Tuple of (start, end) dates
    """
    _check_month(month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def due_date(year: int, month: int) -> date:
    """Get the SST-02 due date for a period (15th of the following month)."""
    _check_month(month)
    next_year, next_month = _next_month(year, month)
    return date(next_year, next_month, DUE_DAY)


def filing_period(year: int, month: int) -> FilingPeriod:
    """Build the full period descriptor for a year-month."""
    start, end = period_dates(year, month)
    return FilingPeriod(
        year=year,
        month=month,
        start=start,
        end=end,
        due_date=due_date(year, month),
    )


def next_filing_period(today: date) -> FilingPeriod:
    """Get the next open filing period as of today.

    Up to and including the 15th the current month is still the next period;
    from the 16th it is next month.
    """
    year, month = today.year, today.month
    if today.day > DUE_DAY:
        year, month = _next_month(year, month)
    return filing_period(year, month)


def days_until_due(due: Union[date, datetime], today: Union[date, datetime]) -> int:
    """Calendar days from today until due. Negative means overdue."""
    if isinstance(due, datetime):
        due = due.date()
    if isinstance(today, datetime):
        today = today.date()
    return (due - today).days


def periods_back(count: int, ref_year: int, ref_month: int) -> List[FilingPeriod]:
    """List `count` monthly periods ending at the reference month, newest first."""
    _check_month(ref_month)
    periods = []
    year, month = ref_year, ref_month
    for _ in range(max(0, count)):
        periods.append(filing_period(year, month))
        month -= 1
        if month < 1:
            month = 12
            year -= 1
    return periods
