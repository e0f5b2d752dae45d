"""Year-over-year tax comparison for the dashboard.

Compares revenue, claimable deductions and SST payable between a year and
the one before it.
"""

from datetime import date
from typing import Any, Dict, Iterable, Mapping

from .dates import to_number
from .taxes.deductions import calculate_total_deductions
from .taxes.sst import invoices_in_period, calculate_sst_payable

METRICS = ("revenue", "total_deductions", "sst_payable")


def year_metrics(
    invoices: Iterable[Mapping[str, Any]],
    deductions: Iterable[Mapping[str, Any]],
    year: int,
) -> Dict[str, float]:
    """Compute dashboard metrics for one calendar/tax year.

    Revenue and SST use invoices dated in the year. Deductions are matched on
    their tax_year.
    """
    year_invoices = invoices_in_period(invoices, date(year, 1, 1), date(year, 12, 31))
    year_deductions = [d for d in deductions if int(to_number(d.get("tax_year"))) == year]

    return {
        "revenue": sum(to_number(inv.get("amount")) for inv in year_invoices),
        "total_deductions": calculate_total_deductions(year_deductions)["total"],
        "sst_payable": calculate_sst_payable(year_invoices),
    }


def percent_change(current: float, previous: float) -> float:
    """Percent change from previous to current. 0 when previous is not positive."""
    if previous > 0:
        return (current - previous) / previous * 100
    return 0.0


def compare_years(
    invoices: Iterable[Mapping[str, Any]],
    deductions: Iterable[Mapping[str, Any]],
    current_year: int,
) -> Dict[str, Any]:
    """Compare a year against the previous one.

    Returns:
        Dict with current_year, previous_year, current, previous and yoy
        (percent change per metric)

    Raises:
        CategoryRulesError: If a deduction needs recomputing and the override
            rules file is invalid
    """
    invoices = list(invoices)
    deductions = list(deductions)
    previous_year = current_year - 1

    current = year_metrics(invoices, deductions, current_year)
    previous = year_metrics(invoices, deductions, previous_year)

    return {
        "current_year": current_year,
        "previous_year": previous_year,
        "current": current,
        "previous": previous,
        "yoy": {m: percent_change(current[m], previous[m]) for m in METRICS},
    }
