"""SST (Sales and Service Tax) payable aggregation.

SST payable for a taxable period is the statutory rate applied to the gross
amount of invoices dated in the period. Invoices carry only their gross
amount; SST is never stored per invoice.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..dates import format_date_my, normalize_date, to_number
from ..periods import FilingPeriod, filing_period

logger = logging.getLogger(__name__)

SST_RATE = 0.06


def invoices_in_period(
    invoices: Optional[Iterable[Mapping[str, Any]]],
    period_start: Any,
    period_end: Any,
) -> List[Mapping[str, Any]]:
    """Filter invoices to those dated within [period_start, period_end].

    Dates may be DD/MM/YYYY or ISO; comparison is by calendar day.
    Invoices without a parseable date are skipped.
    """
    start = normalize_date(period_start)
    end = normalize_date(period_end)
    if start is None or end is None:
        logger.debug(f"Unparseable period bounds: {period_start!r} - {period_end!r}")
        return []

    selected = []
    for inv in invoices or []:
        inv_date = normalize_date(inv.get("invoice_date"))
        if inv_date is None:
            logger.debug(f"Skipping invoice without valid date: {inv.get('invoice_number', '?')}")
            continue
        if start <= inv_date <= end:
            selected.append(inv)
    return selected


def calculate_sst_payable(invoices: Iterable[Mapping[str, Any]]) -> float:
    """SST payable on a set of invoices (rate applied to the summed amounts)."""
    taxable = sum(to_number(inv.get("amount")) for inv in invoices)
    return taxable * SST_RATE


def sst_payable(
    invoices: Optional[Iterable[Mapping[str, Any]]],
    period_start: Any,
    period_end: Any,
) -> float:
    """SST payable for invoices dated within a period (inclusive)."""
    return calculate_sst_payable(invoices_in_period(invoices, period_start, period_end))


def period_sst_payable(invoices: Optional[Iterable[Mapping[str, Any]]], year: int, month: int) -> float:
    """SST payable for one monthly taxable period."""
    period = filing_period(year, month)
    return sst_payable(invoices, period.start, period.end)


def build_sst02_summary(
    invoices: Optional[Iterable[Mapping[str, Any]]],
    period: FilingPeriod,
    organization: Optional[str] = None,
    status: str = "draft",
) -> Dict[str, Any]:
    """Build the SST-02 period summary used for manual e-Filing entry.

    Returns:
        Dict with period, status, totals and one line per invoice. Amounts and
        dates stay unformatted except 'date_display', which keeps the
        user-entered DD/MM/YYYY text where present.
    """
    selected = invoices_in_period(invoices, period.start, period.end)

    lines = []
    for inv in selected:
        raw_date = inv.get("invoice_date")
        inv_date: date = normalize_date(raw_date)
        if isinstance(raw_date, str) and "/" in raw_date:
            display = raw_date.strip()
        else:
            display = format_date_my(inv_date)
        lines.append({
            "client_name": inv.get("client_name"),
            "invoice_date": inv_date,
            "date_display": display,
            "amount": to_number(inv.get("amount")),
        })

    taxable_total = sum(line["amount"] for line in lines)

    return {
        "organization": organization,
        "period": period,
        "status": status,
        "taxable_total": taxable_total,
        "sst_payable": taxable_total * SST_RATE,
        "invoice_count": len(lines),
        "lines": lines,
    }
