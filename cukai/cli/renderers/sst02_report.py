"""Plain-text SST-02 period summary for manual e-Filing entry."""

from typing import Any, Mapping

from cukai.sdk.dates import format_date_my

from .tables import format_rm


def render_sst02_text(summary: Mapping[str, Any]) -> str:
    """Render a build_sst02_summary() result as a text report."""
    period = summary["period"]

    lines = [
        f"  {line['client_name'] or '-'} | {line['date_display']} | RM {line['amount']:.2f}"
        for line in summary["lines"]
    ]
    details = "\n".join(lines) if lines else "(No invoices)"

    return f"""SST-02 SUMMARY - TAXABLE PERIOD
==============================

Organization: {summary.get('organization') or '-'}
Period: {period.label}
Period Start: {format_date_my(period.start)}
Period End: {format_date_my(period.end)}
Due Date: {format_date_my(period.due_date)}
Status: {summary.get('status') or 'draft'}

SUMMARY
-------
Taxable Value: {format_rm(summary['taxable_total'])}
Total SST Payable: {format_rm(summary['sst_payable'])}
Total Invoices: {summary['invoice_count']}

INVOICE DETAILS (Period)
------------------------
{details}

---
For manual entry into SST-02 e-Filing.
"""
