"""Rich renderers for tax computation results.

Transforms SDK output into formatted Rich tables. Amounts are shown as
RM #,##0.00 and dates as DD/MM/YYYY.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from cukai.sdk.dates import format_date_my
from cukai.sdk.periods import FilingPeriod, days_until_due


def format_rm(amount: float) -> str:
    """Format a Ringgit amount as 'RM 1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}RM {abs(amount):,.2f}"


def format_pct(value: float) -> str:
    return f"{value:+.1f}%"


def render_categories(console: Console, rows: List[Dict[str, str]]) -> None:
    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Claimable")

    for row in rows:
        table.add_row(row["id"], row["name"], row["type"], row["label"])

    console.print(table)


def render_deduction_summary(console: Console, year: int, totals: Mapping[str, Any],
                             groups: List[Dict[str, Any]], receipts: Mapping[str, int]) -> None:
    """Render per-category deduction totals for a tax year."""
    table = Table(title=f"Deductions {year}", box=box.SIMPLE, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Claimable", justify="right")

    for group in groups:
        table.add_row(
            group["category_name"],
            str(len(group["items"])),
            format_rm(group["total"]),
            format_rm(group["claimable"]),
        )

    console.print(table)

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("key", style="dim")
    summary.add_column("value", justify="right")
    for category_type, amount in totals["by_type"].items():
        summary.add_row(category_type.title(), format_rm(amount))
    summary.add_row("Total claimable", format_rm(totals["total"]))
    summary.add_row("Receipts", f"{receipts['receipts_uploaded']} / {receipts['total_count']}")
    console.print(Panel(summary, title="Summary", border_style="dim"))


def render_periods(console: Console, periods: List[FilingPeriod],
                   amounts: Optional[Dict[str, float]] = None,
                   today: Optional[date] = None) -> None:
    """Render SST filing periods, newest first."""
    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("Period", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Due")
    if today is not None:
        table.add_column("Days", justify="right")
    if amounts is not None:
        table.add_column("SST", justify="right")

    for p in periods:
        row = [p.label, format_date_my(p.start), format_date_my(p.end), p.due_date_str]
        if today is not None:
            days = days_until_due(p.due_date, today)
            style = "red" if days < 0 else ("yellow" if days <= 7 else "")
            row.append(f"[{style}]{days}[/{style}]" if style else str(days))
        if amounts is not None:
            row.append(format_rm(amounts.get(p.period_start_str, 0.0)))
        table.add_row(*row)

    console.print(table)


def render_ea_forms(console: Console, rows: List[Dict[str, Any]], totals: Mapping[str, Any]) -> None:
    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("Employee", style="cyan")
    table.add_column("Remuneration", justify="right")
    table.add_column("Net income", justify="right")
    table.add_column("PCB", justify="right")

    for row in rows:
        table.add_row(
            row["employee_name"] or "-",
            format_rm(row["total_remuneration"]),
            format_rm(row["net_employment_income"]),
            format_rm(row["pcb"]),
        )

    table.add_section()
    table.add_row(
        f"Total ({totals['employees']})",
        format_rm(totals["total_remuneration"]),
        format_rm(totals["net_employment_income"]),
        format_rm(totals["pcb"]),
        style="bold",
    )
    console.print(table)


def render_yoy(console: Console, comparison: Mapping[str, Any]) -> None:
    labels = {
        "revenue": "Revenue",
        "total_deductions": "Total deductions",
        "sst_payable": "SST payable",
    }
    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column(str(comparison["current_year"]), justify="right")
    table.add_column(str(comparison["previous_year"]), justify="right")
    table.add_column("vs last year", justify="right")

    for key, label in labels.items():
        change = comparison["yoy"][key]
        style = "green" if change > 0 else ("red" if change < 0 else "dim")
        table.add_row(
            label,
            format_rm(comparison["current"][key]),
            format_rm(comparison["previous"][key]),
            f"[{style}]{format_pct(change)}[/{style}]",
        )

    console.print(table)
