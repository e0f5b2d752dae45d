"""SST filing CLI commands for Cukai.

Taxable periods, due dates, SST payable and SST-02 text exports.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cukai.sdk import (
    days_until_due,
    filing_period,
    get_setting,
    next_filing_period,
    periods_back,
)
from cukai.sdk.taxes import build_sst02_summary, invoices_in_period, sst_payable

from .common import echo_json, load_records_or_exit, parse_period, parse_today
from .renderers.sst02_report import render_sst02_text
from .renderers.tables import format_rm, render_periods


@click.group()
def sst():
    """SST-02 filing periods and payable amounts."""
    pass


@sst.command("next")
@click.option("--today", "today_str", help="Reference date (default: system date).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def sst_next(today_str: Optional[str], output_format: str):
    """Show the next open filing period and days until it is due."""
    today = parse_today(today_str)
    period = next_filing_period(today)
    days = days_until_due(period.due_date, today)

    if output_format == "json":
        data = period.to_dict()
        data["days_until_due"] = days
        echo_json(data)
        return

    click.echo(f"Next period: {period.label}")
    click.echo(f"Due date:    {period.due_date_str}")
    if days < 0:
        click.echo(click.style(f"Overdue by {-days} day(s)", fg="red"))
    else:
        click.echo(f"Days left:   {days}")


@sst.command("periods")
@click.option("--count", "-n", type=click.IntRange(min=1, max=120), default=6, show_default=True,
              help="Number of periods to list.")
@click.option("--ref", "ref_period", help="Newest period as YYYY-MM (default: next open period).")
@click.option("--invoices", "invoices_file", type=click.Path(dir_okay=False),
              help="Invoice records file; adds SST payable per period.")
@click.option("--today", "today_str", help="Reference date (default: system date).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def sst_periods(count: int, ref_period: Optional[str], invoices_file: Optional[str],
                today_str: Optional[str], output_format: str):
    """List recent SST taxable periods with due dates."""
    today = parse_today(today_str)
    if ref_period:
        ref_year, ref_month = parse_period(ref_period)
    else:
        ref = next_filing_period(today)
        ref_year, ref_month = ref.year, ref.month

    periods = periods_back(count, ref_year, ref_month)

    amounts = None
    if invoices_file:
        invoices = load_records_or_exit(invoices_file)
        amounts = {p.period_start_str: sst_payable(invoices, p.start, p.end) for p in periods}

    if output_format == "json":
        output = []
        for p in periods:
            data = p.to_dict()
            data["days_until_due"] = days_until_due(p.due_date, today)
            if amounts is not None:
                data["sst_payable"] = amounts[p.period_start_str]
            output.append(data)
        echo_json(output)
        return

    render_periods(Console(), periods, amounts=amounts, today=today)


@sst.command("payable")
@click.argument("invoices_file", type=click.Path(dir_okay=False))
@click.option("--period", "period_str", required=True, help="Taxable period as YYYY-MM.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def sst_payable_cmd(invoices_file: str, period_str: str, output_format: str):
    """Compute SST payable for one taxable period from INVOICES_FILE."""
    year, month = parse_period(period_str)
    period = filing_period(year, month)
    invoices = load_records_or_exit(invoices_file)

    selected = invoices_in_period(invoices, period.start, period.end)
    payable = sst_payable(invoices, period.start, period.end)

    if output_format == "json":
        data = period.to_dict()
        data.update({"invoice_count": len(selected), "sst_payable": payable})
        echo_json(data)
        return

    click.echo(f"{period.label}: {len(selected)} invoice(s)")
    click.echo(f"SST payable: {format_rm(payable)} (due {period.due_date_str})")


@sst.command("export")
@click.argument("invoices_file", type=click.Path(dir_okay=False))
@click.option("--period", "period_str", required=True, help="Taxable period as YYYY-MM.")
@click.option("--status", default="draft", type=click.Choice(["draft", "ready", "submitted"]),
              show_default=True, help="Filing status to print on the report.")
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False),
              help="Write to file (default: sst-02-YYYY-MM.txt in current directory).")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the report instead of writing a file.")
def sst_export(invoices_file: str, period_str: str, status: str, output_path: Optional[str],
               to_stdout: bool):
    """Export an SST-02 period summary as plain text."""
    year, month = parse_period(period_str)
    period = filing_period(year, month)
    invoices = load_records_or_exit(invoices_file)

    summary = build_sst02_summary(
        invoices, period,
        organization=get_setting("organization"),
        status=status,
    )
    content = render_sst02_text(summary)

    if to_stdout:
        click.echo(content)
        return

    path = Path(output_path) if output_path else Path(f"sst-02-{year}-{month:02d}.txt")
    path.write_text(content, encoding="utf-8")
    click.echo(f"Wrote {path} ({summary['invoice_count']} invoice(s), SST {format_rm(summary['sst_payable'])})")
