"""EA form CLI commands for Cukai."""

from typing import Optional

import click
from rich.console import Console

from cukai.sdk import filter_by_tax_year
from cukai.sdk.dates import to_number
from cukai.sdk.taxes import compute_ea_summary, sort_ea_forms, summarize_ea_forms

from .common import echo_json, load_records_or_exit
from .renderers.tables import render_ea_forms


@click.group()
def ea():
    """EA forms: employee remuneration statements."""
    pass


@ea.command("summary")
@click.argument("records_file", type=click.Path(dir_okay=False))
@click.option("--year", type=int, help="Tax year (default: all records in the file).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def ea_summary(records_file: str, year: Optional[int], output_format: str):
    """Total remuneration and net employment income per employee."""
    records = load_records_or_exit(records_file)
    if year is not None:
        records = filter_by_tax_year(records, year)

    rows = []
    for record in sort_ea_forms(records):
        row = {
            "employee_name": record.get("employee_name"),
            "tax_year": record.get("tax_year"),
            "pcb": to_number(record.get("pcb")),
        }
        row.update(compute_ea_summary(record).to_dict())
        rows.append(row)
    totals = summarize_ea_forms(records)

    if output_format == "json":
        echo_json({"forms": rows, "totals": totals})
        return

    if not rows:
        click.echo(f"No EA forms found{f' for {year}' if year else ''}.")
        return

    render_ea_forms(Console(), rows, totals)
