"""Deduction CLI commands for Cukai.

Claimable amount lookups and per-year deduction summaries.
"""

from typing import Optional

import click
from rich.console import Console

from cukai.sdk import filter_by_tax_year
from cukai.sdk.taxes import (
    CATEGORY_TYPES,
    calculate_total_deductions,
    claimable_label,
    compute_claimable,
    get_category,
    group_by_category,
    load_categories,
    receipt_summary,
)

from .common import category_errors_to_click, echo_json, load_records_or_exit
from .renderers.tables import format_rm, render_categories, render_deduction_summary


@click.group()
def deductions():
    """Tax deductions: claimable amounts and yearly summaries."""
    pass


@click.group()
def categories():
    """Deduction category rules."""
    pass


@categories.command("list")
@click.option("--type", "category_type", type=click.Choice([v for v, _ in CATEGORY_TYPES]),
              help="Only show one category type.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
@category_errors_to_click
def categories_list(category_type: Optional[str], output_format: str):
    """List deduction categories and their claim rules."""
    rules = load_categories()
    if category_type:
        rules = [r for r in rules if r.type == category_type]

    if output_format == "json":
        echo_json([r.model_dump() for r in rules])
        return

    rows = [
        {"id": r.id, "name": r.name, "type": r.type, "label": claimable_label(r)}
        for r in rules
    ]
    render_categories(Console(), rows)


@deductions.command("claimable")
@click.argument("category_id")
@click.argument("amount", type=float)
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
@category_errors_to_click
def deductions_claimable(category_id: str, amount: float, output_format: str):
    """Compute the claimable portion of AMOUNT for CATEGORY_ID.

    \b
    Examples:
      cukai deductions claimable computers 3000   # 60% = RM 1,800.00
      cukai deductions claimable epf 5000         # capped at RM 4,000.00
    """
    category = get_category(category_id)
    result = compute_claimable(category, amount)

    if output_format == "json":
        data = {"category_id": category_id, "amount": amount, "verified": category is not None}
        data.update(result.to_dict())
        echo_json(data)
        return

    if category is None:
        click.echo(click.style(
            f"Warning: unknown category '{category_id}', full amount treated as claimable (unverified).",
            fg="yellow",
        ))
    else:
        click.echo(f"{category.name} ({claimable_label(category)})")

    click.echo(f"Claimable: {result.claimable_percent:g}% = {format_rm(result.claimable_amount)}")


@deductions.command("summary")
@click.argument("records_file", type=click.Path(dir_okay=False))
@click.option("--year", type=int, help="Tax year (default: all records in the file).")
@click.option("--type", "category_type", type=click.Choice([v for v, _ in CATEGORY_TYPES]),
              help="Only group categories of this type.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
@category_errors_to_click
def deductions_summary(records_file: str, year: Optional[int], category_type: Optional[str],
                       output_format: str):
    """Summarize claimable deductions from RECORDS_FILE (JSON or YAML)."""
    records = load_records_or_exit(records_file)
    if year is not None:
        records = filter_by_tax_year(records, year)

    totals = calculate_total_deductions(records)
    groups = group_by_category(records, category_type)
    receipts = receipt_summary(records)

    if output_format == "json":
        echo_json({
            "year": year,
            "total": totals["total"],
            "by_type": totals["by_type"],
            "categories": [
                {k: v for k, v in g.items() if k != "items"} | {"count": len(g["items"])}
                for g in groups
            ],
            "receipts": receipts,
        })
        return

    if not records:
        click.echo(f"No deductions found{f' for {year}' if year else ''}.")
        return

    render_deduction_summary(Console(), year or "(all years)", totals, groups, receipts)
