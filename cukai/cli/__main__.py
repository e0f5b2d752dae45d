"""Cukai CLI - Command-line interface for SME tax computations."""

import logging
from typing import Optional

import click
from rich.console import Console

from cukai import __version__
from cukai.sdk import compare_years

from .common import category_errors_to_click, echo_json, load_records_or_exit, parse_today
from .deductions_commands import categories as categories_group
from .deductions_commands import deductions as deductions_group
from .ea_commands import ea as ea_group
from .renderers.tables import render_yoy
from .settings_commands import settings as settings_group
from .sst_commands import sst as sst_group


@click.group()
@click.version_option(version=__version__, prog_name="cukai")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    """Cukai - Malaysian SME tax tools.

    Deduction claimable amounts, SST-02 periods and payable amounts,
    and EA form summaries, computed from exported records.

    Configuration is loaded from (in order):

    \b
    1. CUKAI_CONFIG_PATH environment variable
    2. ~/.config/cukai/settings.json (XDG default)

    Run 'cukai settings show' to see effective settings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Add subcommand groups
cli.add_command(categories_group)
cli.add_command(deductions_group)
cli.add_command(sst_group)
cli.add_command(ea_group)
cli.add_command(settings_group)


@cli.group()
def dashboard():
    """Dashboard metrics."""
    pass


@dashboard.command("yoy")
@click.option("--invoices", "invoices_file", required=True, type=click.Path(dir_okay=False),
              help="Invoice records file.")
@click.option("--deductions", "deductions_file", required=True, type=click.Path(dir_okay=False),
              help="Deduction records file.")
@click.option("--year", type=int, help="Current year (default: this year).")
@click.option("--today", "today_str", help="Reference date used when --year is omitted.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
@category_errors_to_click
def dashboard_yoy(invoices_file: str, deductions_file: str, year: Optional[int],
                  today_str: Optional[str], output_format: str):
    """Compare revenue, deductions and SST against the previous year."""
    if year is None:
        year = parse_today(today_str).year

    invoices = load_records_or_exit(invoices_file)
    deductions = load_records_or_exit(deductions_file)
    comparison = compare_years(invoices, deductions, year)

    if output_format == "json":
        echo_json(comparison)
        return

    render_yoy(Console(), comparison)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
