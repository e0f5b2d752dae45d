"""Cukai SDK - Core functionality for Malaysian SME tax computations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_categories_override_path,
    get_data_path,
    KNOWN_SETTINGS,
)

from .dates import (
    normalize_date,
    to_db_date,
    format_date_my,
    format_date_long,
    to_number,
)

from .periods import (
    FilingPeriod,
    period_dates,
    due_date,
    filing_period,
    next_filing_period,
    days_until_due,
    periods_back,
)

from .records import (
    RecordsFileError,
    load_records,
    filter_by_tax_year,
)

from .yoy import (
    year_metrics,
    percent_change,
    compare_years,
)

from . import taxes

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_categories_override_path",
    "get_data_path",
    "KNOWN_SETTINGS",
    # Dates
    "normalize_date",
    "to_db_date",
    "format_date_my",
    "format_date_long",
    "to_number",
    # Periods
    "FilingPeriod",
    "period_dates",
    "due_date",
    "filing_period",
    "next_filing_period",
    "days_until_due",
    "periods_back",
    # Records
    "RecordsFileError",
    "load_records",
    "filter_by_tax_year",
    # Year-over-year
    "year_metrics",
    "percent_change",
    "compare_years",
    # Taxes module
    "taxes",
]
