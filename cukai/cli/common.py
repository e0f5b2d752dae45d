"""Shared helpers for CLI commands."""

import json
import logging
from functools import wraps
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Tuple

import click

from cukai.sdk import RecordsFileError, get_data_path, load_records, normalize_date
from cukai.sdk.taxes import CategoryRulesError


logger = logging.getLogger(__name__)


def resolve_records_path(path: str) -> Path:
    """Resolve a records file argument.

    A relative path missing from the current directory is looked up in the
    data dir (data_dir setting, else XDG_DATA_HOME/cukai).
    """
    p = Path(path).expanduser()
    if p.is_absolute() or p.exists():
        return p

    candidate = get_data_path() / p
    if candidate.exists():
        logger.debug(f"Resolved {path} to {candidate}")
        return candidate
    return p


def load_records_or_exit(path: str) -> List[Dict[str, Any]]:
    """Load records, converting file errors to a ClickException."""
    try:
        return load_records(resolve_records_path(path))
    except RecordsFileError as e:
        raise click.ClickException(str(e))


def parse_period(value: str) -> Tuple[int, int]:
    """Parse a YYYY-MM period argument."""
    m = re.match(r"^(\d{4})-(\d{1,2})$", value.strip())
    if not m or not 1 <= int(m.group(2)) <= 12:
        raise click.BadParameter(f"Invalid period '{value}'. Use YYYY-MM (e.g., 2024-05).")
    return int(m.group(1)), int(m.group(2))


def parse_today(value: str) -> date:
    """Parse a --today override (ISO or DD/MM/YYYY), or use the system date."""
    if not value:
        return date.today()
    parsed = normalize_date(value)
    if parsed is None:
        raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD or DD/MM/YYYY.")
    return parsed


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def category_errors_to_click(func):
    """Decorator converting CategoryRulesError into a ClickException."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CategoryRulesError as e:
            raise click.ClickException(str(e))

    return wrapper
