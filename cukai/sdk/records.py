"""Load invoice, deduction and EA records from exported files.

Records arrive as JSON or YAML exports from the hosted database. A file holds
either a plain list of records or a mapping with the list under 'records' (or
'invoices', 'deductions', 'ea_forms').
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import yaml

from .dates import to_number

logger = logging.getLogger(__name__)

RECORD_LIST_KEYS = ("records", "invoices", "deductions", "ea_forms")
SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class RecordsFileError(Exception):
    """Raised when a records file cannot be read or has an unexpected shape."""
    pass


def _extract_list(raw: Any, path: Path) -> List[Dict[str, Any]]:
    if isinstance(raw, list):
        records = raw
    elif isinstance(raw, dict):
        key = next((k for k in RECORD_LIST_KEYS if k in raw), None)
        if key is None:
            raise RecordsFileError(
                f"{path}: expected a list or a mapping with one of: {', '.join(RECORD_LIST_KEYS)}"
            )
        records = raw[key]
        if not isinstance(records, list):
            raise RecordsFileError(f"{path}: '{key}' must be a list")
    elif raw is None:
        records = []
    else:
        raise RecordsFileError(f"{path}: unexpected top-level {type(raw).__name__}")

    result = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            logger.warning(f"{path.name}: skipping entry {i} (not a mapping)")
            continue
        result.append(rec)
    return result


def load_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load a list of records from a JSON or YAML file.

    Raises:
        RecordsFileError: Missing file, unsupported format, or bad shape
    """
    path = Path(path)
    if not path.exists():
        raise RecordsFileError(f"Records file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RecordsFileError(
            f"Unsupported records file type '{suffix}'. Use {', '.join(SUPPORTED_SUFFIXES)}"
        )

    try:
        with open(path, "r") as f:
            if suffix == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordsFileError(f"Could not parse {path}: {e}")

    records = _extract_list(raw, path)
    logger.debug(f"Loaded {len(records)} record(s) from {path.name}")
    return records


def filter_by_tax_year(records: Iterable[Mapping[str, Any]], year: int) -> List[Mapping[str, Any]]:
    """Keep records whose tax_year equals year."""
    return [r for r in records if int(to_number(r.get("tax_year"))) == year]
