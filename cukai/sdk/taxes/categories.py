"""Deduction category rules table.

The bundled table lives in data/categories.yaml. A user override
(categories_file setting, or categories.yaml in the config dir) replaces the
whole table.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import get_categories_override_path
from .schemas import (
    CappedReliefRule,
    CapitalAllowanceRule,
    CategoryTable,
    FlatPercentRule,
)

logger = logging.getLogger(__name__)

BUNDLED_CATEGORIES_PATH = Path(__file__).parent / "data" / "categories.yaml"

CATEGORY_TYPES = [
    ("business", "Business Expenses"),
    ("capital", "Capital Allowance"),
    ("personal", "Personal Relief"),
]

Rule = Union[FlatPercentRule, CapitalAllowanceRule, CappedReliefRule]


class CategoryRulesError(Exception):
    """Raised when a category rules file is missing or invalid."""
    pass


def _read_table(path: Path) -> List[Rule]:
    if not path.exists():
        raise CategoryRulesError(f"Category rules file not found: {path}")

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CategoryRulesError(f"Invalid YAML in {path}: {e}")

    if not isinstance(raw, dict):
        raise CategoryRulesError(f"{path}: expected a mapping with a 'categories' list")

    try:
        table = CategoryTable.model_validate(raw)
    except ValidationError as e:
        raise CategoryRulesError(f"Invalid category rules in {path}:\n{e}")

    return list(table.categories)


@lru_cache(maxsize=1)
def _bundled_categories() -> tuple:
    return tuple(_read_table(BUNDLED_CATEGORIES_PATH))


@lru_cache(maxsize=8)
def _override_categories(path: Path, mtime_ns: int) -> tuple:
    # Keyed on mtime so an edited override is picked up on the next lookup
    logger.warning(f"Using category rules override: {path}")
    return tuple(_read_table(path))


def load_categories(path: Optional[Union[str, Path]] = None) -> List[Rule]:
    """Load category rules.

    Args:
        path: Explicit rules file. If None, the user override is used when
              configured, else the bundled table. The override is read once
              per file modification.

    Raises:
        CategoryRulesError: If the file is missing or fails validation
    """
    if path is not None:
        return _read_table(Path(path))

    override = get_categories_override_path()
    if override is None:
        return list(_bundled_categories())

    try:
        mtime_ns = override.stat().st_mtime_ns
    except FileNotFoundError:
        raise CategoryRulesError(f"Category rules file not found: {override}")
    return list(_override_categories(override, mtime_ns))


def get_category(category_id: Optional[str], categories: Optional[List[Rule]] = None) -> Optional[Rule]:
    """Find a category by id. Returns None if not found."""
    if not category_id:
        return None
    if categories is None:
        categories = load_categories()
    for rule in categories:
        if rule.id == category_id:
            return rule
    return None


def get_categories_by_type(category_type: str, categories: Optional[List[Rule]] = None) -> List[Rule]:
    if categories is None:
        categories = load_categories()
    return [c for c in categories if c.type == category_type]


def _fmt_percent(value: float) -> str:
    return f"{value:g}"


def claimable_label(rule: Rule) -> str:
    """Short description of how much of a category is claimable."""
    if isinstance(rule, FlatPercentRule):
        return f"{_fmt_percent(rule.claimable_percent)}% claimable"
    if isinstance(rule, CapitalAllowanceRule):
        return f"{_fmt_percent(rule.initial_percent)}% initial + {_fmt_percent(rule.annual_percent)}% annual"
    if isinstance(rule, CappedReliefRule):
        return f"Max RM {rule.max_claim:,.0f}"
    return ""
