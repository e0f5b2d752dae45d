"""Deduction claimable amount calculations.

The claimable amount of a deduction is derived from its category rule and the
raw amount at save time, never edited on its own. An unknown category claims
the full amount; callers should treat that as an unverified claim.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..dates import to_db_date, to_number
from .categories import Rule, get_category
from .schemas import CappedReliefRule, CapitalAllowanceRule, FlatPercentRule

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_TYPE = "business"
DEFAULT_STATUS = "pending"


@dataclass(frozen=True)
class ClaimableResult:
    """Claimable portion of a deduction."""

    claimable_amount: float
    claimable_percent: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "claimable_amount": self.claimable_amount,
            "claimable_percent": self.claimable_percent,
        }


def compute_claimable(category: Union[Rule, str, None], amount: Any) -> ClaimableResult:
    """Compute the claimable amount and percent of a deduction.

    Args:
        category: Category rule, category id, or None
        amount: Raw amount in RM. Non-numeric or negative values count as 0.

    Returns:
        ClaimableResult. Bad amounts never raise.

    Raises:
        CategoryRulesError: If an id is given and the configured override
            rules file is invalid
    """
    if isinstance(category, str):
        category_id = category
        category = get_category(category_id)
        if category is None:
            logger.debug(f"Unknown category '{category_id}', claiming full amount")

    amount = max(0.0, to_number(amount))

    if isinstance(category, FlatPercentRule):
        pct = category.claimable_percent
        return ClaimableResult(amount * pct / 100, pct)

    if isinstance(category, CapitalAllowanceRule):
        pct = category.claimable_percent
        return ClaimableResult(amount * pct / 100, pct)

    if isinstance(category, CappedReliefRule):
        claimable = min(amount, category.max_claim)
        pct = claimable / amount * 100 if amount > 0 else 0.0
        return ClaimableResult(claimable, pct)

    return ClaimableResult(amount, 100.0)


def build_deduction_row(form: Mapping[str, Any], categories: Optional[List[Rule]] = None) -> Dict[str, Any]:
    """Build the stored deduction record from form input.

    Snapshots the category name/type, normalizes the date to ISO and derives
    the claimable fields from the category rule.
    """
    category_id = form.get("category_id")
    category = get_category(category_id, categories)
    if category is None:
        logger.debug(f"Deduction saved with unverified category '{category_id}'")

    amount = max(0.0, to_number(form.get("amount")))
    result = compute_claimable(category, amount)

    return {
        "category_id": category_id,
        "category_name": category.name if category else category_id,
        "category_type": category.type if category else DEFAULT_CATEGORY_TYPE,
        "amount": amount,
        "claimable_amount": result.claimable_amount,
        "claimable_percent": result.claimable_percent,
        "deduction_date": to_db_date(form.get("deduction_date")),
        "description": form.get("description") or None,
        "tax_year": int(to_number(form.get("tax_year"))),
        "has_receipt": bool(form.get("has_receipt", False)),
        "status": form.get("status") or DEFAULT_STATUS,
    }


def _claimable_of(deduction: Mapping[str, Any]) -> float:
    # Rows saved without derived fields are recomputed from their category
    if "claimable_amount" in deduction and deduction["claimable_amount"] is not None:
        return to_number(deduction["claimable_amount"])
    return compute_claimable(deduction.get("category_id"), deduction.get("amount")).claimable_amount


def calculate_total_deductions(deductions: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Sum claimable amounts overall and per category type.

    Returns:
        Dict with 'total' and 'by_type' (business/capital/personal totals)

    Raises:
        CategoryRulesError: If a row needs recomputing and the override rules
            file is invalid
    """
    by_type = {"business": 0.0, "capital": 0.0, "personal": 0.0}
    total = 0.0
    for d in deductions:
        claimable = _claimable_of(d)
        category_type = d.get("category_type") or DEFAULT_CATEGORY_TYPE
        by_type[category_type] = by_type.get(category_type, 0.0) + claimable
        total += claimable
    return {"total": total, "by_type": by_type}


def group_by_category(
    deductions: Iterable[Mapping[str, Any]],
    category_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Group deductions by category with raw and claimable totals.

    Args:
        deductions: Deduction records
        category_type: Only include this type (business/capital/personal)

    Returns:
        List of dicts with category_id, category_name, items, total, claimable
        in order of first appearance.

    Raises:
        CategoryRulesError: If a row needs recomputing and the override rules
            file is invalid
    """
    groups: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
    for d in deductions:
        if category_type and (d.get("category_type") or DEFAULT_CATEGORY_TYPE) != category_type:
            continue
        cat_id = d.get("category_id") or "other"
        if cat_id not in groups:
            groups[cat_id] = {
                "category_id": cat_id,
                "category_name": d.get("category_name") or cat_id,
                "items": [],
                "total": 0.0,
                "claimable": 0.0,
            }
        group = groups[cat_id]
        group["items"].append(d)
        group["total"] += to_number(d.get("amount"))
        group["claimable"] += _claimable_of(d)
    return list(groups.values())


def receipt_summary(deductions: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    """Count deductions with and without receipts."""
    deductions = list(deductions)
    with_receipt = sum(1 for d in deductions if d.get("has_receipt"))
    return {
        "total_count": len(deductions),
        "receipts_uploaded": with_receipt,
        "missing_receipts": len(deductions) - with_receipt,
        "categories_used": len({d.get("category_id") for d in deductions}),
    }
