"""taxes - Malaysian SME tax rules.

Scope:
- Deduction category rules and claimable amounts (business, capital
  allowance, personal relief)
- SST payable per taxable period, SST-02 summaries
- EA form remuneration and net employment income

Constraints:
- Pure calculation - receives records, returns derived values
- Never raises on bad record data; missing/non-numeric amounts count as 0
- Category rules loaded from data/categories.yaml (or a user override)

Usage:
    from cukai.sdk.taxes import compute_claimable, sst_payable, compute_ea_summary

    compute_claimable("computers", 3000)   # 60%, RM 1,800.00
    sst_payable(invoices, "2024-05-01", "2024-05-31")
    compute_ea_summary({"gross_salary": 5000, "epf_employee": 550})
"""

from .schemas import (
    CategoryRule,
    CategoryTable,
    FlatPercentRule,
    CapitalAllowanceRule,
    CappedReliefRule,
)

from .categories import (
    CATEGORY_TYPES,
    CategoryRulesError,
    load_categories,
    get_category,
    get_categories_by_type,
    claimable_label,
)

from .deductions import (
    ClaimableResult,
    compute_claimable,
    build_deduction_row,
    calculate_total_deductions,
    group_by_category,
    receipt_summary,
)

from .sst import (
    SST_RATE,
    invoices_in_period,
    calculate_sst_payable,
    sst_payable,
    period_sst_payable,
    build_sst02_summary,
)

from .ea import (
    EASummary,
    compute_ea_summary,
    build_ea_row,
    ea_table_rows,
    sort_ea_forms,
    summarize_ea_forms,
)

__all__ = [
    # Schemas
    "CategoryRule",
    "CategoryTable",
    "FlatPercentRule",
    "CapitalAllowanceRule",
    "CappedReliefRule",
    # Categories
    "CATEGORY_TYPES",
    "CategoryRulesError",
    "load_categories",
    "get_category",
    "get_categories_by_type",
    "claimable_label",
    # Deductions
    "ClaimableResult",
    "compute_claimable",
    "build_deduction_row",
    "calculate_total_deductions",
    "group_by_category",
    "receipt_summary",
    # SST
    "SST_RATE",
    "invoices_in_period",
    "calculate_sst_payable",
    "sst_payable",
    "period_sst_payable",
    "build_sst02_summary",
    # EA
    "EASummary",
    "compute_ea_summary",
    "build_ea_row",
    "ea_table_rows",
    "sort_ea_forms",
    "summarize_ea_forms",
]
