"""EA form (employment income statement) calculations.

Total remuneration sums every remuneration field. Net employment income
subtracts the employee's statutory contributions (EPF, SOCSO, EIS) and is
floored at zero. PCB is a remitted withholding and is not subtracted.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..dates import to_number


REMUNERATION_FIELDS = [
    ("gross_salary", "Gross Salary"),
    ("allowances", "Allowances"),
    ("bonuses", "Bonuses"),
    ("benefits_in_kind", "Benefits in Kind"),
    ("overtime", "Overtime"),
    ("director_fees", "Director Fees"),
    ("commission", "Commission"),
]

STATUTORY_FIELDS = [
    ("epf_employee", "EPF (Employee)"),
    ("socso", "SOCSO"),
    ("eis", "EIS"),
    ("pcb", "PCB"),
]

# Subtracted from remuneration for net employment income
NET_INCOME_DEDUCTIONS = ("epf_employee", "socso", "eis")

# Stored but not part of either total
OTHER_NUMERIC_FIELDS = ("epf_employer",)


@dataclass(frozen=True)
class EASummary:
    total_remuneration: float
    net_employment_income: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_remuneration": self.total_remuneration,
            "net_employment_income": self.net_employment_income,
        }


def compute_ea_summary(record: Mapping[str, Any]) -> EASummary:
    """Compute total remuneration and net employment income for an EA record.

    Missing or non-numeric fields count as 0.
    """
    total = sum(to_number(record.get(key)) for key, _ in REMUNERATION_FIELDS)
    deductions = sum(to_number(record.get(key)) for key in NET_INCOME_DEDUCTIONS)
    return EASummary(
        total_remuneration=total,
        net_employment_income=max(0.0, total - deductions),
    )


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def build_ea_row(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize EA form input into a stored record."""
    row: Dict[str, Any] = {
        "tax_year": int(to_number(form.get("tax_year"))),
        "employee_name": str(form.get("employee_name") or "").strip(),
        "employee_ic": _clean_str(form.get("employee_ic")),
        "employee_tax_no": _clean_str(form.get("employee_tax_no")),
    }
    for key, _ in REMUNERATION_FIELDS + STATUTORY_FIELDS:
        row[key] = to_number(form.get(key))
    for key in OTHER_NUMERIC_FIELDS:
        row[key] = to_number(form.get(key))
    row["notes"] = _clean_str(form.get("notes"))
    return row


def ea_table_rows(record: Mapping[str, Any]) -> Tuple[List[Tuple[str, float]], List[Tuple[str, float]]]:
    """Label/amount rows for an EA export.

    Returns:
        Tuple of (income_rows, deduction_rows). Income rows end with Total
        Remuneration; deduction rows end with Net Employment Income.
    """
    summary = compute_ea_summary(record)
    income_rows = [(label, to_number(record.get(key))) for key, label in REMUNERATION_FIELDS]
    income_rows.append(("Total Remuneration", summary.total_remuneration))
    deduction_rows = [(label, to_number(record.get(key))) for key, label in STATUTORY_FIELDS]
    deduction_rows.append(("Net Employment Income", summary.net_employment_income))
    return income_rows, deduction_rows


def sort_ea_forms(records: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Sort EA records by employee name (case-insensitive)."""
    return sorted(records, key=lambda r: (r.get("employee_name") or "").lower())


def summarize_ea_forms(records: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Totals across all employees' EA records for a year."""
    totals = {
        "employees": 0,
        "total_remuneration": 0.0,
        "net_employment_income": 0.0,
        "pcb": 0.0,
    }
    for record in records:
        summary = compute_ea_summary(record)
        totals["employees"] += 1
        totals["total_remuneration"] += summary.total_remuneration
        totals["net_employment_income"] += summary.net_employment_income
        totals["pcb"] += to_number(record.get("pcb"))
    return totals
