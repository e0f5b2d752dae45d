"""Unit tests for EA form summaries."""

import pytest

from cukai.sdk.taxes import (
    build_ea_row,
    compute_ea_summary,
    ea_table_rows,
    sort_ea_forms,
    summarize_ea_forms,
)


class TestComputeEASummary:

    def test_salary_scenario(self):
        summary = compute_ea_summary({
            "gross_salary": 5000,
            "epf_employee": 550,
            "socso": 20,
            "eis": 5,
        })
        assert summary.total_remuneration == 5000
        assert summary.net_employment_income == pytest.approx(4425)

    def test_all_remuneration_fields_summed(self):
        record = {
            "gross_salary": 60000,
            "allowances": 2400,
            "bonuses": 5000,
            "benefits_in_kind": 1200,
            "overtime": 800,
            "director_fees": 3000,
            "commission": 1600,
        }
        assert compute_ea_summary(record).total_remuneration == pytest.approx(74000)

    def test_pcb_not_subtracted(self):
        base = {"gross_salary": 5000, "epf_employee": 550}
        with_pcb = dict(base, pcb=400)
        assert compute_ea_summary(with_pcb).net_employment_income == compute_ea_summary(base).net_employment_income

    def test_epf_employer_not_subtracted(self):
        summary = compute_ea_summary({"gross_salary": 5000, "epf_employer": 650})
        assert summary.net_employment_income == 5000

    def test_net_never_negative(self):
        summary = compute_ea_summary({
            "gross_salary": 100,
            "epf_employee": 550,
            "socso": 20,
            "eis": 5,
        })
        assert summary.total_remuneration == 100
        assert summary.net_employment_income == 0

    def test_missing_and_bad_fields_are_zero(self):
        summary = compute_ea_summary({
            "gross_salary": "3000",
            "allowances": None,
            "bonuses": "n/a",
            "socso": "",
        })
        assert summary.total_remuneration == pytest.approx(3000)
        assert summary.net_employment_income == pytest.approx(3000)

    def test_empty_record(self):
        summary = compute_ea_summary({})
        assert summary.to_dict() == {"total_remuneration": 0, "net_employment_income": 0}


class TestBuildEARow:
    def test_normalizes_input(self):
        row = build_ea_row({
            "tax_year": "2024",
            "employee_name": "  Siti Aminah ",
            "employee_ic": " 900101-01-1234 ",
            "employee_tax_no": "   ",
            "gross_salary": "48000",
            "pcb": "1200.50",
            "notes": "",
        })
        assert row["tax_year"] == 2024
        assert row["employee_name"] == "Siti Aminah"
        assert row["employee_ic"] == "900101-01-1234"
        assert row["employee_tax_no"] is None
        assert row["gross_salary"] == 48000
        assert row["pcb"] == pytest.approx(1200.50)
        assert row["epf_employer"] == 0
        assert row["notes"] is None


class TestTableRows:
    def test_rows_end_with_totals(self):
        income, deductions = ea_table_rows({"gross_salary": 5000, "epf_employee": 550, "pcb": 100})
        assert income[0] == ("Gross Salary", 5000)
        assert income[-1] == ("Total Remuneration", 5000)
        assert [label for label, _ in deductions] == [
            "EPF (Employee)", "SOCSO", "EIS", "PCB", "Net Employment Income",
        ]
        assert deductions[-1][1] == pytest.approx(4450)


class TestMultipleForms:
    @pytest.fixture
    def forms(self):
        return [
            {"employee_name": "zainal", "gross_salary": 3000, "pcb": 50},
            {"employee_name": "Ahmad", "gross_salary": 5000, "epf_employee": 550, "pcb": 200},
            {"employee_name": None, "gross_salary": 100, "epf_employee": 500},
        ]

    def test_sort_by_name(self, forms):
        names = [f["employee_name"] for f in sort_ea_forms(forms)]
        assert names == [None, "Ahmad", "zainal"]

    def test_summarize(self, forms):
        totals = summarize_ea_forms(forms)
        assert totals["employees"] == 3
        assert totals["total_remuneration"] == pytest.approx(8100)
        assert totals["net_employment_income"] == pytest.approx(3000 + 4450 + 0)
        assert totals["pcb"] == pytest.approx(250)
