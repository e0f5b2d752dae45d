"""CLI tests using click's CliRunner."""

import json

import pytest
from click.testing import CliRunner

from cukai.cli.__main__ import cli
from cukai.sdk import get_setting


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoices_file(tmp_path):
    path = tmp_path / "invoices.json"
    path.write_text(json.dumps({"invoices": [
        {"invoice_number": "INV-1", "client_name": "Acme", "amount": 1000, "invoice_date": "10/05/2024"},
        {"invoice_number": "INV-2", "client_name": "Beta", "amount": 2000, "invoice_date": "2024-05-31"},
        {"invoice_number": "INV-3", "client_name": "Gamma", "amount": 5000, "invoice_date": "01/06/2024"},
        {"invoice_number": "INV-4", "client_name": "Delta", "amount": 4000, "invoice_date": "2023-05-02"},
    ]}))
    return path


@pytest.fixture
def deductions_file(tmp_path):
    path = tmp_path / "deductions.yaml"
    path.write_text(
        "deductions:\n"
        "  - {category_id: computers, category_type: capital, amount: 3000, tax_year: 2024, has_receipt: true}\n"
        "  - {category_id: epf, category_type: personal, amount: 5000, tax_year: 2024}\n"
        "  - {category_id: rent, category_type: business, amount: 1000, tax_year: 2023, claimable_amount: 1000}\n"
    )
    return path


class TestDeductionsCommands:

    def test_claimable_capital(self, runner):
        result = runner.invoke(cli, ["deductions", "claimable", "computers", "3000"])
        assert result.exit_code == 0, result.output
        assert "60% = RM 1,800.00" in result.output

    def test_claimable_json_capped(self, runner):
        result = runner.invoke(cli, ["deductions", "claimable", "epf", "5000", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["verified"] is True
        assert data["claimable_amount"] == 4000
        assert data["claimable_percent"] == 80

    def test_claimable_unknown_category(self, runner):
        result = runner.invoke(cli, ["deductions", "claimable", "mystery", "250"])
        assert result.exit_code == 0, result.output
        assert "unknown category" in result.output
        assert "100% = RM 250.00" in result.output

    def test_summary_json(self, runner, deductions_file):
        result = runner.invoke(cli, ["deductions", "summary", str(deductions_file), "--year", "2024",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total"] == pytest.approx(5800)
        assert data["by_type"]["capital"] == pytest.approx(1800)
        assert data["by_type"]["personal"] == pytest.approx(4000)
        assert data["receipts"]["total_count"] == 2
        assert data["receipts"]["receipts_uploaded"] == 1
        assert [c["category_id"] for c in data["categories"]] == ["computers", "epf"]

    def test_summary_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["deductions", "summary", str(tmp_path / "nope.json")])
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_categories_list_json(self, runner):
        result = runner.invoke(cli, ["categories", "list", "--type", "capital", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 4

    def test_bad_override_is_reported(self, runner, isolated_config):
        (isolated_config / "categories.yaml").write_text("categories: [unclosed")
        result = runner.invoke(cli, ["categories", "list"])
        assert result.exit_code != 0
        assert "Invalid YAML" in result.output


class TestSSTCommands:

    def test_next_json(self, runner):
        result = runner.invoke(cli, ["sst", "next", "--today", "2024-05-16", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["label"] == "June 2024"
        assert data["due_date"] == "2024-07-15"
        assert data["days_until_due"] == 60

    def test_next_accepts_dmy(self, runner):
        result = runner.invoke(cli, ["sst", "next", "--today", "15/05/2024"])
        assert result.exit_code == 0, result.output
        assert "May 2024" in result.output
        assert "Days left:   31" in result.output

    def test_periods_json_with_invoices(self, runner, invoices_file):
        result = runner.invoke(cli, ["sst", "periods", "-n", "2", "--ref", "2024-06",
                                     "--invoices", str(invoices_file), "--today", "2024-06-01",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [p["label"] for p in data] == ["June 2024", "May 2024"]
        assert data[0]["sst_payable"] == pytest.approx(300)
        assert data[1]["sst_payable"] == pytest.approx(180)
        assert data[1]["days_until_due"] == 14

    def test_payable_json(self, runner, invoices_file):
        result = runner.invoke(cli, ["sst", "payable", str(invoices_file), "--period", "2024-05",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["invoice_count"] == 2
        assert data["sst_payable"] == pytest.approx(180)

    def test_payable_bad_period(self, runner, invoices_file):
        result = runner.invoke(cli, ["sst", "payable", str(invoices_file), "--period", "2024-13"])
        assert result.exit_code != 0
        assert "Invalid period" in result.output

    def test_export_stdout(self, runner, invoices_file):
        runner.invoke(cli, ["settings", "set", "organization", "Kedai Runcit Sdn Bhd"])
        result = runner.invoke(cli, ["sst", "export", str(invoices_file), "--period", "2024-05", "--stdout"])
        assert result.exit_code == 0, result.output
        assert "Organization: Kedai Runcit Sdn Bhd" in result.output
        assert "Total SST Payable: RM 180.00" in result.output
        assert "Acme | 10/05/2024 | RM 1000.00" in result.output
        assert "Beta | 31/05/2024 | RM 2000.00" in result.output
        assert "Due Date: 15/06/2024" in result.output

    def test_export_file(self, runner, invoices_file, tmp_path):
        out = tmp_path / "report.txt"
        result = runner.invoke(cli, ["sst", "export", str(invoices_file), "--period", "2024-05",
                                     "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Total Invoices: 2" in out.read_text()


class TestEACommands:
    def test_summary_json(self, runner, tmp_path):
        path = tmp_path / "ea.json"
        path.write_text(json.dumps([
            {"employee_name": "Siti", "tax_year": 2024, "gross_salary": 5000,
             "epf_employee": 550, "socso": 20, "eis": 5, "pcb": 100},
            {"employee_name": "Ali", "tax_year": 2023, "gross_salary": 4000},
        ]))
        result = runner.invoke(cli, ["ea", "summary", str(path), "--year", "2024", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["forms"]) == 1
        assert data["forms"][0]["net_employment_income"] == pytest.approx(4425)
        assert data["totals"]["pcb"] == pytest.approx(100)


class TestDashboardCommands:
    def test_yoy_json(self, runner, invoices_file, deductions_file):
        result = runner.invoke(cli, ["dashboard", "yoy", "--invoices", str(invoices_file),
                                     "--deductions", str(deductions_file), "--year", "2024",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["current"]["revenue"] == pytest.approx(8000)
        assert data["previous"]["revenue"] == pytest.approx(4000)
        assert data["yoy"]["revenue"] == pytest.approx(100)
        assert data["yoy"]["total_deductions"] == pytest.approx(480)


class TestSettingsCommands:

    def test_set_and_show(self, runner):
        result = runner.invoke(cli, ["settings", "set", "organization", "Acme Sdn Bhd"])
        assert result.exit_code == 0, result.output
        assert get_setting("organization") == "Acme Sdn Bhd"

        result = runner.invoke(cli, ["settings", "show"])
        assert "organization: Acme Sdn Bhd" in result.output
        assert "categories: (built-in)" in result.output

    def test_set_invalid_categories_file(self, runner, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("categories:\n  - {id: x, name: X, type: capital}\n")
        result = runner.invoke(cli, ["settings", "set", "categories_file", str(bad)])
        assert result.exit_code != 0
        assert get_setting("categories_file") is None

    def test_unset(self, runner):
        runner.invoke(cli, ["settings", "set", "organization", "Acme"])
        result = runner.invoke(cli, ["settings", "unset", "organization"])
        assert result.exit_code == 0
        assert get_setting("organization") is None

    def test_unknown_key_rejected(self, runner):
        result = runner.invoke(cli, ["settings", "set", "sst_rate", "0.1"])
        assert result.exit_code != 0


class TestRecordPathResolution:
    """Relative record paths fall back to the data dir."""

    @pytest.fixture
    def workdir(self, tmp_path, monkeypatch):
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        return work

    def _write_invoices(self, directory):
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "invoices.json"
        path.write_text(json.dumps([{"amount": 1000, "invoice_date": "10/05/2024"}]))
        return path

    def test_default_data_dir(self, runner, workdir, tmp_path):
        self._write_invoices(tmp_path / "data" / "cukai")
        result = runner.invoke(cli, ["sst", "payable", "invoices.json", "--period", "2024-05",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["sst_payable"] == pytest.approx(60)

    def test_configured_data_dir(self, runner, workdir, tmp_path):
        records_dir = tmp_path / "records"
        self._write_invoices(records_dir)
        runner.invoke(cli, ["settings", "set", "data_dir", str(records_dir)])
        result = runner.invoke(cli, ["sst", "payable", "invoices.json", "--period", "2024-05",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["invoice_count"] == 1

    def test_current_directory_wins(self, runner, workdir, tmp_path):
        self._write_invoices(tmp_path / "data" / "cukai")
        (workdir / "invoices.json").write_text(json.dumps([]))
        result = runner.invoke(cli, ["sst", "payable", "invoices.json", "--period", "2024-05",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["invoice_count"] == 0

    def test_missing_everywhere(self, runner, workdir):
        result = runner.invoke(cli, ["sst", "payable", "nope.json", "--period", "2024-05"])
        assert result.exit_code != 0
        assert "not found" in result.output
