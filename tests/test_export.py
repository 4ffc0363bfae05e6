import io
from datetime import date
from types import SimpleNamespace

from openpyxl import load_workbook

from renttrackr_backend.modules.financials import export, reports
from renttrackr_backend.modules.financials.schemas import ExportFormat


def _statement():
    payments = [SimpleNamespace(amount=1200, date=date(2024, 3, 1))]
    expenses = [SimpleNamespace(amount=300, date=date(2024, 3, 5), type="Repair")]
    return reports.build_income_statement(payments, expenses, 2024)


def test_format_date_is_us_short_form():
    assert export.format_date(date(2024, 3, 7)) == "3/7/2024"
    assert export.format_date(None) == ""


def test_csv_quotes_every_cell_without_trailing_newline():
    content = export.to_csv([["Month", 1], ["", "$2.00"]])
    assert content == b'"Month","1"\n"","$2.00"'


def test_income_statement_csv_stacks_sections():
    exported = export.render(
        export.income_statement_layout(_statement()), ExportFormat.CSV
    )

    lines = exported.content.decode("utf-8").split("\n")
    assert exported.filename == "income-statement-2024.csv"
    assert exported.media_type.startswith("text/csv")
    assert lines[0] == '"Income Statement","Year: 2024"'
    assert '"Total Revenue","$1200.00"' in lines
    assert '"Monthly Revenue"' in lines
    assert '"Repair","$300.00","1"' in lines


def test_income_statement_workbook_has_one_sheet_per_section():
    exported = export.render(
        export.income_statement_layout(_statement()), ExportFormat.XLSX
    )

    workbook = load_workbook(io.BytesIO(exported.content))
    assert exported.filename == "income-statement-2024.xlsx"
    assert workbook.sheetnames == ["Summary", "Monthly Revenue", "Expenses by Category"]
    summary = workbook["Summary"]
    assert summary["A1"].value == "Income Statement"
    assert summary["A2"].value is None
    assert summary["B3"].value == "$1200.00"


def test_operational_report_csv_holds_only_details():
    report = reports.build_renovation_report([])
    layout = export.renovation_report_layout(report, date(2024, 5, 2))

    exported = export.render(layout, ExportFormat.CSV)

    assert exported.filename == "renovation-report-2024-05-02.csv"
    assert "Generated on" not in exported.content.decode("utf-8")
    summary_rows = layout.sections[0].rows
    assert summary_rows[-1] == ["Generated on", "5/2/2024"]
