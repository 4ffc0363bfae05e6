"""Spreadsheet and CSV rendering of financial reports.

A report is laid out as a list of ``Section`` objects. The workbook gets one
sheet per section; the CSV file gets either all sections stacked under
their titles (statements) or only the detail table (operational reports).
"""

import csv
import io
from collections.abc import Sequence
from datetime import date
from typing import Any, NamedTuple

from openpyxl import Workbook

from ...core.utils import format_money
from .schemas import (
    CashFlowResponse,
    ExpenseReportResponse,
    ExportFormat,
    IncomeStatementResponse,
    ParkingReportResponse,
    PaymentReportResponse,
    PropertyReportResponse,
    RenovationReportResponse,
    TaxSummaryResponse,
    TenantReportResponse,
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

NO_DATA_ROW = ["No data available", "$0.00", 0]
BLANK_ROW = [""]

Row = list[Any]


class Section(NamedTuple):
    title: str
    rows: list[Row]


class ExportFile(NamedTuple):
    filename: str
    media_type: str
    content: bytes


class ReportLayout(NamedTuple):
    """Everything needed to render one report in either format."""

    name: str
    sections: list[Section]
    csv_rows: list[Row]


def format_date(value: date | None) -> str:
    """US short date, e.g. ``3/7/2024``."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def stacked_rows(sections: Sequence[Section]) -> list[Row]:
    """First section as is, then each further section under its title."""
    rows = list(sections[0].rows)
    for section in sections[1:]:
        rows.extend([BLANK_ROW, [section.title], *section.rows])
    return rows


def to_xlsx(sections: Sequence[Section]) -> bytes:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for section in sections:
        sheet = workbook.create_sheet(title=section.title)
        for row in section.rows:
            sheet.append([None if cell == "" else cell for cell in row])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def to_csv(rows: Sequence[Row]) -> bytes:
    """Every cell quoted, rows separated by ``\\n``, no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().removesuffix("\n").encode("utf-8")


def render(layout: ReportLayout, export_format: ExportFormat) -> ExportFile:
    if export_format == ExportFormat.CSV:
        return ExportFile(
            f"{layout.name}.csv", CSV_MEDIA_TYPE, to_csv(layout.csv_rows)
        )
    return ExportFile(
        f"{layout.name}.xlsx", XLSX_MEDIA_TYPE, to_xlsx(layout.sections)
    )


# ----- Statements -----


def income_statement_layout(report: IncomeStatementResponse) -> ReportLayout:
    summary = Section(
        "Summary",
        [
            ["Income Statement", f"Year: {report.year}"],
            BLANK_ROW,
            ["Total Revenue", format_money(report.total_revenue)],
            ["Total Expenses", format_money(report.total_expenses)],
            ["Net Income", format_money(report.net_income)],
            BLANK_ROW,
            ["Payment Count", report.payment_count],
            ["Expense Count", report.expense_count],
        ],
    )
    monthly = Section(
        "Monthly Revenue",
        [
            ["Month", "Revenue", "Payment Count"],
            *(
                [[m.month, format_money(m.revenue), m.count] for m in report.monthly_revenue]
                or [NO_DATA_ROW]
            ),
        ],
    )
    categories = Section(
        "Expenses by Category",
        [
            ["Category", "Amount", "Count"],
            *(
                [
                    [c.category, format_money(c.amount), c.count]
                    for c in report.expenses_by_category
                ]
                or [NO_DATA_ROW]
            ),
        ],
    )
    sections = [summary, monthly, categories]
    return ReportLayout(
        f"income-statement-{report.year}", sections, stacked_rows(sections)
    )


def cash_flow_layout(report: CashFlowResponse) -> ReportLayout:
    summary = Section(
        "Summary",
        [
            ["Cash Flow Analysis", f"Year: {report.year}"],
            BLANK_ROW,
            ["Total Revenue", format_money(report.total_revenue)],
            ["Total Expenses", format_money(report.total_expenses)],
            ["Total Net Cash Flow", format_money(report.total_net_cash_flow)],
            BLANK_ROW,
            ["Average Monthly Revenue", format_money(report.average_monthly_revenue)],
            ["Average Monthly Expenses", format_money(report.average_monthly_expenses)],
            ["Average Monthly Net Flow", format_money(report.average_monthly_net_flow)],
        ],
    )
    monthly = Section(
        "Monthly Cash Flow",
        [
            [
                "Month",
                "Revenue",
                "Expenses",
                "Net Cash Flow",
                "Payment Count",
                "Expense Count",
            ],
            *(
                [
                    m.month,
                    format_money(m.revenue),
                    format_money(m.expenses),
                    format_money(m.net_cash_flow),
                    m.payment_count,
                    m.expense_count,
                ]
                for m in report.monthly_data
            ),
        ],
    )
    sections = [summary, monthly]
    return ReportLayout(
        f"cash-flow-analysis-{report.year}", sections, stacked_rows(sections)
    )


def tax_summary_layout(report: TaxSummaryResponse) -> ReportLayout:
    summary = Section(
        "Summary",
        [
            ["Tax Summary", f"Year: {report.year}"],
            BLANK_ROW,
            ["Total Revenue", format_money(report.total_revenue)],
            ["Total Expenses", format_money(report.total_expenses)],
            ["Taxable Income", format_money(report.taxable_income)],
            BLANK_ROW,
            ["Payment Count", report.payment_count],
            ["Expense Count", report.expense_count],
        ],
    )
    categories = Section(
        "Expenses by Category",
        [
            ["Category", "Amount", "Count"],
            *(
                [c.category, format_money(c.amount), c.count]
                for c in report.categorized_expenses
            ),
        ],
    )
    details = Section(
        "Detailed Expenses",
        [
            ["Date", "Category", "Type", "Amount", "Property"],
            *(
                [
                    format_date(item.date),
                    category.category,
                    item.type,
                    format_money(item.amount),
                    item.property,
                ]
                for category in report.categorized_expenses
                for item in category.items
            ),
        ],
    )
    sections = [summary, categories, details]
    return ReportLayout(f"tax-summary-{report.year}", sections, stacked_rows(sections))


# ----- Operational reports -----


def _summary(title: str, rows: list[Row], today: date) -> Section:
    return Section(
        "Summary",
        [[title], BLANK_ROW, *rows, BLANK_ROW, ["Generated on", format_date(today)]],
    )


def property_report_layout(report: PropertyReportResponse, today: date) -> ReportLayout:
    summary = _summary(
        "Property Report Summary",
        [
            ["Total Properties", report.total_properties],
            ["Total Units", report.total_units],
            ["Occupied Units", report.total_occupied_units],
            ["Total Monthly Rent", format_money(report.total_monthly_rent)],
        ],
        today,
    )
    properties = Section(
        "Properties",
        [
            ["Property Address", "Total Units", "Occupied Units", "Total Monthly Rent"],
            *(
                [
                    p.address,
                    str(p.total_units),
                    str(p.occupied_units),
                    format_money(p.total_monthly_rent),
                ]
                for p in report.properties
            ),
        ],
    )
    units = Section(
        "Units",
        [
            ["Property Address", "Unit Number", "Tenant Name", "Monthly Rent", "Occupied"],
            *(
                [
                    p.address,
                    unit.unit_number,
                    unit.tenant_name or "Vacant",
                    format_money(unit.monthly_rent),
                    yes_no(unit.is_occupied),
                ]
                for p in report.properties
                for unit in p.units
            ),
        ],
    )
    return ReportLayout(
        f"property-report-{today.isoformat()}", [summary, properties, units], units.rows
    )


def tenant_report_layout(report: TenantReportResponse, today: date) -> ReportLayout:
    summary = _summary(
        "Tenant Report Summary",
        [
            ["Total Tenants", report.total_tenants],
            ["Active Leases", report.active_leases],
            ["Total Monthly Rent", format_money(report.total_monthly_rent)],
            ["Total Collected", format_money(report.total_collected)],
        ],
        today,
    )
    tenants = Section(
        "Tenants",
        [
            [
                "Tenant Name",
                "Email",
                "Phone",
                "Property Address",
                "Unit Number",
                "Monthly Rent",
                "Total Paid",
                "Payment Count",
                "Last Payment Date",
                "Lease Active",
            ],
            *(
                [
                    t.name,
                    t.email or "",
                    t.phone or "",
                    t.property_address,
                    t.unit_number,
                    format_money(t.monthly_rent),
                    format_money(t.total_paid),
                    str(t.payment_count),
                    format_date(t.last_payment_date),
                    yes_no(t.is_lease_active),
                ]
                for t in report.tenants
            ),
        ],
    )
    return ReportLayout(
        f"tenant-report-{today.isoformat()}", [summary, tenants], tenants.rows
    )


def payment_report_layout(report: PaymentReportResponse, today: date) -> ReportLayout:
    summary = _summary(
        "Payment Report Summary",
        [
            ["Total Payments", report.total_payments],
            ["Total Amount", format_money(report.total_amount)],
            ["Total Late Fees", format_money(report.total_late_fees)],
        ],
        today,
    )
    monthly = Section(
        "Monthly Summary",
        [
            ["Month", "Amount", "Count", "Late Fees"],
            *(
                [m.month, format_money(m.amount), str(m.count), format_money(m.late_fees)]
                for m in report.monthly_payments
            ),
        ],
    )
    details = Section(
        "Payment Details",
        [
            [
                "Tenant Name",
                "Property Address",
                "Unit Number",
                "Amount",
                "Late Fee",
                "Payment Date",
            ],
            *(
                [
                    p.tenant_name,
                    p.property_address,
                    p.unit_number,
                    format_money(p.amount),
                    format_money(p.late_fee) if p.late_fee else "",
                    format_date(p.date),
                ]
                for p in report.payments
            ),
        ],
    )
    return ReportLayout(
        f"payment-report-{today.isoformat()}", [summary, monthly, details], details.rows
    )


def expense_report_layout(report: ExpenseReportResponse, today: date) -> ReportLayout:
    summary = _summary(
        "Expense Report Summary",
        [
            ["Total Expenses", report.total_expenses],
            ["Total Amount", format_money(report.total_amount)],
        ],
        today,
    )
    categories = Section(
        "By Category",
        [
            ["Category", "Amount", "Count"],
            *(
                [c.category, format_money(c.amount), str(c.count)]
                for c in report.expenses_by_category
            ),
        ],
    )
    monthly = Section(
        "Monthly Summary",
        [
            ["Month", "Amount", "Count"],
            *(
                [m.month, format_money(m.amount), str(m.count)]
                for m in report.monthly_expenses
            ),
        ],
    )
    details = Section(
        "Expense Details",
        [
            ["Property Address", "Expense Type", "Amount", "Date"],
            *(
                [e.property_address, e.type, format_money(e.amount), format_date(e.date)]
                for e in report.expenses
            ),
        ],
    )
    return ReportLayout(
        f"expense-report-{today.isoformat()}",
        [summary, categories, monthly, details],
        details.rows,
    )


def renovation_report_layout(
    report: RenovationReportResponse, today: date
) -> ReportLayout:
    summary = _summary(
        "Renovation Report Summary",
        [
            ["Total Renovations", report.total_renovations],
            ["Total Cost", format_money(report.total_cost)],
        ],
        today,
    )
    by_title = Section(
        "By Title",
        [
            ["Title", "Count", "Total Cost"],
            *(
                [g.name, str(g.count), format_money(g.total_cost)]
                for g in report.renovations_by_title
            ),
        ],
    )
    by_property = Section(
        "By Property",
        [
            ["Property", "Count", "Total Cost"],
            *(
                [g.name, str(g.count), format_money(g.total_cost)]
                for g in report.renovations_by_property
            ),
        ],
    )
    details = Section(
        "Renovation Details",
        [
            [
                "Property Address",
                "Unit Number",
                "Title",
                "Total Cost",
                "Start Date",
                "End Date",
            ],
            *(
                [
                    r.property_address,
                    r.unit_number or "",
                    r.title,
                    format_money(r.total_cost),
                    format_date(r.start_date),
                    format_date(r.end_date),
                ]
                for r in report.renovations
            ),
        ],
    )
    return ReportLayout(
        f"renovation-report-{today.isoformat()}",
        [summary, by_title, by_property, details],
        details.rows,
    )


def parking_report_layout(report: ParkingReportResponse, today: date) -> ReportLayout:
    summary = _summary(
        "Parking Report Summary",
        [
            ["Total Permits", report.total_permits],
            ["Active Permits", report.active_permits],
        ],
        today,
    )
    by_status = Section(
        "By Status",
        [["Status", "Count"], *([s.name, str(s.count)] for s in report.permits_by_status)],
    )
    by_building = Section(
        "By Building",
        [
            ["Building", "Count"],
            *([b.name, str(b.count)] for b in report.permits_by_building),
        ],
    )
    details = Section(
        "Permit Details",
        [
            [
                "Property Address",
                "Tenant Name",
                "Unit Number",
                "Building",
                "Status",
                "License Plate",
                "Vehicle Make",
                "Vehicle Model",
                "Vehicle Year",
                "Vehicle Color",
                "Issued At",
            ],
            *(
                [
                    p.property_address,
                    p.tenant_name or "",
                    p.unit_number or "",
                    p.building or "",
                    p.status.value,
                    p.license_plate or "",
                    p.vehicle_make or "",
                    p.vehicle_model or "",
                    p.vehicle_year or "",
                    p.vehicle_color or "",
                    format_date(p.issued_at.date()),
                ]
                for p in report.permits
            ),
        ],
    )
    return ReportLayout(
        f"parking-report-{today.isoformat()}",
        [summary, by_status, by_building, details],
        details.rows,
    )
