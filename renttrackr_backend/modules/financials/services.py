"""Financial metrics, reports and exports."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..expenses import crud as expense_crud
from ..expenses.services import to_details as expense_details
from ..leases import crud as lease_crud
from ..payments import crud as payment_crud
from ..payments.services import to_details as payment_details
from ..properties import crud as property_crud
from ..tenants import crud as tenant_crud
from . import crud, export, reports
from .schemas import (
    CashFlowResponse,
    ExportFormat,
    ExpenseReportResponse,
    FinancialMetricsResponse,
    FinancialReportDataResponse,
    IncomeStatementResponse,
    ParkingReportResponse,
    PaymentReportResponse,
    PropertyReportResponse,
    RenovationReportResponse,
    ReportType,
    TaxSummaryResponse,
    TenantReportResponse,
)

logger = get_logger(__name__)


async def get_financial_metrics(
    db: AsyncSession, user_id: str, today: date | None = None
) -> FinancialMetricsResponse:
    payments = await payment_crud.get_payments(db, user_id)
    expenses = await expense_crud.get_expenses(db, user_id)
    property_count = await property_crud.count_properties(db, user_id)
    return reports.build_financial_metrics(
        payments,
        expenses,
        property_count,
        today or utc_today(),
        settings.roi_property_value,
    )


async def get_financial_report_data(
    db: AsyncSession, user_id: str
) -> FinancialReportDataResponse:
    """Payments and expenses with details, newest first."""
    payment_rows = await payment_crud.get_payments_with_details(db, user_id)
    expense_rows = await expense_crud.get_expenses_with_property(db, user_id)
    return FinancialReportDataResponse(
        payments=[payment_details(row) for row in payment_rows],
        expenses=[expense_details(row) for row in expense_rows],
    )


async def get_income_statement(
    db: AsyncSession,
    user_id: str,
    year: int | None = None,
    all_data: bool = False,
) -> IncomeStatementResponse:
    year = year or utc_today().year
    payments = await payment_crud.get_payments(db, user_id)
    expenses = await expense_crud.get_expenses(db, user_id)
    if all_data:
        return reports.build_income_statement_all_data(payments, expenses, year)
    return reports.build_income_statement(payments, expenses, year)


async def get_cash_flow(
    db: AsyncSession, user_id: str, year: int | None = None
) -> CashFlowResponse:
    payments = await payment_crud.get_payments(db, user_id)
    expenses = await expense_crud.get_expenses(db, user_id)
    return reports.build_cash_flow(payments, expenses, year or utc_today().year)


async def get_tax_summary(
    db: AsyncSession, user_id: str, year: int | None = None
) -> TaxSummaryResponse:
    payments = await payment_crud.get_payments(db, user_id)
    expense_rows = await expense_crud.get_expenses_with_property(db, user_id)
    return reports.build_tax_summary(payments, expense_rows, year or utc_today().year)


async def get_property_report(
    db: AsyncSession, user_id: str, today: date | None = None
) -> PropertyReportResponse:
    properties = await crud.get_properties_with_units(db, user_id)
    tenants = await crud.get_tenants(db, user_id)
    leases = await lease_crud.get_leases(db, user_id)
    return reports.build_property_report(
        properties, tenants, leases, today or utc_today()
    )


async def get_tenant_report(
    db: AsyncSession, user_id: str, today: date | None = None
) -> TenantReportResponse:
    tenant_rows = await tenant_crud.get_tenants_with_details(db, user_id)
    leases = await lease_crud.get_leases(db, user_id)
    payments = await payment_crud.get_payments(db, user_id)
    return reports.build_tenant_report(
        tenant_rows, leases, payments, today or utc_today()
    )


async def get_payment_report(db: AsyncSession, user_id: str) -> PaymentReportResponse:
    rows = await crud.get_payment_report_rows(db, user_id)
    return reports.build_payment_report(rows)


async def get_expense_report(db: AsyncSession, user_id: str) -> ExpenseReportResponse:
    rows = await expense_crud.get_expenses_with_property(db, user_id)
    return reports.build_expense_report(rows)


async def get_renovation_report(
    db: AsyncSession, user_id: str
) -> RenovationReportResponse:
    rows = await crud.get_renovation_report_rows(db, user_id)
    return reports.build_renovation_report(rows)


async def get_parking_report(db: AsyncSession, user_id: str) -> ParkingReportResponse:
    rows = await crud.get_permit_report_rows(db, user_id)
    return reports.build_parking_report(rows)


async def _income_statement_for_export(
    db: AsyncSession, user_id: str, year: int
) -> IncomeStatementResponse:
    """The year's statement, or the all-data one when the year is empty."""
    statement = await get_income_statement(db, user_id, year)
    if statement.payment_count == 0 and statement.expense_count == 0:
        statement = await get_income_statement(db, user_id, year, all_data=True)
    return statement


async def export_report(
    db: AsyncSession,
    user_id: str,
    report: ReportType,
    export_format: ExportFormat,
    year: int | None = None,
    today: date | None = None,
) -> export.ExportFile:
    """Render a report as an XLSX workbook or a CSV file.

    Statements cover ``year`` (default: the current year); operational
    reports cover all data and are stamped with today's date.
    """
    today = today or utc_today()
    year = year or today.year

    if report == ReportType.INCOME_STATEMENT:
        layout = export.income_statement_layout(
            await _income_statement_for_export(db, user_id, year)
        )
    elif report == ReportType.CASH_FLOW:
        layout = export.cash_flow_layout(await get_cash_flow(db, user_id, year))
    elif report == ReportType.TAX_SUMMARY:
        layout = export.tax_summary_layout(await get_tax_summary(db, user_id, year))
    elif report == ReportType.PROPERTY:
        layout = export.property_report_layout(
            await get_property_report(db, user_id, today), today
        )
    elif report == ReportType.TENANT:
        layout = export.tenant_report_layout(
            await get_tenant_report(db, user_id, today), today
        )
    elif report == ReportType.PAYMENT:
        layout = export.payment_report_layout(
            await get_payment_report(db, user_id), today
        )
    elif report == ReportType.EXPENSE:
        layout = export.expense_report_layout(
            await get_expense_report(db, user_id), today
        )
    elif report == ReportType.RENOVATION:
        layout = export.renovation_report_layout(
            await get_renovation_report(db, user_id), today
        )
    else:
        layout = export.parking_report_layout(
            await get_parking_report(db, user_id), today
        )

    exported = export.render(layout, export_format)
    logger.info(
        "Report exported",
        extra={
            "user_id": user_id,
            "report": report.value,
            "format": export_format.value,
            "size_bytes": len(exported.content),
        },
    )
    return exported
