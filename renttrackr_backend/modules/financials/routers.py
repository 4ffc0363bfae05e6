"""Financial report API routes."""

import io

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
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

router = APIRouter(prefix="/financials", tags=["Financials"])

YearQuery = Query(None, ge=1900, le=9999, description="Defaults to the current year")


@router.get("/metrics", response_model=BaseResponse[FinancialMetricsResponse])
async def financial_metrics(current_user: CurrentUser, db: DBSession):
    metrics = await services.get_financial_metrics(db, current_user.id)
    return BaseResponse(success=True, data=metrics)


@router.get("/report-data", response_model=BaseResponse[FinancialReportDataResponse])
async def financial_report_data(current_user: CurrentUser, db: DBSession):
    data = await services.get_financial_report_data(db, current_user.id)
    return BaseResponse(success=True, data=data)


@router.get(
    "/reports/income-statement", response_model=BaseResponse[IncomeStatementResponse]
)
async def income_statement(
    current_user: CurrentUser,
    db: DBSession,
    year: int | None = YearQuery,
    all_data: bool = Query(False, description="Merge every year's records"),
):
    statement = await services.get_income_statement(
        db, current_user.id, year, all_data=all_data
    )
    return BaseResponse(success=True, data=statement)


@router.get("/reports/cash-flow", response_model=BaseResponse[CashFlowResponse])
async def cash_flow(
    current_user: CurrentUser, db: DBSession, year: int | None = YearQuery
):
    analysis = await services.get_cash_flow(db, current_user.id, year)
    return BaseResponse(success=True, data=analysis)


@router.get("/reports/tax-summary", response_model=BaseResponse[TaxSummaryResponse])
async def tax_summary(
    current_user: CurrentUser, db: DBSession, year: int | None = YearQuery
):
    summary = await services.get_tax_summary(db, current_user.id, year)
    return BaseResponse(success=True, data=summary)


@router.get("/reports/property", response_model=BaseResponse[PropertyReportResponse])
async def property_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_property_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get("/reports/tenant", response_model=BaseResponse[TenantReportResponse])
async def tenant_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_tenant_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get("/reports/payment", response_model=BaseResponse[PaymentReportResponse])
async def payment_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_payment_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get("/reports/expense", response_model=BaseResponse[ExpenseReportResponse])
async def expense_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_expense_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get(
    "/reports/renovation", response_model=BaseResponse[RenovationReportResponse]
)
async def renovation_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_renovation_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get("/reports/parking", response_model=BaseResponse[ParkingReportResponse])
async def parking_report(current_user: CurrentUser, db: DBSession):
    report = await services.get_parking_report(db, current_user.id)
    return BaseResponse(success=True, data=report)


@router.get("/export/{report}")
async def export_report(
    report: ReportType,
    current_user: CurrentUser,
    db: DBSession,
    format: ExportFormat = Query(ExportFormat.XLSX),
    year: int | None = YearQuery,
):
    """Download a report as an Excel workbook or a CSV file."""
    exported = await services.export_report(db, current_user.id, report, format, year)
    return StreamingResponse(
        io.BytesIO(exported.content),
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"'
        },
    )
