"""Financial metric and report schemas."""

import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from ..expenses.schemas import ExpenseWithPropertyResponse
from ..parking.schemas import ParkingPermitWithDetailsResponse
from ..payments.schemas import PaymentWithDetailsResponse
from ..renovations.schemas import RenovationWithDetailsResponse


class ReportType(str, Enum):
    INCOME_STATEMENT = "income-statement"
    CASH_FLOW = "cash-flow"
    TAX_SUMMARY = "tax-summary"
    PROPERTY = "property"
    TENANT = "tenant"
    PAYMENT = "payment"
    EXPENSE = "expense"
    RENOVATION = "renovation"
    PARKING = "parking"


class ExportFormat(str, Enum):
    XLSX = "xlsx"
    CSV = "csv"


class FinancialMetricsResponse(BaseModel):
    """All-time totals, current year and current month figures.

    ``net_income`` and ``roi`` are computed on the current year.
    """

    total_revenue: float = 0
    total_expenses: float = 0
    net_income: float = 0
    roi: float = 0
    monthly_revenue: float = 0
    monthly_expenses: float = 0
    annual_revenue: float = 0
    annual_expenses: float = 0


class FinancialReportDataResponse(BaseModel):
    payments: list[PaymentWithDetailsResponse] = []
    expenses: list[ExpenseWithPropertyResponse] = []


# ----- Statements -----


class CategoryTotal(BaseModel):
    category: str
    amount: float = 0
    count: int = 0


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float = 0
    count: int = 0


class IncomeStatementResponse(BaseModel):
    year: int
    total_revenue: float = 0
    total_expenses: float = 0
    net_income: float = 0
    monthly_revenue: list[MonthlyRevenue] = []
    expenses_by_category: list[CategoryTotal] = []
    payment_count: int = 0
    expense_count: int = 0


class MonthlyCashFlow(BaseModel):
    month: str
    revenue: float = 0
    expenses: float = 0
    net_cash_flow: float = 0
    payment_count: int = 0
    expense_count: int = 0


class CashFlowResponse(BaseModel):
    year: int
    total_revenue: float = 0
    total_expenses: float = 0
    total_net_cash_flow: float = 0
    monthly_data: list[MonthlyCashFlow] = []
    average_monthly_revenue: float = 0
    average_monthly_expenses: float = 0
    average_monthly_net_flow: float = 0


class TaxItem(BaseModel):
    date: datetime.date
    type: str
    amount: float
    property: str


class TaxCategory(CategoryTotal):
    items: list[TaxItem] = []


class TaxSummaryResponse(BaseModel):
    year: int
    total_revenue: float = 0
    total_expenses: float = 0
    taxable_income: float = 0
    categorized_expenses: list[TaxCategory] = []
    payment_count: int = 0
    expense_count: int = 0


# ----- Operational reports -----


class PropertyReportUnit(BaseModel):
    id: UUID
    unit_number: str
    rent_amount: float
    tenant_name: str | None = None
    tenant_email: str | None = None
    tenant_phone: str | None = None
    lease_start_date: datetime.date | None = None
    lease_end_date: datetime.date | None = None
    monthly_rent: float | None = None
    is_occupied: bool = False


class PropertyReportEntry(BaseModel):
    id: UUID
    address: str
    property_type: str | None = None
    units: list[PropertyReportUnit] = []
    total_units: int = 0
    occupied_units: int = 0
    total_monthly_rent: float = 0


class PropertyReportResponse(BaseModel):
    properties: list[PropertyReportEntry] = []
    total_properties: int = 0
    total_units: int = 0
    total_occupied_units: int = 0
    total_monthly_rent: float = 0


class TenantReportEntry(BaseModel):
    id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    property_address: str = "Unknown"
    unit_number: str = "Unknown"
    lease_start_date: datetime.date | None = None
    lease_end_date: datetime.date | None = None
    monthly_rent: float = 0
    total_paid: float = 0
    payment_count: int = 0
    last_payment_date: datetime.date | None = None
    last_payment_amount: float = 0
    is_lease_active: bool = False


class TenantReportResponse(BaseModel):
    tenants: list[TenantReportEntry] = []
    total_tenants: int = 0
    active_leases: int = 0
    total_monthly_rent: float = 0
    total_collected: float = 0


class PaymentReportEntry(PaymentWithDetailsResponse):
    tenant_email: str | None = None
    monthly_rent: float = 0


class MonthlyPayments(BaseModel):
    month: str
    amount: float = 0
    count: int = 0
    late_fees: float = 0


class PaymentReportResponse(BaseModel):
    payments: list[PaymentReportEntry] = []
    total_payments: int = 0
    total_amount: float = 0
    total_late_fees: float = 0
    monthly_payments: list[MonthlyPayments] = []


class MonthlyExpenses(BaseModel):
    month: str
    amount: float = 0
    count: int = 0


class ExpenseReportResponse(BaseModel):
    expenses: list[ExpenseWithPropertyResponse] = []
    total_expenses: int = 0
    total_amount: float = 0
    expenses_by_category: list[CategoryTotal] = []
    monthly_expenses: list[MonthlyExpenses] = []


class RenovationGroup(BaseModel):
    """Renovations sharing a title or a property."""

    name: str
    count: int = 0
    total_cost: float = 0


class RenovationReportResponse(BaseModel):
    renovations: list[RenovationWithDetailsResponse] = []
    total_renovations: int = 0
    total_cost: float = 0
    renovations_by_title: list[RenovationGroup] = []
    renovations_by_property: list[RenovationGroup] = []


class ParkingReportEntry(ParkingPermitWithDetailsResponse):
    unit_number: str | None = None


class PermitCount(BaseModel):
    name: str
    count: int = 0


class ParkingReportResponse(BaseModel):
    permits: list[ParkingReportEntry] = []
    total_permits: int = 0
    active_permits: int = 0
    permits_by_status: list[PermitCount] = []
    permits_by_building: list[PermitCount] = []
