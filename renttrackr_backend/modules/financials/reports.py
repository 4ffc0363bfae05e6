"""Report aggregation.

Every builder here is a pure function over rows already loaded by ``crud``,
so reports can be unit tested without a database. Groupings keep the order
in which their keys first appear in the input.
"""

import calendar
import uuid
from collections.abc import Iterable, Sequence
from datetime import date

from ..expenses.crud import ExpenseRow
from ..expenses.models import Expense
from ..expenses.services import to_details as expense_details
from ..leases.models import Lease
from ..parking.models import ParkingPermitStatus
from ..payments.models import Payment
from ..payments.schemas import UNKNOWN
from ..properties.models import Property
from ..renovations.crud import RenovationRow
from ..renovations.services import to_details as renovation_details
from ..tenants.models import Tenant
from .crud import PaymentReportRow, PermitReportRow
from .schemas import (
    CashFlowResponse,
    CategoryTotal,
    ExpenseReportResponse,
    FinancialMetricsResponse,
    IncomeStatementResponse,
    MonthlyCashFlow,
    MonthlyExpenses,
    MonthlyPayments,
    MonthlyRevenue,
    ParkingReportEntry,
    ParkingReportResponse,
    PaymentReportEntry,
    PaymentReportResponse,
    PermitCount,
    PropertyReportEntry,
    PropertyReportResponse,
    PropertyReportUnit,
    RenovationGroup,
    RenovationReportResponse,
    TaxCategory,
    TaxItem,
    TaxSummaryResponse,
    TenantReportEntry,
    TenantReportResponse,
)

# Checked in order; the first category with a matching keyword wins.
TAX_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Maintenance & Repairs": ("Maintenance", "Repair"),
    "Property Management": ("Association Fee", "Insurance", "Property Tax"),
    "Utilities": ("Utilities",),
    "Professional Services": ("Legal", "Accounting"),
}
OTHER_TAX_CATEGORY = "Other"


def _money(value: float) -> float:
    return round(value, 2)


def _total(amounts: Iterable[float | None]) -> float:
    return _money(sum(amount or 0 for amount in amounts))


def month_name(month: int) -> str:
    return calendar.month_name[month]


def month_label(day: date) -> str:
    """Long month and year, e.g. ``March 2024``."""
    return f"{month_name(day.month)} {day.year}"


def in_year(records: Iterable, year: int) -> list:
    return [record for record in records if record.date.year == year]


def tax_category(expense_type: str | None) -> str:
    lowered = (expense_type or "").lower()
    for category, keywords in TAX_CATEGORIES.items():
        if any(keyword.lower() in lowered for keyword in keywords):
            return category
    return OTHER_TAX_CATEGORY


def group_expenses_by_type(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    groups: dict[str, CategoryTotal] = {}
    for expense in expenses:
        group = groups.setdefault(expense.type, CategoryTotal(category=expense.type))
        group.amount += expense.amount
        group.count += 1
    for group in groups.values():
        group.amount = _money(group.amount)
    return list(groups.values())


# ----- Metrics -----


def build_financial_metrics(
    payments: Sequence[Payment],
    expenses: Sequence[Expense],
    property_count: int,
    today: date,
    property_value: float,
) -> FinancialMetricsResponse:
    """Revenue and expense figures plus a return on an assumed property value.

    ``property_value`` is the notional value of a single property; the ROI is
    the current year's net income over ``property_count * property_value``.
    """

    def this_month(record) -> bool:
        return record.date.year == today.year and record.date.month == today.month

    annual_revenue = _total(p.amount for p in in_year(payments, today.year))
    annual_expenses = _total(e.amount for e in in_year(expenses, today.year))
    net_income = _money(annual_revenue - annual_expenses)

    portfolio_value = property_count * property_value
    roi = net_income / portfolio_value * 100 if portfolio_value > 0 else 0

    return FinancialMetricsResponse(
        total_revenue=_total(p.amount for p in payments),
        total_expenses=_total(e.amount for e in expenses),
        net_income=net_income,
        roi=round(roi, 2),
        monthly_revenue=_total(p.amount for p in payments if this_month(p)),
        monthly_expenses=_total(e.amount for e in expenses if this_month(e)),
        annual_revenue=annual_revenue,
        annual_expenses=annual_expenses,
    )


# ----- Statements -----


def _monthly_revenue(payments: Sequence[Payment]) -> list[MonthlyRevenue]:
    rows = []
    for month in range(1, 13):
        in_month = [p for p in payments if p.date.month == month]
        rows.append(
            MonthlyRevenue(
                month=month_name(month),
                revenue=_total(p.amount for p in in_month),
                count=len(in_month),
            )
        )
    return rows


def _income_statement(
    payments: Sequence[Payment], expenses: Sequence[Expense], year: int
) -> IncomeStatementResponse:
    total_revenue = _total(p.amount for p in payments)
    total_expenses = _total(e.amount for e in expenses)
    return IncomeStatementResponse(
        year=year,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=_money(total_revenue - total_expenses),
        monthly_revenue=_monthly_revenue(payments),
        expenses_by_category=group_expenses_by_type(expenses),
        payment_count=len(payments),
        expense_count=len(expenses),
    )


def build_income_statement(
    payments: Sequence[Payment], expenses: Sequence[Expense], year: int
) -> IncomeStatementResponse:
    return _income_statement(in_year(payments, year), in_year(expenses, year), year)


def build_income_statement_all_data(
    payments: Sequence[Payment], expenses: Sequence[Expense], default_year: int
) -> IncomeStatementResponse:
    """Income statement over every record, with months merged across years.

    The statement is labelled with the latest year that has data, or
    ``default_year`` when there is none.
    """
    years = {record.date.year for record in (*payments, *expenses)}
    return _income_statement(
        list(payments), list(expenses), max(years, default=default_year)
    )


def build_cash_flow(
    payments: Sequence[Payment], expenses: Sequence[Expense], year: int
) -> CashFlowResponse:
    year_payments = in_year(payments, year)
    year_expenses = in_year(expenses, year)

    monthly = []
    for month in range(1, 13):
        month_payments = [p for p in year_payments if p.date.month == month]
        month_expenses = [e for e in year_expenses if e.date.month == month]
        revenue = _total(p.amount for p in month_payments)
        spent = _total(e.amount for e in month_expenses)
        monthly.append(
            MonthlyCashFlow(
                month=month_name(month),
                revenue=revenue,
                expenses=spent,
                net_cash_flow=_money(revenue - spent),
                payment_count=len(month_payments),
                expense_count=len(month_expenses),
            )
        )

    total_revenue = _total(p.amount for p in year_payments)
    total_expenses = _total(e.amount for e in year_expenses)
    net = _money(total_revenue - total_expenses)
    return CashFlowResponse(
        year=year,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        total_net_cash_flow=net,
        monthly_data=monthly,
        average_monthly_revenue=_money(total_revenue / 12),
        average_monthly_expenses=_money(total_expenses / 12),
        average_monthly_net_flow=_money(net / 12),
    )


def build_tax_summary(
    payments: Sequence[Payment], expense_rows: Sequence[ExpenseRow], year: int
) -> TaxSummaryResponse:
    year_payments = in_year(payments, year)
    year_rows = [row for row in expense_rows if row[0].date.year == year]

    categories: dict[str, TaxCategory] = {}
    for expense, address in year_rows:
        name = tax_category(expense.type)
        category = categories.setdefault(name, TaxCategory(category=name))
        category.amount += expense.amount
        category.count += 1
        category.items.append(
            TaxItem(
                date=expense.date,
                type=expense.type,
                amount=expense.amount,
                property=address or UNKNOWN,
            )
        )
    for category in categories.values():
        category.amount = _money(category.amount)

    total_revenue = _total(p.amount for p in year_payments)
    total_expenses = _total(expense.amount for expense, _ in year_rows)
    return TaxSummaryResponse(
        year=year,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        taxable_income=_money(total_revenue - total_expenses),
        categorized_expenses=list(categories.values()),
        payment_count=len(year_payments),
        expense_count=len(year_rows),
    )


# ----- Operational reports -----


def _leases_by_tenant(leases: Iterable[Lease]) -> dict[uuid.UUID, list[Lease]]:
    """Group leases per tenant, latest start first."""
    grouped: dict[uuid.UUID, list[Lease]] = {}
    for lease in sorted(leases, key=lambda lease: lease.start_date, reverse=True):
        grouped.setdefault(lease.tenant_id, []).append(lease)
    return grouped


def _current_lease(leases: list[Lease], today: date) -> Lease | None:
    """The lease in force today, else the most recently started one."""
    for lease in leases:
        if lease.start_date <= today <= lease.end_date:
            return lease
    return leases[0] if leases else None


def build_property_report(
    properties: Sequence[Property],
    tenants: Sequence[Tenant],
    leases: Sequence[Lease],
    today: date,
) -> PropertyReportResponse:
    tenant_by_unit: dict[uuid.UUID, Tenant] = {}
    for tenant in tenants:
        if tenant.unit_id is not None:
            tenant_by_unit.setdefault(tenant.unit_id, tenant)
    leases_by_tenant = _leases_by_tenant(leases)

    entries = []
    for property_obj in properties:
        units = []
        for unit in property_obj.units:
            tenant = tenant_by_unit.get(unit.id)
            lease = (
                _current_lease(leases_by_tenant.get(tenant.id, []), today)
                if tenant
                else None
            )
            units.append(
                PropertyReportUnit(
                    id=unit.id,
                    unit_number=unit.unit_number,
                    rent_amount=unit.rent_amount,
                    tenant_name=tenant.name if tenant else None,
                    tenant_email=tenant.email if tenant else None,
                    tenant_phone=tenant.phone if tenant else None,
                    lease_start_date=lease.start_date if lease else None,
                    lease_end_date=lease.end_date if lease else None,
                    monthly_rent=lease.rent if lease else None,
                    is_occupied=tenant is not None,
                )
            )
        entries.append(
            PropertyReportEntry(
                id=property_obj.id,
                address=property_obj.address,
                property_type=property_obj.property_type,
                units=units,
                total_units=len(units),
                occupied_units=sum(1 for unit in units if unit.is_occupied),
                total_monthly_rent=_total(unit.monthly_rent for unit in units),
            )
        )

    return PropertyReportResponse(
        properties=entries,
        total_properties=len(entries),
        total_units=sum(entry.total_units for entry in entries),
        total_occupied_units=sum(entry.occupied_units for entry in entries),
        total_monthly_rent=_total(entry.total_monthly_rent for entry in entries),
    )


def build_tenant_report(
    tenant_rows: Sequence[tuple[Tenant, str | None, str]],
    leases: Sequence[Lease],
    payments: Sequence[Payment],
    today: date,
) -> TenantReportResponse:
    """Per-tenant lease and payment totals.

    Payments on every lease the tenant has held count towards their totals;
    the lease columns describe the current lease.
    """
    leases_by_tenant = _leases_by_tenant(leases)
    payments_by_lease: dict[uuid.UUID, list[Payment]] = {}
    for payment in payments:
        payments_by_lease.setdefault(payment.lease_id, []).append(payment)

    entries = []
    for tenant, unit_number, address in tenant_rows:
        tenant_leases = leases_by_tenant.get(tenant.id, [])
        lease = _current_lease(tenant_leases, today)
        tenant_payments = [
            payment
            for tenant_lease in tenant_leases
            for payment in payments_by_lease.get(tenant_lease.id, [])
        ]
        last_payment = max(tenant_payments, key=lambda p: p.date, default=None)
        entries.append(
            TenantReportEntry(
                id=tenant.id,
                name=tenant.name,
                email=tenant.email,
                phone=tenant.phone,
                property_address=address or UNKNOWN,
                unit_number=unit_number or UNKNOWN,
                lease_start_date=lease.start_date if lease else None,
                lease_end_date=lease.end_date if lease else None,
                monthly_rent=lease.rent if lease else 0,
                total_paid=_total(p.amount for p in tenant_payments),
                payment_count=len(tenant_payments),
                last_payment_date=last_payment.date if last_payment else None,
                last_payment_amount=last_payment.amount if last_payment else 0,
                is_lease_active=bool(
                    lease and lease.start_date <= today <= lease.end_date
                ),
            )
        )

    return TenantReportResponse(
        tenants=entries,
        total_tenants=len(entries),
        active_leases=sum(1 for entry in entries if entry.is_lease_active),
        total_monthly_rent=_total(entry.monthly_rent for entry in entries),
        total_collected=_total(entry.total_paid for entry in entries),
    )


def build_payment_report(rows: Sequence[PaymentReportRow]) -> PaymentReportResponse:
    entries = []
    months: dict[str, MonthlyPayments] = {}
    for payment, tenant_name, tenant_email, unit_number, address, rent in rows:
        entry = PaymentReportEntry.model_validate(payment)
        entry.tenant_name = tenant_name or UNKNOWN
        entry.tenant_email = tenant_email
        entry.unit_number = unit_number or UNKNOWN
        entry.property_address = address or UNKNOWN
        entry.monthly_rent = rent or 0
        entries.append(entry)

        label = month_label(payment.date)
        bucket = months.setdefault(label, MonthlyPayments(month=label))
        bucket.amount += payment.amount
        bucket.count += 1
        bucket.late_fees += payment.late_fee or 0

    for bucket in months.values():
        bucket.amount = _money(bucket.amount)
        bucket.late_fees = _money(bucket.late_fees)

    return PaymentReportResponse(
        payments=entries,
        total_payments=len(entries),
        total_amount=_total(entry.amount for entry in entries),
        total_late_fees=_total(entry.late_fee for entry in entries),
        monthly_payments=list(months.values()),
    )


def build_expense_report(rows: Sequence[ExpenseRow]) -> ExpenseReportResponse:
    expenses = [expense for expense, _ in rows]

    months: dict[str, MonthlyExpenses] = {}
    for expense in expenses:
        label = month_label(expense.date)
        bucket = months.setdefault(label, MonthlyExpenses(month=label))
        bucket.amount += expense.amount
        bucket.count += 1
    for bucket in months.values():
        bucket.amount = _money(bucket.amount)

    details = []
    for row in rows:
        detail = expense_details(row)
        detail.property_address = detail.property_address or UNKNOWN
        details.append(detail)

    return ExpenseReportResponse(
        expenses=details,
        total_expenses=len(details),
        total_amount=_total(expense.amount for expense in expenses),
        expenses_by_category=group_expenses_by_type(expenses),
        monthly_expenses=list(months.values()),
    )


def _group_renovations(pairs: Iterable[tuple[str, float | None]]) -> list[RenovationGroup]:
    groups: dict[str, RenovationGroup] = {}
    for name, cost in pairs:
        group = groups.setdefault(name, RenovationGroup(name=name))
        group.count += 1
        group.total_cost += cost or 0
    for group in groups.values():
        group.total_cost = _money(group.total_cost)
    return list(groups.values())


def build_renovation_report(rows: Sequence[RenovationRow]) -> RenovationReportResponse:
    renovations = [renovation_details(row) for row in rows]
    return RenovationReportResponse(
        renovations=renovations,
        total_renovations=len(renovations),
        total_cost=_total(r.total_cost for r in renovations),
        renovations_by_title=_group_renovations(
            (r.title, r.total_cost) for r in renovations
        ),
        renovations_by_property=_group_renovations(
            (r.property_address, r.total_cost) for r in renovations
        ),
    )


def _count(names: Iterable[str]) -> list[PermitCount]:
    counts: dict[str, PermitCount] = {}
    for name in names:
        counts.setdefault(name, PermitCount(name=name)).count += 1
    return list(counts.values())


def build_parking_report(rows: Sequence[PermitReportRow]) -> ParkingReportResponse:
    entries = []
    for permit, address, tenant_name, unit_number in rows:
        entry = ParkingReportEntry.model_validate(permit)
        entry.property_address = address or UNKNOWN
        entry.tenant_name = tenant_name
        entry.unit_number = unit_number
        entries.append(entry)

    return ParkingReportResponse(
        permits=entries,
        total_permits=len(entries),
        active_permits=sum(
            1 for entry in entries if entry.status == ParkingPermitStatus.ACTIVE
        ),
        permits_by_status=_count(entry.status.value for entry in entries),
        permits_by_building=_count(
            (entry.building or "").strip() or UNKNOWN for entry in entries
        ),
    )
