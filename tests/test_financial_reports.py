import uuid
from datetime import date, datetime
from types import SimpleNamespace

from renttrackr_backend.modules.financials import reports
from renttrackr_backend.modules.parking.models import ParkingPermitStatus


def _record(amount: float, day: date, **fields):
    return SimpleNamespace(amount=amount, date=day, **fields)


PAYMENTS = [
    _record(1000, date(2024, 6, 1)),
    _record(1000, date(2024, 5, 1)),
    _record(950, date(2023, 12, 1)),
]
EXPENSES = [
    _record(500, date(2024, 6, 10), type="Roof Repair"),
    _record(120, date(2024, 2, 3), type="Utilities"),
    _record(80, date(2024, 3, 3), type="Utilities"),
    _record(300, date(2023, 11, 1), type="Property Tax"),
]


def test_financial_metrics_roi_on_assumed_value():
    metrics = reports.build_financial_metrics(
        PAYMENTS, EXPENSES, property_count=1, today=date(2024, 6, 15),
        property_value=300000,
    )

    assert metrics.total_revenue == 2950
    assert metrics.total_expenses == 1000
    assert metrics.annual_revenue == 2000
    assert metrics.annual_expenses == 700
    assert metrics.net_income == 1300
    assert metrics.monthly_revenue == 1000
    assert metrics.monthly_expenses == 500
    assert metrics.roi == round(1300 / 300000 * 100, 2)


def test_financial_metrics_without_properties_has_zero_roi():
    metrics = reports.build_financial_metrics([], [], 0, date(2024, 1, 1), 300000)
    assert metrics.roi == 0


def test_income_statement_for_one_year():
    statement = reports.build_income_statement(PAYMENTS, EXPENSES, 2024)

    assert statement.year == 2024
    assert statement.total_revenue == 2000
    assert statement.total_expenses == 700
    assert statement.net_income == 1300
    assert len(statement.monthly_revenue) == 12
    assert statement.monthly_revenue[5].month == "June"
    assert statement.monthly_revenue[5].count == 1
    assert [(c.category, c.amount, c.count) for c in statement.expenses_by_category] == [
        ("Roof Repair", 500, 1),
        ("Utilities", 200, 2),
    ]


def test_income_statement_all_data_uses_latest_year():
    statement = reports.build_income_statement_all_data(PAYMENTS, EXPENSES, 2030)

    assert statement.year == 2024
    assert statement.payment_count == 3
    assert statement.monthly_revenue[11].revenue == 950

    empty = reports.build_income_statement_all_data([], [], 2030)
    assert empty.year == 2030


def test_cash_flow_monthly_and_averages():
    flow = reports.build_cash_flow(PAYMENTS, EXPENSES, 2024)

    june = flow.monthly_data[5]
    assert (june.revenue, june.expenses, june.net_cash_flow) == (1000, 500, 500)
    assert flow.total_net_cash_flow == 1300
    assert flow.average_monthly_revenue == round(2000 / 12, 2)
    assert flow.average_monthly_net_flow == round(1300 / 12, 2)


def test_tax_categories_first_match_wins():
    assert reports.tax_category("Roof Repair") == "Maintenance & Repairs"
    assert reports.tax_category("property tax 2024") == "Property Management"
    assert reports.tax_category("Water utilities") == "Utilities"
    assert reports.tax_category("Accounting fees") == "Professional Services"
    assert reports.tax_category("Advertising") == "Other"
    assert reports.tax_category(None) == "Other"


def test_tax_summary_groups_items_by_category():
    rows = [(expense, "12 Oak St") for expense in EXPENSES]

    summary = reports.build_tax_summary(PAYMENTS, rows, 2024)

    assert summary.taxable_income == 1300
    assert summary.expense_count == 3
    utilities = next(c for c in summary.categorized_expenses if c.category == "Utilities")
    assert utilities.amount == 200
    assert [item.property for item in utilities.items] == ["12 Oak St", "12 Oak St"]


def test_property_report_uses_current_lease():
    unit_a = SimpleNamespace(id=uuid.uuid4(), unit_number="1A", rent_amount=1000)
    unit_b = SimpleNamespace(id=uuid.uuid4(), unit_number="1B", rent_amount=900)
    property_obj = SimpleNamespace(
        id=uuid.uuid4(), address="12 Oak St", property_type="Duplex", units=[unit_a, unit_b]
    )
    tenant = SimpleNamespace(
        id=uuid.uuid4(), unit_id=unit_a.id, name="Jane", email=None, phone=None
    )
    leases = [
        SimpleNamespace(
            tenant_id=tenant.id, start_date=date(2023, 1, 1),
            end_date=date(2023, 12, 31), rent=950,
        ),
        SimpleNamespace(
            tenant_id=tenant.id, start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31), rent=1000,
        ),
    ]

    report = reports.build_property_report(
        [property_obj], [tenant], leases, date(2024, 6, 1)
    )

    entry = report.properties[0]
    assert entry.total_units == 2
    assert entry.occupied_units == 1
    assert entry.units[0].monthly_rent == 1000
    assert entry.units[1].tenant_name is None
    assert report.total_occupied_units == 1
    assert report.total_monthly_rent == 1000


def test_tenant_report_sums_payments_over_all_leases():
    tenant = SimpleNamespace(id=uuid.uuid4(), name="Jane", email=None, phone="+15550001111")
    old = SimpleNamespace(
        id=uuid.uuid4(), tenant_id=tenant.id, start_date=date(2023, 1, 1),
        end_date=date(2023, 12, 31), rent=900,
    )
    current = SimpleNamespace(
        id=uuid.uuid4(), tenant_id=tenant.id, start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31), rent=1000,
    )
    payments = [
        SimpleNamespace(lease_id=old.id, amount=900, date=date(2023, 5, 1)),
        SimpleNamespace(lease_id=current.id, amount=1000, date=date(2024, 2, 1)),
    ]

    report = reports.build_tenant_report(
        [(tenant, None, "12 Oak St")], [old, current], payments, date(2024, 3, 1)
    )

    entry = report.tenants[0]
    assert entry.unit_number == "Unknown"
    assert entry.monthly_rent == 1000
    assert entry.total_paid == 1900
    assert entry.payment_count == 2
    assert entry.last_payment_date == date(2024, 2, 1)
    assert entry.is_lease_active
    assert report.active_leases == 1
    assert report.total_collected == 1900


def test_month_label():
    assert reports.month_label(date(2024, 3, 7)) == "March 2024"


def _stored(**fields):
    return SimpleNamespace(
        id=uuid.uuid4(), created_at=datetime(2024, 1, 1), updated_at=None, **fields
    )


def test_payment_report_buckets_by_month_with_late_fees():
    lease_id = uuid.uuid4()
    rows = [
        (_stored(lease_id=lease_id, amount=1000, date=date(2024, 2, 1), late_fee=25),
         "Jane", "jane@example.com", "1A", "12 Oak St", 1000),
        (_stored(lease_id=lease_id, amount=500.5, date=date(2024, 2, 20), late_fee=None),
         "Jane", "jane@example.com", "1A", "12 Oak St", 1000),
        (_stored(lease_id=lease_id, amount=1000, date=date(2024, 3, 1), late_fee=10),
         None, None, None, None, None),
    ]

    report = reports.build_payment_report(rows)

    assert [(m.month, m.amount, m.count, m.late_fees) for m in report.monthly_payments] == [
        ("February 2024", 1500.5, 2, 25),
        ("March 2024", 1000, 1, 10),
    ]
    assert report.total_payments == 3
    assert report.total_amount == 2500.5
    assert report.total_late_fees == 35
    assert report.payments[2].tenant_name == "Unknown"
    assert report.payments[2].monthly_rent == 0


def test_expense_report_groups_by_category_and_month():
    property_id = uuid.uuid4()
    rows = [
        (_stored(property_id=property_id, type="Utilities", amount=120, date=date(2024, 2, 3)),
         "12 Oak St"),
        (_stored(property_id=property_id, type="Utilities", amount=80, date=date(2024, 3, 3)),
         "12 Oak St"),
        (_stored(property_id=property_id, type="Repair", amount=300, date=date(2024, 3, 9)),
         None),
    ]

    report = reports.build_expense_report(rows)

    assert [(c.category, c.amount, c.count) for c in report.expenses_by_category] == [
        ("Utilities", 200, 2),
        ("Repair", 300, 1),
    ]
    assert [(m.month, m.amount, m.count) for m in report.monthly_expenses] == [
        ("February 2024", 120, 1),
        ("March 2024", 380, 2),
    ]
    assert report.total_amount == 500
    assert report.expenses[2].property_address == "Unknown"


def _permit(status: ParkingPermitStatus, building: str | None):
    return _stored(
        property_id=uuid.uuid4(),
        tenant_id=None,
        permit_number=str(uuid.uuid4())[:8],
        status=status,
        issued_at=datetime(2024, 1, 1),
        building=building,
    )


def test_parking_report_counts_status_and_building():
    rows = [
        (_permit(ParkingPermitStatus.ACTIVE, "North"), "12 Oak St", "Jane", "1A"),
        (_permit(ParkingPermitStatus.ACTIVE, "  "), "12 Oak St", None, None),
        (_permit(ParkingPermitStatus.CANCELLED, None), None, None, None),
    ]

    report = reports.build_parking_report(rows)

    assert report.total_permits == 3
    assert report.active_permits == 2
    assert [(c.name, c.count) for c in report.permits_by_status] == [
        ("Active", 2),
        ("Cancelled", 1),
    ]
    assert [(c.name, c.count) for c in report.permits_by_building] == [
        ("North", 1),
        ("Unknown", 2),
    ]
    assert report.permits[2].property_address == "Unknown"
