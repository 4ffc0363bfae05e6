"""Actions and pages reachable from global search by keyword."""

from typing import NamedTuple

from .schemas import SearchResultType


class CatalogEntry(NamedTuple):
    type: SearchResultType
    keywords: tuple[str, ...]
    title: str
    subtitle: str
    href: str


ACTION = SearchResultType.ACTION
PAGE = SearchResultType.PAGE

CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        ACTION,
        ("add rent", "record payment", "record rent", "payment", "rent payment",
         "add payment"),
        "Record Payment",
        "Add a new rent payment",
        "/dashboard/rents/new",
    ),
    CatalogEntry(
        ACTION,
        ("add property", "new property", "create property"),
        "Add Property",
        "Create a new property",
        "/dashboard/properties/new",
    ),
    CatalogEntry(
        ACTION,
        ("add tenant", "new tenant", "create tenant"),
        "Add Tenant",
        "Create a new tenant",
        "/dashboard/tenants/new",
    ),
    CatalogEntry(
        ACTION,
        ("add owner", "new owner", "create owner"),
        "Add Owner",
        "Create a new owner",
        "/dashboard/owners",
    ),
    CatalogEntry(
        ACTION,
        ("add expense", "new expense", "create expense", "record expense",
         "log expense", "add cost", "new cost", "record cost"),
        "Add Expense",
        "Record a new expense",
        "/dashboard/expenses/new",
    ),
    CatalogEntry(
        ACTION,
        ("add renovation", "new renovation", "create renovation"),
        "Add Renovation",
        "Create a new renovation project",
        "/dashboard/renovations/new",
    ),
    CatalogEntry(
        ACTION,
        ("add parking", "new parking", "create parking", "add permit",
         "new permit", "create permit", "add parking permit",
         "new parking permit"),
        "Add Parking Permit",
        "Create a new parking permit",
        "/dashboard/parking/new",
    ),
    CatalogEntry(
        ACTION,
        ("add lease", "new lease", "create lease"),
        "Add Lease",
        "Create a new lease",
        "/dashboard/tenants",
    ),
    CatalogEntry(
        PAGE,
        ("financials", "financial", "reports", "report", "financial report",
         "analytics", "income statement", "cash flow", "tax summary", "roi",
         "return on investment", "financial metrics", "revenue", "profit",
         "loss"),
        "Financials",
        "View financial reports and analytics",
        "/dashboard/financials",
    ),
    CatalogEntry(
        PAGE,
        ("dashboard", "home", "main"),
        "Dashboard",
        "Go to main dashboard",
        "/dashboard",
    ),
    CatalogEntry(
        PAGE,
        ("properties", "property"),
        "Properties",
        "View all properties",
        "/dashboard/properties",
    ),
    CatalogEntry(
        PAGE,
        ("tenants", "tenant"),
        "Tenants",
        "View all tenants",
        "/dashboard/tenants",
    ),
    CatalogEntry(
        PAGE,
        ("owners", "owner"),
        "Owners",
        "View all owners",
        "/dashboard/owners",
    ),
    CatalogEntry(
        PAGE,
        ("rents", "rent", "rent tracker", "rent tracking"),
        "Rent Tracker",
        "View rent payments and tracking",
        "/dashboard/rents",
    ),
    CatalogEntry(
        PAGE,
        ("expenses", "expense", "costs", "cost", "spending", "expenditure",
         "expenditures", "bills", "payments made"),
        "Expenses",
        "View all expenses",
        "/dashboard/expenses",
    ),
    CatalogEntry(
        PAGE,
        ("renovations", "renovation"),
        "Renovations",
        "View renovation projects",
        "/dashboard/renovations",
    ),
    CatalogEntry(
        PAGE,
        ("parking", "parking permits", "parking permit", "permit", "permits",
         "vehicle", "vehicles", "car", "cars", "license plate",
         "parking management"),
        "Parking",
        "Manage parking permits",
        "/dashboard/parking",
    ),
    CatalogEntry(
        PAGE,
        ("profile", "user profile", "account", "settings"),
        "User Profile",
        "View your profile and settings",
        "/dashboard/user-profile",
    ),
)


def matches(entry: CatalogEntry, query: str) -> bool:
    """Query contains a keyword, or a keyword contains the query."""
    query = query.lower()
    return any(keyword in query or query in keyword for keyword in entry.keywords)
