"""Initial schema for RentTrackr

Revision ID: 0001
Revises:
Create Date: 2025-01-01

Creates all tables for:
- Users
- Portfolio (properties, units, tenants, leases)
- Money (payments, expenses)
- Operations (renovations, renovation_items, parking_permits, parking_activity)
- Ownership (owners, user_owners, property_owners, invitations)
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, sa.String(36), **kwargs)


def _money(name: str, nullable: bool = True, **kwargs) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=nullable, **kwargs)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create all tables."""

    # users - keyed by the identity provider's subject
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # =====================
    # PORTFOLIO
    # =====================

    op.create_table(
        "properties",
        _uuid("id", nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("property_type", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_properties_user", "properties", ["user_id"])

    op.create_table(
        "units",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        sa.Column("unit_number", sa.String(50), nullable=False),
        _money("rent_amount", nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_units_property_number", "units", ["property_id", "unit_number"], unique=True
    )

    # tenants - unit_id is null for single-family properties
    op.create_table(
        "tenants",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        _uuid("unit_id", nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_tenants_property", "tenants", ["property_id"])
    op.create_index("ix_tenants_unit", "tenants", ["unit_id"])

    op.create_table(
        "leases",
        _uuid("id", nullable=False),
        _uuid("tenant_id", nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        _money("rent", nullable=False),
        _money("deposit", nullable=False, server_default="0"),
        _money("security_deposit"),
        _money("pet_deposit"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_leases_tenant", "leases", ["tenant_id"])
    op.create_index("ix_leases_end_date", "leases", ["end_date"])

    # =====================
    # MONEY
    # =====================

    op.create_table(
        "payments",
        _uuid("id", nullable=False),
        _uuid("lease_id", nullable=False),
        _money("amount", nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        _money("late_fee"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["lease_id"], ["leases.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_payments_lease", "payments", ["lease_id"])
    op.create_index("ix_payments_date", "payments", ["date"])

    op.create_table(
        "expenses",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        _money("amount", nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_expenses_property", "expenses", ["property_id"])
    op.create_index("ix_expenses_date", "expenses", ["date"])

    # =====================
    # OPERATIONS
    # =====================

    op.create_table(
        "renovations",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        _uuid("unit_id", nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        _money("total_cost", nullable=False, server_default="0"),
        sa.Column("notes", sa.String(1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["unit_id"], ["units.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_renovations_property", "renovations", ["property_id"])

    op.create_table(
        "renovation_items",
        _uuid("id", nullable=False),
        _uuid("renovation_id", nullable=False),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("vendor", sa.String(255), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        _money("unit_cost"),
        _money("total_cost"),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.String(1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["renovation_id"], ["renovations.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_renovation_items_renovation", "renovation_items", ["renovation_id"]
    )

    op.create_table(
        "parking_permits",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        _uuid("tenant_id", nullable=True),
        sa.Column("building", sa.String(100), nullable=True),
        sa.Column("permit_number", sa.String(100), nullable=False),
        sa.Column("status", sa.Enum("ACTIVE", "CANCELLED", name="parkingpermitstatus"), nullable=False),
        sa.Column("vehicle_make", sa.String(100), nullable=True),
        sa.Column("vehicle_model", sa.String(100), nullable=True),
        sa.Column("vehicle_year", sa.String(10), nullable=True),
        sa.Column("vehicle_color", sa.String(50), nullable=True),
        sa.Column("license_plate", sa.String(50), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_parking_permits_property", "parking_permits", ["property_id"])
    op.create_index("ix_parking_permits_tenant", "parking_permits", ["tenant_id"])
    op.create_index("ix_parking_permits_status", "parking_permits", ["status"])

    op.create_table(
        "parking_activity",
        _uuid("id", nullable=False),
        _uuid("parking_permit_id", nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parking_permit_id"], ["parking_permits.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_parking_activity_permit", "parking_activity", ["parking_permit_id"])

    # =====================
    # OWNERSHIP
    # =====================

    op.create_table(
        "owners",
        _uuid("id", nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.Enum("INDIVIDUAL", "LLC", name="ownertype"), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("tax_id", sa.String(50), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_owners",
        _uuid("id", nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        _uuid("owner_id", nullable=False),
        sa.Column("role", sa.Enum("ADMIN", "EDITOR", "VIEWER", name="ownerrole"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["owners.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_user_owners_user_owner", "user_owners", ["user_id", "owner_id"], unique=True
    )
    op.create_index("ix_user_owners_owner", "user_owners", ["owner_id"])

    op.create_table(
        "property_owners",
        _uuid("id", nullable=False),
        _uuid("property_id", nullable=False),
        _uuid("owner_id", nullable=False),
        sa.Column("ownership_percentage", sa.Numeric(5, 2), nullable=False, server_default="100"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["owners.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_property_owners_property_owner",
        "property_owners",
        ["property_id", "owner_id"],
        unique=True,
    )
    op.create_index("ix_property_owners_owner", "property_owners", ["owner_id"])

    op.create_table(
        "invitations",
        _uuid("id", nullable=False),
        _uuid("owner_id", nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.Enum("ADMIN", "EDITOR", "VIEWER", name="ownerrole"), nullable=False),
        sa.Column("invited_by", sa.String(255), nullable=False),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "ACCEPTED", "EXPIRED", name="invitationstatus"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["owners.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invited_by"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_invitations_token", "invitations", ["token"], unique=True)
    op.create_index("ix_invitations_owner_email", "invitations", ["owner_id", "email"])


def downgrade() -> None:
    """Drop all tables in reverse order."""

    # Ownership
    op.drop_table("invitations")
    op.drop_table("property_owners")
    op.drop_table("user_owners")
    op.drop_table("owners")

    # Operations
    op.drop_table("parking_activity")
    op.drop_table("parking_permits")
    op.drop_table("renovation_items")
    op.drop_table("renovations")

    # Money
    op.drop_table("expenses")
    op.drop_table("payments")

    # Portfolio
    op.drop_table("leases")
    op.drop_table("tenants")
    op.drop_table("units")
    op.drop_table("properties")
    op.drop_table("users")
