"""Ownership chain checks.

A user reaches a property in one of two ways:

- directly, as the user who created it (``properties.user_id``)
- through an owner entity: ``user_owners`` -> ``property_owners``

Every other record hangs off a property (tenant -> unit -> property, lease
-> tenant, payment -> lease, ...), so each check walks the foreign-key chain
up to the property and applies the same scope. Viewers reach owner-linked
properties read-only; writes need the admin or editor role.

Failures raise ``NotFoundError`` so that another user's records cannot be
told apart from missing ones.
"""

import uuid
from collections.abc import Iterable

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError
from ..expenses.models import Expense
from ..leases.models import Lease
from ..owners.models import OwnerRole, PropertyOwner, UserOwner
from ..parking.models import ParkingPermit
from ..payments.models import Payment
from ..properties.models import Property, Unit
from ..renovations.models import Renovation, RenovationItem
from ..tenants.models import Tenant

WRITE_ROLES = (OwnerRole.ADMIN, OwnerRole.EDITOR)


def owner_linked_property_ids(
    user_id: str, roles: Iterable[OwnerRole] | None = None
) -> Select:
    """Select the ids of properties reachable through the user's owners."""
    query = (
        select(PropertyOwner.property_id)
        .join(UserOwner, UserOwner.owner_id == PropertyOwner.owner_id)
        .where(UserOwner.user_id == user_id)
    )
    if roles is not None:
        query = query.where(UserOwner.role.in_(list(roles)))
    return query


def property_scope(user_id: str, write: bool = False) -> ColumnElement[bool]:
    """Filter clause limiting ``Property`` rows to those the user may reach."""
    linked = owner_linked_property_ids(user_id, WRITE_ROLES if write else None)
    return or_(Property.user_id == user_id, Property.id.in_(linked))


def tenant_property_id() -> ColumnElement:
    """Property a tenant belongs to: the unit's property, else its own."""
    return func.coalesce(Unit.property_id, Tenant.property_id)


def join_tenant_chain(query: Select) -> Select:
    """Join a query that already selects from ``Tenant`` up to ``Property``."""
    return query.outerjoin(Unit, Unit.id == Tenant.unit_id).join(
        Property, Property.id == tenant_property_id()
    )


async def accessible_property_ids(
    db: AsyncSession, user_id: str, write: bool = False
) -> list[uuid.UUID]:
    """Ids of every property the user may read (or write)."""
    result = await db.execute(
        select(Property.id).where(property_scope(user_id, write))
    )
    return list(result.scalars().all())


async def _first_or_raise(db: AsyncSession, query: Select, message: str):
    result = await db.execute(query)
    found = result.scalars().first()
    if found is None:
        raise NotFoundError(message)
    return found


async def ensure_property_access(
    db: AsyncSession, user_id: str, property_id: uuid.UUID, write: bool = False
) -> Property:
    query = select(Property).where(
        Property.id == property_id, property_scope(user_id, write)
    )
    return await _first_or_raise(db, query, "Property not found or unauthorized")


async def ensure_unit_access(
    db: AsyncSession, user_id: str, unit_id: uuid.UUID, write: bool = False
) -> Unit:
    query = (
        select(Unit)
        .join(Property, Property.id == Unit.property_id)
        .where(Unit.id == unit_id, property_scope(user_id, write))
    )
    return await _first_or_raise(db, query, "Unit not found")


async def ensure_tenant_access(
    db: AsyncSession, user_id: str, tenant_id: uuid.UUID, write: bool = False
) -> Tenant:
    query = join_tenant_chain(select(Tenant)).where(
        Tenant.id == tenant_id, property_scope(user_id, write)
    )
    return await _first_or_raise(db, query, "Tenant not found")


async def ensure_lease_access(
    db: AsyncSession, user_id: str, lease_id: uuid.UUID, write: bool = False
) -> Lease:
    query = join_tenant_chain(
        select(Lease).join(Tenant, Tenant.id == Lease.tenant_id)
    ).where(Lease.id == lease_id, property_scope(user_id, write))
    return await _first_or_raise(db, query, "Lease not found")


async def ensure_payment_access(
    db: AsyncSession, user_id: str, payment_id: uuid.UUID, write: bool = False
) -> Payment:
    query = join_tenant_chain(
        select(Payment)
        .join(Lease, Lease.id == Payment.lease_id)
        .join(Tenant, Tenant.id == Lease.tenant_id)
    ).where(Payment.id == payment_id, property_scope(user_id, write))
    return await _first_or_raise(db, query, "Payment not found")


async def ensure_expense_access(
    db: AsyncSession, user_id: str, expense_id: uuid.UUID, write: bool = False
) -> Expense:
    query = (
        select(Expense)
        .join(Property, Property.id == Expense.property_id)
        .where(Expense.id == expense_id, property_scope(user_id, write))
    )
    return await _first_or_raise(db, query, "Expense not found")


async def ensure_renovation_access(
    db: AsyncSession, user_id: str, renovation_id: uuid.UUID, write: bool = False
) -> Renovation:
    query = (
        select(Renovation)
        .join(Property, Property.id == Renovation.property_id)
        .where(Renovation.id == renovation_id, property_scope(user_id, write))
    )
    return await _first_or_raise(db, query, "Renovation not found")


async def ensure_renovation_item_access(
    db: AsyncSession, user_id: str, item_id: uuid.UUID, write: bool = False
) -> RenovationItem:
    query = (
        select(RenovationItem)
        .join(Renovation, Renovation.id == RenovationItem.renovation_id)
        .join(Property, Property.id == Renovation.property_id)
        .where(RenovationItem.id == item_id, property_scope(user_id, write))
    )
    return await _first_or_raise(db, query, "Renovation item not found")


async def ensure_parking_permit_access(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID, write: bool = False
) -> ParkingPermit:
    query = (
        select(ParkingPermit)
        .join(Property, Property.id == ParkingPermit.property_id)
        .where(ParkingPermit.id == permit_id, property_scope(user_id, write))
    )
    return await _first_or_raise(db, query, "Parking permit not found")


# ----- Owner roles -----


async def get_owner_role(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID
) -> OwnerRole | None:
    result = await db.execute(
        select(UserOwner.role).where(
            UserOwner.user_id == user_id, UserOwner.owner_id == owner_id
        )
    )
    return result.scalar_one_or_none()


def _roles_label(roles: Iterable[OwnerRole]) -> str:
    return " or ".join(role.value.capitalize() for role in roles)


async def ensure_owner_role(
    db: AsyncSession,
    user_id: str,
    owner_id: uuid.UUID,
    roles: Iterable[OwnerRole] | None = None,
) -> OwnerRole:
    """Check the user's role on an owner.

    Raises:
        PermissionError: If the user has no role on the owner, or a role
            outside ``roles`` when given.
    """
    role = await get_owner_role(db, user_id, owner_id)
    if role is None:
        raise PermissionError("Unauthorized")

    if roles is not None:
        allowed = list(roles)
        if role not in allowed:
            raise PermissionError(
                f"Unauthorized - {_roles_label(allowed)} access required",
                details={"required_roles": [r.value for r in allowed]},
            )
    return role
