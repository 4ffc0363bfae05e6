"""ILIKE lookups over the data a user can reach, one entity type each."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import format_money
from ..access import services as access
from ..expenses.models import Expense
from ..owners.models import Owner, OwnerType, UserOwner
from ..properties.models import Property, Unit
from ..renovations.models import Renovation
from ..tenants.models import Tenant
from .schemas import SearchResult, SearchResultType


async def search_properties(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    result = await db.execute(
        select(Property)
        .where(
            access.property_scope(user_id),
            or_(Property.address.ilike(term), Property.property_type.ilike(term)),
        )
        .limit(limit)
    )
    return [
        SearchResult(
            type=SearchResultType.PROPERTY,
            id=str(p.id),
            title=p.address,
            subtitle=p.property_type or None,
            href=f"/dashboard/properties/{p.id}",
        )
        for p in result.scalars().all()
    ]


async def search_tenants(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    query = access.join_tenant_chain(select(Tenant)).where(
        access.property_scope(user_id),
        or_(Tenant.name.ilike(term), Tenant.email.ilike(term), Tenant.phone.ilike(term)),
    )
    result = await db.execute(query.limit(limit))
    return [
        SearchResult(
            type=SearchResultType.TENANT,
            id=str(t.id),
            title=t.name,
            subtitle=t.email or t.phone or None,
            href=f"/dashboard/tenants/{t.id}",
        )
        for t in result.scalars().all()
    ]


def _owner_subtitle(owner: Owner) -> str:
    kind = "LLC" if owner.type == OwnerType.LLC else "Individual"
    return f"{kind} • {owner.email}" if owner.email else kind


async def search_owners(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    result = await db.execute(
        select(Owner)
        .join(UserOwner, UserOwner.owner_id == Owner.id)
        .where(
            UserOwner.user_id == user_id,
            or_(Owner.name.ilike(term), Owner.email.ilike(term), Owner.phone.ilike(term)),
        )
        .limit(limit)
    )
    return [
        SearchResult(
            type=SearchResultType.OWNER,
            id=str(o.id),
            title=o.name,
            subtitle=_owner_subtitle(o),
            href="/dashboard/owners",
        )
        for o in result.scalars().all()
    ]


async def search_expenses(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    result = await db.execute(
        select(Expense)
        .join(Property, Property.id == Expense.property_id)
        .where(access.property_scope(user_id), Expense.type.ilike(term))
        .limit(limit)
    )
    return [
        SearchResult(
            type=SearchResultType.EXPENSE,
            id=str(e.id),
            title=e.type,
            subtitle=format_money(e.amount),
            href="/dashboard/expenses",
        )
        for e in result.scalars().all()
    ]


async def search_units(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    result = await db.execute(
        select(Unit)
        .join(Property, Property.id == Unit.property_id)
        .where(access.property_scope(user_id), Unit.unit_number.ilike(term))
        .limit(limit)
    )
    return [
        SearchResult(
            type=SearchResultType.UNIT,
            id=str(u.id),
            title=f"Unit {u.unit_number}",
            href=f"/dashboard/properties/{u.property_id}",
        )
        for u in result.scalars().all()
    ]


async def search_renovations(
    db: AsyncSession, user_id: str, term: str, limit: int
) -> list[SearchResult]:
    result = await db.execute(
        select(Renovation)
        .join(Property, Property.id == Renovation.property_id)
        .where(
            access.property_scope(user_id),
            or_(Renovation.title.ilike(term), Renovation.notes.ilike(term)),
        )
        .limit(limit)
    )
    return [
        SearchResult(
            type=SearchResultType.RENOVATION,
            id=str(r.id),
            title=r.title,
            subtitle=r.notes[:50] if r.notes else None,
            href="/dashboard/renovations",
        )
        for r in result.scalars().all()
    ]


SEARCHES = (
    search_properties,
    search_tenants,
    search_owners,
    search_expenses,
    search_units,
    search_renovations,
)
