"""CRUD operations for owners, roles, property links and invitations."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..properties.models import Property
from ..users.models import User
from .models import (
    Invitation,
    InvitationStatus,
    Owner,
    OwnerRole,
    PropertyOwner,
    UserOwner,
)

# ----- Owners -----


async def get_owner(db: AsyncSession, owner_id: uuid.UUID) -> Owner | None:
    return await db.get(Owner, owner_id)


async def get_owners_for_user(
    db: AsyncSession, user_id: str
) -> list[tuple[Owner, OwnerRole]]:
    result = await db.execute(
        select(Owner, UserOwner.role)
        .join(UserOwner, UserOwner.owner_id == Owner.id)
        .where(UserOwner.user_id == user_id)
        .order_by(Owner.name)
    )
    return [tuple(row) for row in result.all()]


async def count_owners_for_user(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count(UserOwner.id)).where(UserOwner.user_id == user_id)
    )
    return result.scalar_one()


async def create_owner(db: AsyncSession, **fields) -> Owner:
    owner = Owner(**fields)
    db.add(owner)
    await db.flush()
    return owner


async def update_owner(db: AsyncSession, owner: Owner, **kwargs) -> Owner:
    for key, value in kwargs.items():
        if hasattr(owner, key):
            setattr(owner, key, value)
    await db.flush()
    return owner


async def delete_owner(db: AsyncSession, owner: Owner) -> None:
    await db.delete(owner)
    await db.flush()


# ----- User roles -----


async def get_user_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID
) -> UserOwner | None:
    result = await db.execute(
        select(UserOwner).where(
            UserOwner.user_id == user_id, UserOwner.owner_id == owner_id
        )
    )
    return result.scalar_one_or_none()


async def get_user_owner_links(db: AsyncSession, user_id: str) -> list[UserOwner]:
    result = await db.execute(
        select(UserOwner)
        .where(UserOwner.user_id == user_id)
        .order_by(UserOwner.created_at)
    )
    return list(result.scalars().all())


async def get_owner_users(
    db: AsyncSession, owner_id: uuid.UUID
) -> list[tuple[User, UserOwner]]:
    result = await db.execute(
        select(User, UserOwner)
        .join(UserOwner, UserOwner.user_id == User.id)
        .where(UserOwner.owner_id == owner_id)
        .order_by(UserOwner.created_at)
    )
    return [tuple(row) for row in result.all()]


async def count_admins(db: AsyncSession, owner_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count(UserOwner.id)).where(
            UserOwner.owner_id == owner_id, UserOwner.role == OwnerRole.ADMIN
        )
    )
    return result.scalar_one()


async def create_user_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID, role: OwnerRole
) -> UserOwner:
    link = UserOwner(user_id=user_id, owner_id=owner_id, role=role)
    db.add(link)
    await db.flush()
    return link


async def update_user_owner(
    db: AsyncSession, link: UserOwner, role: OwnerRole
) -> UserOwner:
    link.role = role
    await db.flush()
    return link


async def delete_user_owner(db: AsyncSession, link: UserOwner) -> None:
    await db.delete(link)
    await db.flush()


# ----- Property links -----


async def get_property_owner(
    db: AsyncSession, property_owner_id: uuid.UUID
) -> PropertyOwner | None:
    return await db.get(PropertyOwner, property_owner_id)


async def get_property_owner_link(
    db: AsyncSession, property_id: uuid.UUID, owner_id: uuid.UUID
) -> PropertyOwner | None:
    result = await db.execute(
        select(PropertyOwner).where(
            PropertyOwner.property_id == property_id,
            PropertyOwner.owner_id == owner_id,
        )
    )
    return result.scalar_one_or_none()


async def get_property_owners(
    db: AsyncSession, property_id: uuid.UUID
) -> list[tuple[Owner, PropertyOwner]]:
    result = await db.execute(
        select(Owner, PropertyOwner)
        .join(PropertyOwner, PropertyOwner.owner_id == Owner.id)
        .where(PropertyOwner.property_id == property_id)
        .order_by(PropertyOwner.ownership_percentage.desc(), Owner.name)
    )
    return [tuple(row) for row in result.all()]


async def sum_ownership(
    db: AsyncSession,
    property_id: uuid.UUID,
    exclude_id: uuid.UUID | None = None,
) -> float:
    query = select(func.coalesce(func.sum(PropertyOwner.ownership_percentage), 0)).where(
        PropertyOwner.property_id == property_id
    )
    if exclude_id is not None:
        query = query.where(PropertyOwner.id != exclude_id)
    result = await db.execute(query)
    return float(result.scalar_one() or 0)


async def create_property_owner(
    db: AsyncSession,
    property_id: uuid.UUID,
    owner_id: uuid.UUID,
    ownership_percentage: float = 100,
) -> PropertyOwner:
    link = PropertyOwner(
        property_id=property_id,
        owner_id=owner_id,
        ownership_percentage=ownership_percentage,
    )
    db.add(link)
    await db.flush()
    return link


async def update_property_owner(
    db: AsyncSession, link: PropertyOwner, ownership_percentage: float
) -> PropertyOwner:
    link.ownership_percentage = ownership_percentage
    await db.flush()
    return link


async def delete_property_owner(db: AsyncSession, link: PropertyOwner) -> None:
    await db.delete(link)
    await db.flush()


async def get_unlinked_properties(
    db: AsyncSession, user_id: str | None = None
) -> list[Property]:
    """Properties without any owner link, optionally for one direct owner."""
    linked = select(PropertyOwner.property_id)
    query = select(Property).where(Property.id.not_in(linked))
    if user_id is not None:
        query = query.where(Property.user_id == user_id)
    result = await db.execute(query.order_by(Property.created_at))
    return list(result.scalars().all())


async def count_properties(db: AsyncSession, user_id: str | None = None) -> int:
    query = select(func.count(Property.id))
    if user_id is not None:
        query = query.where(Property.user_id == user_id)
    result = await db.execute(query)
    return result.scalar_one()


# ----- Invitations -----


async def get_invitation(
    db: AsyncSession, invitation_id: uuid.UUID
) -> Invitation | None:
    return await db.get(Invitation, invitation_id)


async def get_invitation_by_token(db: AsyncSession, token: str) -> Invitation | None:
    result = await db.execute(select(Invitation).where(Invitation.token == token))
    return result.scalar_one_or_none()


async def get_pending_invitations_for_email(
    db: AsyncSession, owner_id: uuid.UUID, email: str
) -> list[Invitation]:
    result = await db.execute(
        select(Invitation).where(
            Invitation.owner_id == owner_id,
            func.lower(Invitation.email) == email.lower(),
            Invitation.status == InvitationStatus.PENDING,
        )
    )
    return list(result.scalars().all())


async def get_owner_invitations(
    db: AsyncSession, owner_id: uuid.UUID
) -> list[Invitation]:
    result = await db.execute(
        select(Invitation)
        .where(Invitation.owner_id == owner_id)
        .order_by(Invitation.created_at.desc())
    )
    return list(result.scalars().all())


async def create_invitation(db: AsyncSession, **fields) -> Invitation:
    invitation = Invitation(**fields)
    db.add(invitation)
    await db.flush()
    return invitation


async def update_invitation(
    db: AsyncSession, invitation: Invitation, **kwargs
) -> Invitation:
    for key, value in kwargs.items():
        if hasattr(invitation, key):
            setattr(invitation, key, value)
    await db.flush()
    return invitation


async def delete_invitation(db: AsyncSession, invitation: Invitation) -> None:
    await db.delete(invitation)
    await db.flush()


# ----- Legacy ownership -----


async def get_direct_properties(db: AsyncSession, user_id: str) -> list[Property]:
    result = await db.execute(
        select(Property).where(Property.user_id == user_id).order_by(Property.created_at)
    )
    return list(result.scalars().all())


async def get_linked_property_ids(
    db: AsyncSession, property_ids: list[uuid.UUID]
) -> set[uuid.UUID]:
    if not property_ids:
        return set()
    result = await db.execute(
        select(PropertyOwner.property_id)
        .where(PropertyOwner.property_id.in_(property_ids))
        .distinct()
    )
    return set(result.scalars().all())
