"""Owner business logic services.

Role rules on an owner:

- any role may read the owner, its team and its property shares
- admins and editors may link properties and change shares
- only admins may edit or delete the owner, manage the team, invite users
  and unlink properties
- an owner always keeps at least one admin
"""

import uuid
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import ensure_aware, utc_now
from ..access import services as access
from . import crud
from .models import (
    Invitation,
    InvitationStatus,
    Owner,
    OwnerRole,
    PropertyOwner,
    UserOwner,
)
from .schemas import (
    InvitationCreate,
    OwnerCreate,
    OwnerResponse,
    OwnerUpdate,
    OwnerUserResponse,
    OwnerWithRoleResponse,
    PropertyOwnerCreate,
    PropertyOwnerDetailResponse,
)

logger = get_logger(__name__)

ADMIN_ONLY = (OwnerRole.ADMIN,)


def with_role(owner: Owner, role: OwnerRole) -> OwnerWithRoleResponse:
    return OwnerWithRoleResponse(
        **OwnerResponse.model_validate(owner).model_dump(), role=role
    )


def with_share(owner: Owner, link: PropertyOwner) -> PropertyOwnerDetailResponse:
    return PropertyOwnerDetailResponse(
        **OwnerResponse.model_validate(owner).model_dump(),
        ownership_percentage=link.ownership_percentage or 0,
        property_owner_id=link.id,
    )


async def _get_owner(db: AsyncSession, owner_id: uuid.UUID) -> Owner:
    owner = await crud.get_owner(db, owner_id)
    if not owner:
        raise NotFoundError("Owner not found")
    return owner


async def _check_share(
    db: AsyncSession,
    property_id: uuid.UUID,
    percentage: float,
    exclude_id: uuid.UUID | None = None,
) -> None:
    allocated = await crud.sum_ownership(db, property_id, exclude_id=exclude_id)
    if allocated + percentage > 100:
        raise ValidationError(
            "Total ownership cannot exceed 100%",
            field="ownership_percentage",
            details={"allocated": allocated, "requested": percentage},
        )


async def _get_property_owner(
    db: AsyncSession, property_owner_id: uuid.UUID
) -> PropertyOwner:
    link = await crud.get_property_owner(db, property_owner_id)
    if not link:
        raise NotFoundError("Property owner relationship not found")
    return link


async def _ensure_admin_remains(
    db: AsyncSession, link: UserOwner, new_role: OwnerRole | None = None
) -> None:
    """Reject demoting or removing the only admin of an owner."""
    if link.role != OwnerRole.ADMIN or new_role == OwnerRole.ADMIN:
        return
    if await crud.count_admins(db, link.owner_id) <= 1:
        raise BusinessLogicError("Cannot remove the last admin")


# ----- Owners -----


async def get_user_owners(
    db: AsyncSession, user_id: str
) -> list[OwnerWithRoleResponse]:
    rows = await crud.get_owners_for_user(db, user_id)
    return [with_role(owner, role) for owner, role in rows]


async def get_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID
) -> OwnerWithRoleResponse:
    role = await access.ensure_owner_role(db, user_id, owner_id)
    owner = await _get_owner(db, owner_id)
    return with_role(owner, role)


async def create_owner(db: AsyncSession, user_id: str, data: OwnerCreate) -> Owner:
    """Create an owner; its creator becomes the first admin."""
    fields = data.model_dump()
    fields["name"] = data.name.strip()
    owner = await crud.create_owner(db, **fields)
    await crud.create_user_owner(db, user_id, owner.id, OwnerRole.ADMIN)
    await db.commit()
    logger.info("Owner created", extra={"owner_id": str(owner.id), "user_id": user_id})
    return owner


async def update_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID, data: OwnerUpdate
) -> Owner:
    await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)
    owner = await _get_owner(db, owner_id)

    changes = data.model_dump(exclude_unset=True)
    for required in ("name", "type"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    updated = await crud.update_owner(db, owner, **changes)
    await db.commit()
    return updated


async def delete_owner(db: AsyncSession, user_id: str, owner_id: uuid.UUID) -> None:
    """Delete an owner with its roles, shares and invitations.

    Properties stay with the users who created them.
    """
    await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)
    owner = await _get_owner(db, owner_id)
    await crud.delete_owner(db, owner)
    await db.commit()
    logger.info("Owner deleted", extra={"owner_id": str(owner_id), "user_id": user_id})


# ----- Property shares -----


async def get_property_owners(
    db: AsyncSession, user_id: str, property_id: uuid.UUID
) -> list[PropertyOwnerDetailResponse]:
    await access.ensure_property_access(db, user_id, property_id)
    rows = await crud.get_property_owners(db, property_id)
    return [with_share(owner, link) for owner, link in rows]


async def add_property_owner(
    db: AsyncSession, user_id: str, data: PropertyOwnerCreate
) -> PropertyOwner:
    """Give an owner a share of a property.

    The caller needs admin or editor on the owner and write access to the
    property. Shares of one property never add up to more than 100%.
    """
    await access.ensure_owner_role(db, user_id, data.owner_id, access.WRITE_ROLES)
    await access.ensure_property_access(db, user_id, data.property_id, write=True)

    if await crud.get_property_owner_link(db, data.property_id, data.owner_id):
        raise BusinessLogicError("Owner is already linked to this property")
    await _check_share(db, data.property_id, data.ownership_percentage)

    link = await crud.create_property_owner(
        db, data.property_id, data.owner_id, data.ownership_percentage
    )
    await db.commit()
    logger.info(
        "Property owner added",
        extra={
            "property_id": str(data.property_id),
            "owner_id": str(data.owner_id),
            "ownership_percentage": data.ownership_percentage,
        },
    )
    return link


async def update_property_owner(
    db: AsyncSession,
    user_id: str,
    property_owner_id: uuid.UUID,
    ownership_percentage: float,
) -> PropertyOwner:
    link = await _get_property_owner(db, property_owner_id)
    await access.ensure_owner_role(db, user_id, link.owner_id, access.WRITE_ROLES)
    await _check_share(db, link.property_id, ownership_percentage, exclude_id=link.id)

    updated = await crud.update_property_owner(db, link, ownership_percentage)
    await db.commit()
    return updated


async def remove_property_owner(
    db: AsyncSession, user_id: str, property_owner_id: uuid.UUID
) -> None:
    link = await _get_property_owner(db, property_owner_id)
    await access.ensure_owner_role(db, user_id, link.owner_id, ADMIN_ONLY)
    await crud.delete_property_owner(db, link)
    await db.commit()
    logger.info(
        "Property owner removed",
        extra={"property_id": str(link.property_id), "owner_id": str(link.owner_id)},
    )


# ----- Team -----


async def get_owner_users(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID
) -> list[OwnerUserResponse]:
    await access.ensure_owner_role(db, user_id, owner_id)
    rows = await crud.get_owner_users(db, owner_id)
    return [
        OwnerUserResponse(
            id=user.id,
            email=user.email,
            name=user.name,
            role=link.role,
            user_owner_id=link.id,
        )
        for user, link in rows
    ]


async def _get_member(
    db: AsyncSession, member_id: str, owner_id: uuid.UUID
) -> UserOwner:
    link = await crud.get_user_owner(db, member_id, owner_id)
    if not link:
        raise NotFoundError("User is not linked to this owner")
    return link


async def update_user_role(
    db: AsyncSession,
    user_id: str,
    owner_id: uuid.UUID,
    member_id: str,
    role: OwnerRole,
) -> UserOwner:
    """Change a member's role; the only admin cannot be demoted."""
    await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)
    link = await _get_member(db, member_id, owner_id)
    await _ensure_admin_remains(db, link, role)

    updated = await crud.update_user_owner(db, link, role)
    await db.commit()
    logger.info(
        "User role updated",
        extra={"owner_id": str(owner_id), "member_id": member_id, "role": role.value},
    )
    return updated


async def remove_user_from_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID, member_id: str
) -> None:
    """Remove a member; admins remove anyone, members may leave on their own."""
    if member_id == user_id:
        await access.ensure_owner_role(db, user_id, owner_id)
    else:
        await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)

    link = await _get_member(db, member_id, owner_id)
    await _ensure_admin_remains(db, link)

    await crud.delete_user_owner(db, link)
    await db.commit()
    logger.info(
        "User removed from owner",
        extra={"owner_id": str(owner_id), "member_id": member_id},
    )


# ----- Invitations -----


async def invite_user_to_owner(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID, data: InvitationCreate
) -> Invitation:
    """Create an invitation token; a pending one for the same email is replaced."""
    await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)
    email = data.email.strip().lower()

    for stale in await crud.get_pending_invitations_for_email(db, owner_id, email):
        await crud.delete_invitation(db, stale)

    invitation = await crud.create_invitation(
        db,
        owner_id=owner_id,
        email=email,
        role=data.role,
        invited_by=user_id,
        token=str(uuid.uuid4()),
        status=InvitationStatus.PENDING,
        expires_at=utc_now() + timedelta(days=settings.invitation_expire_days),
    )
    await db.commit()
    logger.info(
        "Invitation created",
        extra={
            "owner_id": str(owner_id),
            "invitation_id": str(invitation.id),
            "role": data.role.value,
        },
    )
    return invitation


async def get_owner_invitations(
    db: AsyncSession, user_id: str, owner_id: uuid.UUID
) -> list[Invitation]:
    await access.ensure_owner_role(db, user_id, owner_id, ADMIN_ONLY)
    return await crud.get_owner_invitations(db, owner_id)


async def revoke_invitation(
    db: AsyncSession, user_id: str, invitation_id: uuid.UUID
) -> None:
    invitation = await crud.get_invitation(db, invitation_id)
    if not invitation:
        raise NotFoundError("Invitation not found")
    await access.ensure_owner_role(db, user_id, invitation.owner_id, ADMIN_ONLY)
    await crud.delete_invitation(db, invitation)
    await db.commit()


async def accept_invitation(db: AsyncSession, user_id: str, token: str) -> UserOwner:
    """Redeem an invitation token for a role on its owner.

    Raises:
        NotFoundError: If no invitation has this token
        BusinessLogicError: If the invitation was already used or expired, or
            the user already has a role on the owner
    """
    invitation = await crud.get_invitation_by_token(db, token)
    if not invitation:
        raise NotFoundError("Invitation not found")

    if invitation.status != InvitationStatus.PENDING:
        raise BusinessLogicError("Invitation is no longer valid")

    if utc_now() > ensure_aware(invitation.expires_at):
        await crud.update_invitation(db, invitation, status=InvitationStatus.EXPIRED)
        await db.commit()
        logger.warning(
            "Invitation expired",
            extra={
                "invitation_id": str(invitation.id),
                "owner_id": str(invitation.owner_id),
            },
        )
        raise BusinessLogicError("Invitation has expired")

    if await crud.get_user_owner(db, user_id, invitation.owner_id):
        raise BusinessLogicError("You already have access to this owner")

    link = await crud.create_user_owner(
        db, user_id, invitation.owner_id, invitation.role
    )
    await crud.update_invitation(
        db,
        invitation,
        status=InvitationStatus.ACCEPTED,
        accepted_at=utc_now(),
    )
    await db.commit()
    logger.info(
        "Invitation accepted",
        extra={"owner_id": str(invitation.owner_id), "user_id": user_id},
    )
    return link
