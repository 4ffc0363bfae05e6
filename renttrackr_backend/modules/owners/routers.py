"""Owner, team, invitation and property share API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...config import settings
from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import migration, services
from .models import Invitation
from .schemas import (
    InvitationAccept,
    InvitationCreate,
    InvitationResponse,
    MigrationResultResponse,
    MigrationStatusResponse,
    OwnerCreate,
    OwnerResponse,
    OwnerUpdate,
    OwnerUserResponse,
    OwnerWithRoleResponse,
    PropertyOwnerCreate,
    PropertyOwnerDetailResponse,
    PropertyOwnerResponse,
    PropertyOwnerUpdate,
    RoleUpdate,
    UserOwnerResponse,
)

router = APIRouter(prefix="/owners", tags=["Owners"])


def invitation_response(invitation: Invitation) -> InvitationResponse:
    response = InvitationResponse.model_validate(invitation)
    response.invite_url = f"{settings.frontend_url}/invitations/{invitation.token}"
    return response


# ----- Owners -----


@router.get("", response_model=BaseResponse[list[OwnerWithRoleResponse]])
async def list_owners(current_user: CurrentUser, db: DBSession):
    """Get the owners the caller has a role on."""
    owners = await services.get_user_owners(db, current_user.id)
    return BaseResponse(success=True, data=owners)


@router.post("", response_model=BaseResponse[OwnerResponse])
async def create_owner(data: OwnerCreate, current_user: CurrentUser, db: DBSession):
    owner = await services.create_owner(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Owner created successfully",
        data=OwnerResponse.model_validate(owner),
    )


# ----- Property shares -----
# Declared before "/{owner_id}" so the literal paths match first.


@router.get(
    "/properties/{property_id}",
    response_model=BaseResponse[list[PropertyOwnerDetailResponse]],
)
async def list_property_owners(
    property_id: UUID, current_user: CurrentUser, db: DBSession
):
    owners = await services.get_property_owners(db, current_user.id, property_id)
    return BaseResponse(success=True, data=owners)


@router.post("/property-links", response_model=BaseResponse[PropertyOwnerResponse])
async def add_property_owner(
    data: PropertyOwnerCreate, current_user: CurrentUser, db: DBSession
):
    link = await services.add_property_owner(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Property owner added successfully",
        data=PropertyOwnerResponse.model_validate(link),
    )


@router.put(
    "/property-links/{property_owner_id}",
    response_model=BaseResponse[PropertyOwnerResponse],
)
async def update_property_owner(
    property_owner_id: UUID,
    data: PropertyOwnerUpdate,
    current_user: CurrentUser,
    db: DBSession,
):
    link = await services.update_property_owner(
        db, current_user.id, property_owner_id, data.ownership_percentage
    )
    return BaseResponse(
        success=True,
        message="Ownership updated successfully",
        data=PropertyOwnerResponse.model_validate(link),
    )


@router.delete(
    "/property-links/{property_owner_id}",
    response_model=BaseResponse[DeletedResponse],
)
async def remove_property_owner(
    property_owner_id: UUID, current_user: CurrentUser, db: DBSession
):
    await services.remove_property_owner(db, current_user.id, property_owner_id)
    return BaseResponse(
        success=True,
        message="Property owner removed successfully",
        data=DeletedResponse(id=property_owner_id),
    )


# ----- Invitations (token side) -----


@router.post("/invitations/accept", response_model=BaseResponse[UserOwnerResponse])
async def accept_invitation(
    data: InvitationAccept, current_user: CurrentUser, db: DBSession
):
    link = await services.accept_invitation(db, current_user.id, data.token)
    return BaseResponse(
        success=True,
        message="Invitation accepted",
        data=UserOwnerResponse.model_validate(link),
    )


@router.delete(
    "/invitations/{invitation_id}", response_model=BaseResponse[DeletedResponse]
)
async def revoke_invitation(
    invitation_id: UUID, current_user: CurrentUser, db: DBSession
):
    await services.revoke_invitation(db, current_user.id, invitation_id)
    return BaseResponse(
        success=True,
        message="Invitation revoked",
        data=DeletedResponse(id=invitation_id),
    )


# ----- Migration -----


@router.get("/migration/status", response_model=BaseResponse[MigrationStatusResponse])
async def migration_status(current_user: CurrentUser, db: DBSession):
    """Count the caller's properties that are not linked to an owner yet."""
    status = await migration.check_migration_status(db, current_user.id)
    return BaseResponse(success=True, data=status)


@router.post("/migration", response_model=BaseResponse[MigrationResultResponse])
async def migrate_properties(current_user: CurrentUser, db: DBSession):
    """Link the caller's legacy properties to an owner."""
    status = await migration.check_migration_status(db, current_user.id)
    if status.needs_migration == 0:
        return BaseResponse(
            success=True,
            message="No properties need migration",
            data=MigrationResultResponse(
                skipped_count=status.already_migrated, total_users=1
            ),
        )
    result = await migration.migrate_properties_to_ownership_model(
        db, current_user.id
    )
    return BaseResponse(success=True, message="Migration complete", data=result)


# ----- Single owner -----


@router.get("/{owner_id}", response_model=BaseResponse[OwnerWithRoleResponse])
async def get_owner(owner_id: UUID, current_user: CurrentUser, db: DBSession):
    owner = await services.get_owner(db, current_user.id, owner_id)
    return BaseResponse(success=True, data=owner)


@router.put("/{owner_id}", response_model=BaseResponse[OwnerResponse])
async def update_owner(
    owner_id: UUID, data: OwnerUpdate, current_user: CurrentUser, db: DBSession
):
    owner = await services.update_owner(db, current_user.id, owner_id, data)
    return BaseResponse(
        success=True,
        message="Owner updated successfully",
        data=OwnerResponse.model_validate(owner),
    )


@router.delete("/{owner_id}", response_model=BaseResponse[DeletedResponse])
async def delete_owner(owner_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_owner(db, current_user.id, owner_id)
    return BaseResponse(
        success=True,
        message="Owner deleted successfully",
        data=DeletedResponse(id=owner_id),
    )


# ----- Team -----


@router.get("/{owner_id}/users", response_model=BaseResponse[list[OwnerUserResponse]])
async def list_owner_users(owner_id: UUID, current_user: CurrentUser, db: DBSession):
    users = await services.get_owner_users(db, current_user.id, owner_id)
    return BaseResponse(success=True, data=users)


@router.put(
    "/{owner_id}/users/{member_id}", response_model=BaseResponse[UserOwnerResponse]
)
async def update_user_role(
    owner_id: UUID,
    member_id: str,
    data: RoleUpdate,
    current_user: CurrentUser,
    db: DBSession,
):
    link = await services.update_user_role(
        db, current_user.id, owner_id, member_id, data.role
    )
    return BaseResponse(
        success=True,
        message="Role updated successfully",
        data=UserOwnerResponse.model_validate(link),
    )


@router.delete(
    "/{owner_id}/users/{member_id}", response_model=BaseResponse[DeletedResponse]
)
async def remove_user_from_owner(
    owner_id: UUID, member_id: str, current_user: CurrentUser, db: DBSession
):
    await services.remove_user_from_owner(db, current_user.id, owner_id, member_id)
    return BaseResponse(
        success=True,
        message="User removed successfully",
        data=DeletedResponse(id=member_id),
    )


# ----- Invitations (owner side) -----


@router.get(
    "/{owner_id}/invitations",
    response_model=BaseResponse[list[InvitationResponse]],
)
async def list_invitations(owner_id: UUID, current_user: CurrentUser, db: DBSession):
    invitations = await services.get_owner_invitations(db, current_user.id, owner_id)
    return BaseResponse(
        success=True, data=[invitation_response(i) for i in invitations]
    )


@router.post("/{owner_id}/invitations", response_model=BaseResponse[InvitationResponse])
async def invite_user(
    owner_id: UUID,
    data: InvitationCreate,
    current_user: CurrentUser,
    db: DBSession,
):
    invitation = await services.invite_user_to_owner(
        db, current_user.id, owner_id, data
    )
    return BaseResponse(
        success=True,
        message="Invitation sent successfully",
        data=invitation_response(invitation),
    )
