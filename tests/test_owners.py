from datetime import timedelta
import logging

import pytest

from renttrackr_backend.core.exceptions import (
    BusinessLogicError,
    NotFoundError,
    PermissionError,
    ValidationError,
)
from renttrackr_backend.core.utils import utc_now
from renttrackr_backend.modules.owners import crud, migration, services
from renttrackr_backend.modules.owners.models import InvitationStatus, OwnerRole
from renttrackr_backend.modules.owners.schemas import (
    InvitationCreate,
    OwnerCreate,
    PropertyOwnerCreate,
)
from renttrackr_backend.modules.properties import services as property_services
from renttrackr_backend.modules.properties.schemas import PropertyCreate

from .conftest import add_user


@pytest.fixture
async def team(async_session):
    """An owner administered by ``admin`` with ``member`` registered but unlinked."""
    await add_user(async_session, "admin", "Ada")
    await add_user(async_session, "member", "Max")
    await async_session.commit()
    return await services.create_owner(
        async_session, "admin", OwnerCreate(name="  Oak Holdings  ", type="llc")
    )


async def _invite_and_accept(session, owner_id, role=OwnerRole.EDITOR):
    invitation = await services.invite_user_to_owner(
        session, "admin", owner_id, InvitationCreate(email="Max@Example.com", role=role)
    )
    return await services.accept_invitation(session, "member", invitation.token)


async def test_creator_becomes_admin(async_session, team):
    assert team.name == "Oak Holdings"
    owners = await services.get_user_owners(async_session, "admin")
    assert [(o.name, o.role) for o in owners] == [("Oak Holdings", OwnerRole.ADMIN)]


async def test_invitation_grants_role_once(async_session, team):
    invitation = await services.invite_user_to_owner(
        async_session, "admin", team.id, InvitationCreate(email="Max@Example.com")
    )
    assert invitation.email == "max@example.com"
    assert invitation.status == InvitationStatus.PENDING

    link = await services.accept_invitation(async_session, "member", invitation.token)
    assert link.role == OwnerRole.VIEWER

    with pytest.raises(BusinessLogicError, match="no longer valid"):
        await services.accept_invitation(async_session, "member", invitation.token)


async def test_reinviting_replaces_pending_invitation(async_session, team):
    first = await services.invite_user_to_owner(
        async_session, "admin", team.id, InvitationCreate(email="max@example.com")
    )
    await services.invite_user_to_owner(
        async_session, "admin", team.id, InvitationCreate(email="max@example.com")
    )

    invitations = await services.get_owner_invitations(async_session, "admin", team.id)
    assert len(invitations) == 1
    assert invitations[0].token != first.token


async def test_expired_invitation_is_marked(async_session, team, caplog):
    invitation = await services.invite_user_to_owner(
        async_session, "admin", team.id, InvitationCreate(email="max@example.com")
    )
    await crud.update_invitation(
        async_session, invitation, expires_at=utc_now() - timedelta(minutes=1)
    )
    await async_session.commit()

    caplog.set_level(logging.WARNING, logger="renttrackr_backend")
    with pytest.raises(BusinessLogicError, match="expired"):
        await services.accept_invitation(async_session, "member", invitation.token)

    warnings = [
        r.getMessage() for r in caplog.records if r.name.startswith("renttrackr_backend")
    ]
    assert warnings == ["Invitation expired"]

    refreshed = await crud.get_invitation_by_token(async_session, invitation.token)
    assert refreshed.status == InvitationStatus.EXPIRED


async def test_unknown_token(async_session, team):
    with pytest.raises(NotFoundError):
        await services.accept_invitation(async_session, "member", "missing-token")


async def test_only_admins_invite(async_session, team):
    await _invite_and_accept(async_session, team.id, OwnerRole.EDITOR)

    with pytest.raises(PermissionError):
        await services.invite_user_to_owner(
            async_session, "member", team.id, InvitationCreate(email="x@example.com")
        )


async def test_last_admin_cannot_leave_or_be_demoted(async_session, team):
    with pytest.raises(BusinessLogicError, match="last admin"):
        await services.remove_user_from_owner(async_session, "admin", team.id, "admin")
    with pytest.raises(BusinessLogicError, match="last admin"):
        await services.update_user_role(
            async_session, "admin", team.id, "admin", OwnerRole.VIEWER
        )

    await _invite_and_accept(async_session, team.id)
    await services.update_user_role(
        async_session, "admin", team.id, "member", OwnerRole.ADMIN
    )
    link = await services.update_user_role(
        async_session, "admin", team.id, "admin", OwnerRole.EDITOR
    )
    assert link.role == OwnerRole.EDITOR


async def test_member_may_leave(async_session, team):
    await _invite_and_accept(async_session, team.id, OwnerRole.VIEWER)

    await services.remove_user_from_owner(async_session, "member", team.id, "member")

    users = await services.get_owner_users(async_session, "admin", team.id)
    assert [u.id for u in users] == ["admin"]


async def test_shares_never_exceed_full_ownership(async_session, team):
    property_obj = await property_services.create_property(
        async_session, "admin", PropertyCreate(address="12 Oak St", owner_id=team.id)
    )
    second = await services.create_owner(
        async_session, "admin", OwnerCreate(name="Second Owner")
    )

    with pytest.raises(ValidationError, match="cannot exceed 100%"):
        await services.add_property_owner(
            async_session,
            "admin",
            PropertyOwnerCreate(
                property_id=property_obj.id, owner_id=second.id, ownership_percentage=10
            ),
        )

    links = await services.get_property_owners(async_session, "admin", property_obj.id)
    await services.update_property_owner(
        async_session, "admin", links[0].property_owner_id, 60
    )
    link = await services.add_property_owner(
        async_session,
        "admin",
        PropertyOwnerCreate(
            property_id=property_obj.id, owner_id=second.id, ownership_percentage=40
        ),
    )
    assert link.ownership_percentage == 40

    with pytest.raises(BusinessLogicError, match="already linked"):
        await services.add_property_owner(
            async_session,
            "admin",
            PropertyOwnerCreate(
                property_id=property_obj.id, owner_id=second.id, ownership_percentage=1
            ),
        )


async def test_migration_links_legacy_properties(async_session):
    await add_user(async_session, "legacy", "Lee")
    await property_services.create_property(
        async_session, "legacy", PropertyCreate(address="1 First Ave")
    )
    await property_services.create_property(
        async_session, "legacy", PropertyCreate(address="2 Second Ave")
    )

    before = await migration.check_migration_status(async_session, "legacy")
    assert (before.total_properties, before.needs_migration) == (2, 2)

    result = await migration.migrate_properties_to_ownership_model(async_session, "legacy")
    assert (result.migrated_count, result.skipped_count, result.total_users) == (2, 0, 1)

    owners = await services.get_user_owners(async_session, "legacy")
    assert [(o.name, o.role) for o in owners] == [("Lee", OwnerRole.ADMIN)]

    again = await migration.migrate_properties_to_ownership_model(async_session, "legacy")
    assert (again.migrated_count, again.skipped_count) == (0, 2)

    after = await migration.check_migration_status(async_session, "legacy")
    assert after.already_migrated == 2
