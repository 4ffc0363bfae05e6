import uuid
from datetime import date

import pytest

from renttrackr_backend.core.exceptions import NotFoundError, PermissionError
from renttrackr_backend.modules.access import services as access
from renttrackr_backend.modules.owners import crud as owner_crud
from renttrackr_backend.modules.owners.models import OwnerRole, OwnerType
from renttrackr_backend.modules.payments.models import Payment
from renttrackr_backend.modules.payments import services as payment_services
from renttrackr_backend.modules.tenants import crud as tenant_crud

from .conftest import add_rental, add_user


async def _share_with(session, property_id, member_id: str, role: OwnerRole):
    owner = await owner_crud.create_owner(
        session, name="Oak Holdings", type=OwnerType.LLC
    )
    await owner_crud.create_user_owner(session, member_id, owner.id, role)
    await owner_crud.create_property_owner(session, property_id, owner.id, 100)
    return owner


async def test_creator_reaches_the_whole_chain(async_session):
    await add_user(async_session, "owner_1")
    property_obj, unit, tenant, lease = await add_rental(async_session, "owner_1")
    payment = Payment(lease_id=lease.id, amount=1000, date=date(2024, 1, 1))
    async_session.add(payment)
    await async_session.commit()

    assert (await access.ensure_property_access(async_session, "owner_1", property_obj.id)).id == property_obj.id
    assert (await access.ensure_unit_access(async_session, "owner_1", unit.id)).id == unit.id
    assert (await access.ensure_tenant_access(async_session, "owner_1", tenant.id)).id == tenant.id
    assert (await access.ensure_lease_access(async_session, "owner_1", lease.id)).id == lease.id
    assert (await access.ensure_payment_access(async_session, "owner_1", payment.id)).id == payment.id


async def test_other_users_see_not_found(async_session):
    await add_user(async_session, "owner_1")
    await add_user(async_session, "stranger")
    property_obj, _, tenant, lease = await add_rental(async_session, "owner_1")
    await async_session.commit()

    with pytest.raises(NotFoundError):
        await access.ensure_property_access(async_session, "stranger", property_obj.id)
    with pytest.raises(NotFoundError):
        await access.ensure_tenant_access(async_session, "stranger", tenant.id)
    with pytest.raises(NotFoundError):
        await access.ensure_lease_access(async_session, "stranger", lease.id)
    with pytest.raises(NotFoundError):
        await access.ensure_property_access(async_session, "owner_1", uuid.uuid4())


async def test_tenant_without_unit_uses_its_property(async_session):
    await add_user(async_session, "owner_1")
    _, unit, tenant, _ = await add_rental(async_session, "owner_1", unit_number=None)
    await async_session.commit()

    assert unit is None
    found = await access.ensure_tenant_access(async_session, "owner_1", tenant.id)
    assert found.id == tenant.id
    assert await tenant_crud.count_tenants(async_session, "owner_1") == 1


async def test_viewer_reads_but_cannot_write(async_session):
    await add_user(async_session, "owner_1")
    await add_user(async_session, "viewer")
    property_obj, _, tenant, _ = await add_rental(async_session, "owner_1")
    await _share_with(async_session, property_obj.id, "viewer", OwnerRole.VIEWER)
    await async_session.commit()

    await access.ensure_tenant_access(async_session, "viewer", tenant.id)
    with pytest.raises(NotFoundError):
        await access.ensure_property_access(
            async_session, "viewer", property_obj.id, write=True
        )


async def test_editor_can_write_through_owner(async_session):
    await add_user(async_session, "owner_1")
    await add_user(async_session, "editor")
    property_obj, _, _, _ = await add_rental(async_session, "owner_1")
    await _share_with(async_session, property_obj.id, "editor", OwnerRole.EDITOR)
    await async_session.commit()

    found = await access.ensure_property_access(
        async_session, "editor", property_obj.id, write=True
    )
    assert found.id == property_obj.id
    assert property_obj.id in await access.accessible_property_ids(
        async_session, "editor", write=True
    )


async def test_owner_role_checks(async_session):
    await add_user(async_session, "admin")
    await add_user(async_session, "viewer")
    owner = await owner_crud.create_owner(async_session, name="Oak", type=OwnerType.LLC)
    await owner_crud.create_user_owner(async_session, "admin", owner.id, OwnerRole.ADMIN)
    await owner_crud.create_user_owner(async_session, "viewer", owner.id, OwnerRole.VIEWER)
    await async_session.commit()

    assert await access.ensure_owner_role(async_session, "admin", owner.id, [OwnerRole.ADMIN]) == OwnerRole.ADMIN
    with pytest.raises(PermissionError) as exc_info:
        await access.ensure_owner_role(async_session, "viewer", owner.id, access.WRITE_ROLES)
    assert exc_info.value.message == "Unauthorized - Admin or Editor access required"
    with pytest.raises(PermissionError):
        await access.ensure_owner_role(async_session, "nobody", owner.id)


async def test_pending_and_overdue_for_active_leases(async_session):
    await add_user(async_session, "owner_1")
    _, _, _, lease = await add_rental(
        async_session, "owner_1", start=date(2024, 1, 5), end=date(2024, 12, 31)
    )
    async_session.add(Payment(lease_id=lease.id, amount=1000, date=date(2024, 1, 5)))
    await async_session.commit()

    status = await payment_services.get_pending_and_overdue(
        async_session, "owner_1", today=date(2024, 2, 10)
    )

    assert status.pending == []
    assert len(status.overdue) == 1
    assert status.overdue[0].due_date == date(2024, 2, 5)
    assert status.overdue[0].tenant_name == "Jane Doe"
    assert status.overdue[0].unit_number == "1A"
    assert status.total_overdue == 1000
