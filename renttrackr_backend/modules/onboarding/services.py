"""Onboarding checklist: owner, then property, then tenant, then lease."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..leases import crud as lease_crud
from ..owners import crud as owner_crud
from ..properties import crud as property_crud
from ..tenants import crud as tenant_crud
from .schemas import OnboardingStatusResponse, OnboardingStep, OnboardingStepKey


def build_steps(
    owner_count: int,
    property_count: int,
    tenant_count: int,
    lease_count: int,
    first_tenant_id: uuid.UUID | None = None,
) -> list[OnboardingStep]:
    if first_tenant_id is not None:
        lease_href = f"/dashboard/tenants/{first_tenant_id}"
        lease_text = "Add Lease"
    else:
        lease_href = "/dashboard/tenants"
        lease_text = "Add Tenant First"

    return [
        OnboardingStep(
            key=OnboardingStepKey.OWNER,
            title="Add Owner",
            description="Create an owner (you or your LLC) to organize your properties",
            complete=owner_count > 0,
            cta_href="/dashboard/owners",
            cta_text="Add Owner",
        ),
        OnboardingStep(
            key=OnboardingStepKey.PROPERTY,
            title="Add Property",
            description="Add your first rental property to start tracking",
            complete=property_count > 0,
            cta_href="/dashboard/properties/new",
            cta_text="Add Property",
        ),
        OnboardingStep(
            key=OnboardingStepKey.TENANT,
            title="Add Tenant",
            description="Add tenants to track leases and payments",
            complete=tenant_count > 0,
            cta_href="/dashboard/tenants/new",
            cta_text="Add Tenant",
        ),
        OnboardingStep(
            key=OnboardingStepKey.LEASE,
            title="Add Lease",
            description="Create a lease for your tenant to enable rent tracking",
            complete=lease_count > 0,
            cta_href=lease_href,
            cta_text=lease_text,
        ),
    ]


async def get_onboarding_status(
    db: AsyncSession, user_id: str
) -> OnboardingStatusResponse:
    owner_count = await owner_crud.count_owners_for_user(db, user_id)
    property_count = await property_crud.count_properties(db, user_id)
    tenant_count = await tenant_crud.count_tenants(db, user_id)
    lease_count = await lease_crud.count_leases(db, user_id)

    first_tenant_id = None
    if tenant_count > 0:
        first_tenant = await tenant_crud.get_first_tenant(db, user_id)
        first_tenant_id = first_tenant.id if first_tenant else None

    steps = build_steps(
        owner_count, property_count, tenant_count, lease_count, first_tenant_id
    )
    return OnboardingStatusResponse(
        owner_count=owner_count,
        property_count=property_count,
        tenant_count=tenant_count,
        lease_count=lease_count,
        steps=steps,
        is_complete=all(step.complete for step in steps),
        show_welcome=not any((owner_count, property_count, tenant_count, lease_count)),
    )
