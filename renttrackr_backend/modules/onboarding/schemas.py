"""Onboarding checklist schemas."""

from enum import Enum

from pydantic import BaseModel


class OnboardingStepKey(str, Enum):
    OWNER = "owner"
    PROPERTY = "property"
    TENANT = "tenant"
    LEASE = "lease"


class OnboardingStep(BaseModel):
    key: OnboardingStepKey
    title: str
    description: str
    complete: bool = False
    cta_href: str
    cta_text: str


class OnboardingStatusResponse(BaseModel):
    owner_count: int = 0
    property_count: int = 0
    tenant_count: int = 0
    lease_count: int = 0
    steps: list[OnboardingStep] = []
    is_complete: bool = False
    show_welcome: bool = True
