"""Owner entities, their team roles, property shares and invitations."""

from .models import (
    Invitation,
    InvitationStatus,
    Owner,
    OwnerRole,
    OwnerType,
    PropertyOwner,
    UserOwner,
)

__all__ = [
    "Invitation",
    "InvitationStatus",
    "Owner",
    "OwnerRole",
    "OwnerType",
    "PropertyOwner",
    "UserOwner",
]
