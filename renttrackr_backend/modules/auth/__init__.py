"""Bearer-token authentication for the RentTrackr API."""

from .dependencies import CurrentUser, get_current_user, get_synced_user
from .jwt_service import create_access_token, decode_access_token
from .schemas import AuthenticatedUser

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_synced_user",
    "create_access_token",
    "decode_access_token",
    "AuthenticatedUser",
]
