"""Global search API route."""

from fastapi import APIRouter, Query

from ...database import DBSession, SessionFactory
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import SearchResult

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", response_model=BaseResponse[list[SearchResult]])
async def global_search(
    current_user: CurrentUser,
    db: DBSession,
    session_factory: SessionFactory,
    q: str = Query("", max_length=200),
):
    """Search actions, pages and the caller's records."""
    results = await services.global_search(db, current_user.id, q, session_factory)
    return BaseResponse(success=True, data=results)
