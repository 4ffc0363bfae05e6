"""Global search across actions, pages and the user's records."""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...config import settings
from ...core.logging import get_logger
from . import crud
from .catalog import CATALOG, matches
from .schemas import SearchResult, SearchResultType

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2
PER_TYPE_LIMIT = 3
# Enough keyword hits to skip the database entirely
STATIC_SHORT_CIRCUIT = 8

TYPE_PRIORITY = {
    SearchResultType.ACTION: 0,
    SearchResultType.PAGE: 1,
    SearchResultType.PROPERTY: 2,
    SearchResultType.TENANT: 3,
    SearchResultType.OWNER: 4,
    SearchResultType.EXPENSE: 5,
    SearchResultType.UNIT: 6,
    SearchResultType.RENOVATION: 7,
}


def match_catalog(query: str) -> list[SearchResult]:
    return [
        SearchResult(
            type=entry.type,
            id=entry.href,
            title=entry.title,
            subtitle=entry.subtitle,
            href=entry.href,
        )
        for entry in CATALOG
        if matches(entry, query)
    ]


def rank(results: list[SearchResult]) -> list[SearchResult]:
    return sorted(
        results, key=lambda r: (TYPE_PRIORITY[r.type], r.title.casefold())
    )


async def _run_isolated(
    session_factory: async_sessionmaker[AsyncSession], search, *args
) -> list[SearchResult]:
    async with session_factory() as session:
        return await search(session, *args)


async def global_search(
    db: AsyncSession,
    user_id: str,
    query: str,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> list[SearchResult]:
    """Search actions, pages and records matching ``query``.

    With a ``session_factory`` the per-type lookups run concurrently, each on
    its own session; otherwise they run one after another on ``db``.
    """
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    limit = settings.search_result_limit
    results = match_catalog(query)
    if len(results) >= STATIC_SHORT_CIRCUIT:
        return results[:limit]

    term = f"%{query}%"
    args = (user_id, term, PER_TYPE_LIMIT)
    if session_factory is not None:
        batches = await asyncio.gather(
            *(_run_isolated(session_factory, search, *args) for search in crud.SEARCHES)
        )
    else:
        batches = [await search(db, *args) for search in crud.SEARCHES]

    for batch in batches:
        results.extend(batch)

    logger.debug(
        "Global search", extra={"user_id": user_id, "result_count": len(results)}
    )
    return rank(results)[:limit]
