from renttrackr_backend.modules.search.catalog import CATALOG, matches
from renttrackr_backend.modules.search.schemas import SearchResult, SearchResultType
from renttrackr_backend.modules.search.services import global_search, match_catalog, rank


def test_keyword_matches_both_ways():
    add_tenant = next(entry for entry in CATALOG if entry.title == "Add Tenant")
    assert matches(add_tenant, "Add Tenant")
    assert matches(add_tenant, "add ten")
    assert not matches(add_tenant, "parking")


def test_catalog_results_rank_actions_before_pages():
    results = rank(match_catalog("add tenant"))

    titles = [result.title for result in results]
    assert titles[0] == "Add Tenant"
    assert "Tenants" in titles
    assert results[0].type == SearchResultType.ACTION
    assert results[-1].type == SearchResultType.PAGE


def test_rank_orders_by_type_then_title():
    results = [
        SearchResult(type=SearchResultType.TENANT, id="t", title="bob", href="/t"),
        SearchResult(type=SearchResultType.PROPERTY, id="p2", title="Zeta", href="/p"),
        SearchResult(type=SearchResultType.PROPERTY, id="p1", title="alpha", href="/p"),
    ]
    assert [r.id for r in rank(results)] == ["p1", "p2", "t"]


async def test_short_query_returns_nothing():
    assert await global_search(None, "user_1", " a ") == []


async def test_many_catalog_hits_skip_the_database():
    results = await global_search(None, "user_1", "add")

    assert len(results) == 8
    assert {result.type for result in results} == {SearchResultType.ACTION}
    assert "Add Lease" in [result.title for result in results]
